"""
Request status logging.

Requests which lose samples, or fail outright, are recorded with a status
type so they can be inspected later.  The record always carries the original
request JSON as it was received, never a filtered copy.
"""
import enum
import logging
from datetime import datetime, timezone
from threading import Lock
from typing_extensions import Protocol
from .json import as_json
from .resolve import get_request_id


LOG = logging.getLogger(__name__)


@enum.unique
class StatusType(enum.Enum):
    MISSING_REQUIRED_FIELDS = "CMO_REQUEST_MISSING_REQ_FIELDS"
    FAILED_SANITY_CHECK     = "CMO_REQUEST_FAILED_SANITY_CHECK"


class RequestStatusLogger(Protocol):
    def log_request_status(self, request_json: str, status: StatusType) -> None:
        ...


class LoggingRequestStatusLogger:
    """
    Records request statuses as ``WARNING`` log records.
    """
    def log_request_status(self, request_json: str, status: StatusType) -> None:
        LOG.warning(f"Request «{safe_request_id(request_json)}» logged with status {status.value}: {request_json}")


class FileRequestStatusLogger:
    """
    Records request statuses by appending one newline-delimited JSON record per
    status to the file at *path*.

    Each record has the keys ``logged`` (an ISO 8601 timestamp), ``status``,
    and ``request`` (the original request JSON, as a string).
    """
    def __init__(self, path):
        self.path = path
        self._lock = Lock()

    def log_request_status(self, request_json: str, status: StatusType) -> None:
        record = {
            "logged": datetime.now(timezone.utc),
            "status": status.value,
            "request": request_json,
        }

        LOG.debug(f"Appending {status.value} status to «{self.path}»")

        with self._lock, open(self.path, "a", encoding = "utf-8") as file:
            print(as_json(record), file = file)


def safe_request_id(request_json: str) -> str:
    """
    Returns the request id of *request_json* for messages, or ``unknown`` if
    it can't be determined.

    >>> safe_request_id('{"requestId": "1456_T"}')
    '1456_T'
    >>> safe_request_id('{"samples": []}')
    'unknown'
    """
    try:
        request_id = get_request_id(request_json)
    except ValueError:
        request_id = None

    return request_id or "unknown"
