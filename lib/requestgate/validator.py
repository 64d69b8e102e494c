"""
Decide whether an incoming request, and which of its samples, may be
published.

A request is checked at two levels.  The request itself must have an id and,
when the CMO request filter is enabled, be flagged as a CMO request.  Each of
its samples is then checked with the rule set matching the request's
classification (see :mod:`requestgate.rules`), and invalid samples are
dropped.

The three possible results are:

* every sample is valid: the request is accepted as is
* some samples are valid: the request is accepted with only those samples,
  and its status is logged
* no samples are valid: the request is rejected, and its status is logged

Statuses are always logged with the original request JSON.
"""
import enum
import logging
from typing import Any, Dict, List, NamedTuple, Optional
from jsonschema import Draft7Validator, ValidationError
from .config import ValidatorConfig
from .json import as_json
from .resolve import MalformedRequestError, is_cmo_request, load_request, resolve_request_id
from .rules import is_valid_cmo_sample, is_valid_non_cmo_sample
from .status import LoggingRequestStatusLogger, RequestStatusLogger, StatusType
from .utils import is_blank


LOG = logging.getLogger(__name__)

SAMPLES_SCHEMA = {
    "type": "array",
    "items": {
        "type": ["object", "null"]
    }
}

samples_schema = Draft7Validator(SAMPLES_SCHEMA)


@enum.unique
class Outcome(enum.Enum):
    REJECTED         = "rejected"
    ACCEPTED_FULL    = "accepted"
    ACCEPTED_PARTIAL = "accepted with missing samples"


@enum.unique
class RejectionReason(enum.Enum):
    BLANK_INPUT        = "blank input"
    MISSING_REQUEST_ID = "missing request id"
    FILTERED_BY_POLICY = "non-CMO request filtered"
    NO_VALID_SAMPLES   = "no valid samples"


class ValidationOutcome(NamedTuple):
    """
    Result of validating one request.

    *document* is the request to publish, with invalid samples removed, or
    ``None`` if the request was rejected.  *reason* is set only when the
    request was rejected.
    """
    outcome: Outcome
    document: Optional[Dict[str, Any]] = None
    reason: Optional[RejectionReason] = None
    request_id: Optional[str] = None

    @property
    def json(self) -> Optional[str]:
        if self.document is None:
            return None
        return as_json(self.document)


def rejected(reason: RejectionReason, request_id: str = None) -> ValidationOutcome:
    return ValidationOutcome(Outcome.REJECTED, reason = reason, request_id = request_id)


class RequestValidator:
    """
    Validates and filters request JSON documents.

    *config* controls the CMO request filter.  *status_logger* receives the
    original request JSON for requests which lose samples or are rejected
    for missing data.
    """
    def __init__(self,
                 config: ValidatorConfig = None,
                 status_logger: RequestStatusLogger = None):
        self.config = config or ValidatorConfig()
        self.status_logger = status_logger or LoggingRequestStatusLogger()

    def filter_valid_request(self, request_json: Optional[str]) -> Optional[str]:
        """
        Returns *request_json* with its invalid samples removed, or ``None`` if
        the request should not be published.
        """
        return self.evaluate(request_json).json

    def is_request_metadata_valid(self, request_json: Optional[str]) -> bool:
        """
        Returns ``True`` if *request_json* passes the request level checks.

        Samples are not checked and no status is logged; this is a pre-check
        only.
        """
        if is_blank(request_json):
            return False

        document = load_request(request_json)

        return self._request_rejection(document) is None

    def evaluate(self, request_json: Optional[str]) -> ValidationOutcome:
        """
        Validates *request_json* and returns a :class:`ValidationOutcome`.

        Raises :exc:`~requestgate.json.JSONDecodeError` if *request_json* is
        not JSON, :exc:`~requestgate.json.NonFiniteNumberError` if it holds a
        number which can't be written back out as JSON, and
        :exc:`~requestgate.resolve.MalformedRequestError` if it is not shaped
        like a request.  No status is logged in any of these cases.
        """
        if is_blank(request_json):
            return rejected(RejectionReason.BLANK_INPUT)

        assert request_json is not None

        document = load_request(request_json)
        request_id = resolve_request_id(document)
        rejection = self._request_rejection(document)

        if rejection is RejectionReason.MISSING_REQUEST_ID:
            self.status_logger.log_request_status(request_json, StatusType.MISSING_REQUIRED_FIELDS)

        if rejection is not None:
            return rejected(rejection, request_id)

        samples = request_samples(document)
        valid_samples = self.valid_samples(samples, is_cmo_request(document))

        if not valid_samples:
            LOG.error(f"Request «{request_id}» failed sanity checking: none of its {len(samples)} samples are valid")
            self.status_logger.log_request_status(request_json, StatusType.FAILED_SANITY_CHECK)
            return rejected(RejectionReason.NO_VALID_SAMPLES, request_id)

        if len(valid_samples) < len(samples):
            LOG.info(f"Request «{request_id}» passed sanity checking with missing samples: "
                     f"{len(valid_samples)} of {len(samples)} valid")
            self.status_logger.log_request_status(request_json, StatusType.MISSING_REQUIRED_FIELDS)

            filtered = { **document, "samples": valid_samples }

            return ValidationOutcome(Outcome.ACCEPTED_PARTIAL, filtered, request_id = request_id)

        LOG.debug(f"Request «{request_id}» passed sanity checking with all {len(samples)} samples")

        return ValidationOutcome(Outcome.ACCEPTED_FULL, document, request_id = request_id)

    def valid_samples(self, samples: List[Any], is_cmo: bool) -> List[Any]:
        """
        Returns the subsequence of *samples* which are valid for a CMO or
        non-CMO request, per *is_cmo*.
        """
        valid = []

        for index, sample in enumerate(samples):
            if is_cmo:
                passed = is_valid_cmo_sample(sample, has_request_id = True)
            else:
                passed = is_valid_non_cmo_sample(sample)

            if passed:
                valid.append(sample)
            else:
                LOG.debug(f"Dropping invalid sample #{index}: {sample!r}")

        return valid

    def _request_rejection(self, document: Dict[str, Any]) -> Optional[RejectionReason]:
        """
        Returns the reason *document* fails the request level checks, or
        ``None`` if it passes.
        """
        request_id = resolve_request_id(document)

        if request_id is None:
            LOG.info("Request failed sanity checking: missing request id")
            return RejectionReason.MISSING_REQUEST_ID

        if self.config.cmo_request_filter and not is_cmo_request(document):
            LOG.info(f"CMO request filter enabled, skipping non-CMO request «{request_id}»")
            return RejectionReason.FILTERED_BY_POLICY

        return None


def request_samples(document: Dict[str, Any]) -> List[Any]:
    """
    Returns the ``samples`` array of a request *document*.

    Raises :exc:`~requestgate.resolve.MalformedRequestError` if it is missing
    or is not an array of objects.

    >>> request_samples({"samples": [{"igoId": "1456_T_1"}, None]})
    [{'igoId': '1456_T_1'}, None]
    """
    samples = document.get("samples")

    try:
        samples_schema.validate(samples)
    except ValidationError as error:
        raise MalformedRequestError(f"request samples are malformed: {error.message}") from None

    return samples
