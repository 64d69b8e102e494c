"""
Commands for the request gate CLI.
"""
import click
import logging
from functools import wraps
from requestgate.config import from_environ
from requestgate.status import FileRequestStatusLogger, LoggingRequestStatusLogger
from requestgate.validator import RequestValidator

__all__ = [
    "filter_requests",
    "check_requests",
]


LOG = logging.getLogger(__name__)


def with_request_validator(command):
    """
    Decorator to provide a configured request validator to a *command*.

    The *command* callable must be a :py:class:`click.Command` instance.

    The decorated *command* is called with a ``validator`` keyword argument
    providing a :class:`~requestgate.validator.RequestValidator`.  Two new
    options are added to the *command*: ``--cmo-request-filter`` (and its
    negation), which defaults to ``REQUESTGATE_CMO_REQUEST_FILTER`` from the
    environment, and ``--status-log``, which sends request statuses to a file
    instead of the log.

    Any error raised by *command* is logged before it aborts the command.
    """
    @click.option("--cmo-request-filter/--no-cmo-request-filter",
        "cmo_request_filter",
        help = "Skip requests which are not flagged as CMO requests.  "
               "Defaults to the REQUESTGATE_CMO_REQUEST_FILTER environment variable, "
               "or off.",
        default = lambda: from_environ().cmo_request_filter)

    @click.option("--status-log",
        metavar = "<file>",
        help = "Append request statuses to this newline-delimited JSON file "
               "instead of logging them.",
        type = click.Path(dir_okay = False, writable = True))

    @wraps(command)
    def decorated(*args, cmo_request_filter, status_log, **kwargs):
        config = from_environ()._replace(cmo_request_filter = cmo_request_filter)

        LOG.debug(f"Using {config}")

        if status_log:
            status_logger = FileRequestStatusLogger(status_log)
        else:
            status_logger = LoggingRequestStatusLogger()

        kwargs["validator"] = RequestValidator(config, status_logger)

        try:
            command(*args, **kwargs)

        except Exception as error:
            LOG.error(f"Aborting with error: {error}")
            raise error from None

    return decorated
