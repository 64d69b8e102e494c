"""
Check request metadata without filtering samples.
"""
import click
import logging
from requestgate.cli import cli
from requestgate.json import dump_ndjson
from requestgate.resolve import get_request_id
from requestgate.validator import RequestValidator
from . import with_request_validator


LOG = logging.getLogger(__name__)


@cli.command("check")
@with_request_validator

@click.argument("requests_file",
    metavar = "<requests.ndjson>",
    type = click.File("r"))

def check_requests(requests_file, validator: RequestValidator):
    """
    Check the request level metadata of each request in <requests.ndjson>.

    <requests.ndjson> must be a newline-delimited JSON file containing one
    request document per line, or - to read from stdin.  Blank lines are
    skipped.

    For each request, a line of JSON with its "requestId" and whether it is
    "valid" is written to stdout.  Samples are not checked and no request
    statuses are logged.
    """
    dump_ndjson(
        {
            "requestId": get_request_id(line),
            "valid": validator.is_request_metadata_valid(line),
        }
        for line in requests_file
         if line.strip())
