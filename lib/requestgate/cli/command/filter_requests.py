"""
Filter requests down to their publishable samples.
"""
import click
import logging
from collections import Counter
from typing import Any, Dict, Iterable, Iterator
from requestgate.cli import cli
from requestgate.json import dump_ndjson
from requestgate.validator import Outcome, RequestValidator
from . import with_request_validator


LOG = logging.getLogger(__name__)


@cli.command("filter")
@with_request_validator

@click.argument("requests_file",
    metavar = "<requests.ndjson>",
    type = click.File("r"))

def filter_requests(requests_file, validator: RequestValidator):
    """
    Filter the invalid samples out of each request in <requests.ndjson>.

    <requests.ndjson> must be a newline-delimited JSON file containing one
    request document per line, or - to read from stdin.  Blank lines are
    skipped.

    Each request which can be published is written to stdout as a line of
    JSON, with its invalid samples removed.  Requests which lost samples or
    were rejected for missing data have their status logged.
    """
    outcomes: Counter = Counter()

    dump_ndjson(publishable_requests(requests_file, validator, outcomes))

    LOG.info(f"Filtered {sum(outcomes.values()):,} requests: "
             f"{outcomes[Outcome.ACCEPTED_FULL]:,} accepted, "
             f"{outcomes[Outcome.ACCEPTED_PARTIAL]:,} accepted with missing samples, "
             f"{outcomes[Outcome.REJECTED]:,} rejected or skipped")


def publishable_requests(lines: Iterable[str],
                         validator: RequestValidator,
                         outcomes: Counter) -> Iterator[Dict[str, Any]]:
    """
    Yields the filtered request document for each non-blank line of
    *lines* which can be published, tallying each outcome in *outcomes*.
    """
    for line in lines:
        if not line.strip():
            continue

        outcome = validator.evaluate(line.rstrip("\n"))

        outcomes[outcome.outcome] += 1

        if outcome.document is not None:
            yield outcome.document
