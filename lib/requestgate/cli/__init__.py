"""
A command-line interface to the request gate, which validates sample request
documents and drops the samples which can't be published.
"""
import click
import logging
from typing import NoReturn


LOG = logging.getLogger(__name__)


# Base command for all other commands
@click.group(help = __doc__)
def cli() -> NoReturn:
    pass


# Load all requestgate.cli.command modules, giving them an opportunity to
# register their commands using @cli.command(…).
from .command import *
