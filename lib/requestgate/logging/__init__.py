"""
Logging for the request gate.
"""
import logging
import logging.config
import os
import sys
from .config import load_stock_config, load_config


LOG_CONFIG = os.environ.get("LOG_CONFIG")
LOG_LEVEL = os.environ.get("LOG_LEVEL")
IS_DEBUG = LOG_LEVEL and LOG_LEVEL.upper() == "DEBUG"


def configure():
    """
    Configures logging for the request gate.

    A stock configuration is loaded from the
    ``requestgate/logging/data/*.yaml`` files, chosen based on if we're
    running with ``LOG_LEVEL=debug`` or not.

    Python library warnings are captured and logged at the ``WARNING`` level.
    Uncaught exceptions are logged at the ``CRITICAL`` level before they cause
    the process to exit.

    If a custom configuration file is specified with ``LOG_CONFIG``, it is
    loaded as YAML and applied on top with
    :py:meth:`logging.config.dictConfig`.  See
    :py:class:`~requestgate.logging.config.LogConfigLoader` for the custom
    YAML tags available to it.
    """
    stock_config = load_stock_config("debug" if IS_DEBUG else "default")
    logging.config.dictConfig(stock_config)

    logging.captureWarnings(True)

    sys.excepthook = (lambda *args:
        logging.getLogger().critical("Uncaught exception:", exc_info = args)) # type: ignore

    if LOG_CONFIG:
        with open(LOG_CONFIG, "rb") as file:
            logging.config.dictConfig(load_config(file))
