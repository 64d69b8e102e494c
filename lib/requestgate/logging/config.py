"""
Logging config for the request gate.
"""
import os
import yaml
from importlib.resources import files


def load_stock_config(name = "default"):
    """
    Loads a built-in stock logging configuration based on *name*.
    """
    with files(__package__).joinpath(f"data/{name}.yaml").open("rb") as file:
        return load_config(file)


def load_config(config):
    """
    Loads a given logging *config* written in YAML.

    *config* may be a string or open file object, both of which are accepted as
    the first argument to :py:func:`yaml.load`.

    >>> load_config("version: 1")
    {'version': 1}
    """
    return yaml.load(config, Loader = LogConfigLoader)


class LogConfigLoader(yaml.SafeLoader):
    """
    A :py:class:`yaml.SafeLoader` subclass which implements the custom
    ``!LOG_LEVEL`` and ``!coalesce`` tags.

    >>> os.environ["LOG_LEVEL"] = "debug"
    >>> yaml.load("level: !LOG_LEVEL", Loader = LogConfigLoader)
    {'level': 'DEBUG'}

    >>> del os.environ["LOG_LEVEL"]
    >>> yaml.load('''
    ... level: !coalesce
    ...   - !LOG_LEVEL
    ...   - INFO
    ... ''', Loader = LogConfigLoader)
    {'level': 'INFO'}
    """
    pass


def log_level_constructor(loader, node):
    """
    Implements a custom YAML tag ``!LOG_LEVEL``.

    Produces the uppercased value of the ``LOG_LEVEL`` environment variable,
    or ``None`` if it's unset or empty.
    """
    level = os.environ.get("LOG_LEVEL")
    return level.upper() if level else None


def coalesce_constructor(loader, node):
    """
    Implements a custom YAML tag ``!coalesce``, which produces the first
    value in a YAML sequence that is not ``None``.
    """
    values = loader.construct_sequence(node)
    return next((value for value in values if value is not None), None)


LogConfigLoader.add_constructor("!LOG_LEVEL", log_level_constructor)
LogConfigLoader.add_constructor("!coalesce", coalesce_constructor)
