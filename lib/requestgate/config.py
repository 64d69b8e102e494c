"""
Validator configuration.
"""
from os import environ
from typing import NamedTuple


class ValidatorConfig(NamedTuple):
    # Skip requests which are not flagged as CMO requests.
    cmo_request_filter: bool = False


def as_bool(value) -> bool:
    """
    Interprets an environment variable *value* as a boolean.

    >>> as_bool("TRUE"), as_bool("1"), as_bool("on")
    (True, True, True)
    >>> as_bool("false"), as_bool(""), as_bool(None)
    (False, False, False)
    """
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}


variables = [
    ("cmo_request_filter", as_bool, False),
]


def from_environ() -> ValidatorConfig:
    """
    Get config values from ``REQUESTGATE_*`` environment variables, or fall
    back to defaults.
    """
    return ValidatorConfig(**dict(
        (key, typecast(environ.get(f"REQUESTGATE_{key.upper()}", default)))
            for key, typecast, default
             in variables
    ))
