"""
Standardized JSON conventions.
"""
import json
from datetime import datetime
from math import isfinite
from typing import Iterable
from .utils import contextualize_char, shorten_left


def as_json(value):
    """
    Converts *value* to a JSON string using our custom :class:`JsonEncoder`.

    >>> as_json({"requestId": "1456_T", "samples": []})
    '{"requestId": "1456_T", "samples": []}'
    >>> as_json({"logged": datetime(2026, 10, 18, 9, 30)})
    '{"logged": "2026-10-18T09:30:00"}'
    """
    return json.dumps(value, allow_nan = False, cls = JsonEncoder)


def load_json(value):
    """
    Converts *value* from a JSON string with better error messages.

    Raises an :exc:`requestgate.json.JSONDecodeError` which provides improved
    error messaging, compared to :exc:`json.JSONDecodeError`, when
    stringified.

    Numbers which can't be represented as finite floats, and the non-standard
    ``NaN`` and ``Infinity`` literals, raise :exc:`NonFiniteNumberError`
    because :func:`as_json` refuses to write them back out.

    >>> load_json('{"concentration": 1e400}')
    Traceback (most recent call last):
        ...
    requestgate.json.NonFiniteNumberError: number 1e400 is out of range
    >>> load_json('[NaN]')
    Traceback (most recent call last):
        ...
    requestgate.json.NonFiniteNumberError: number NaN is out of range
    """
    try:
        return json.loads(value, parse_float = parse_finite_float, parse_constant = reject_constant)
    except json.JSONDecodeError as e:
        raise JSONDecodeError(e) from e


def parse_finite_float(text: str) -> float:
    number = float(text)

    if not isfinite(number):
        raise NonFiniteNumberError(f"number {text} is out of range")

    return number


def reject_constant(text: str):
    raise NonFiniteNumberError(f"number {text} is out of range")


def dump_ndjson(iterable: Iterable) -> None:
    """
    :func:`print` *iterable* as a set of newline-delimited JSON records.
    """
    for item in iterable:
        print(as_json(item))


def load_ndjson(file: Iterable[str]) -> Iterable:
    """
    Load newline-delimited JSON records from *file*, skipping blank lines.
    """
    yield from (load_json(line) for line in file if line.strip())


class JsonEncoder(json.JSONEncoder):
    """
    Encodes Python values into JSON for non-standard objects.
    """

    def __init__(self, *args, **kwargs):
        """
        Disallows the floating point values NaN, Infinity, and -Infinity,
        which standards-compliant JSON parsers downstream reject.
        """
        kwargs["allow_nan"] = False
        super().__init__(*args, **kwargs)

    def default(self, value):
        """
        Returns *value* as JSON or raises a TypeError.

        Serializes :class:`~datetime.datetime` using
        :meth:`~datetime.datetime.isoformat()`.
        """
        if isinstance(value, datetime):
            return value.isoformat()
        else:
            return super().default(value)


class JSONDecodeError(json.JSONDecodeError):
    """
    Subclass of :class:`json.JSONDecodeError` which contextualizes the
    stringified error message by including a snippet of the JSON source input.

    It is raised by :func:`load_json` and caught by except blocks which catch
    the standard :class:`json.JSONDecodeError`.

    >>> load_json('not json')
    Traceback (most recent call last):
        ...
    requestgate.json.JSONDecodeError: Expecting value: line 1 column 1 (char 0): 'not json'

    >>> load_json('')
    Traceback (most recent call last):
        ...
    requestgate.json.JSONDecodeError: Expecting value: line 1 column 1 (char 0): (empty source document)
    """
    CONTEXT_LENGTH = 10

    def __init__(self, exc: json.JSONDecodeError):
        super().__init__(exc.msg, exc.doc, exc.pos)

    def __str__(self):
        error = super().__str__()

        if self.doc:
            if self.pos == 0 and self.msg == "Expecting value":
                # Not a JSON document at all, so show the whole thing.
                context = repr(self.doc)
            elif self.pos > 0 and self.pos == len(self.doc):
                context = "unexpected end of document: " + repr(shorten_left(self.doc, self.CONTEXT_LENGTH, "…"))
            else:
                context = repr(contextualize_char(self.doc, self.pos, self.CONTEXT_LENGTH))
        else:
            context = "(empty source document)"

        return f"{error}: {context}"


class NonFiniteNumberError(ValueError):
    """
    Raised by :func:`load_json` for numbers which are NaN, infinite, or too
    large to represent as a float.
    """
    pass
