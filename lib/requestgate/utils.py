"""
Utilities.
"""
from typing import Any, Optional


def is_blank(value: Optional[str]) -> bool:
    """
    Returns ``True`` if *value* is ``None``, empty, or only whitespace.

    >>> is_blank(None)
    True
    >>> is_blank("  \\t")
    True
    >>> is_blank(" x ")
    False
    """
    return value is None or not value.strip()


def stringify(value: Any) -> Optional[str]:
    """
    Converts a scalar JSON *value* to a string, keeping ``None`` as ``None``.

    Booleans are spelled the way JSON spells them.

    >>> stringify(None)
    >>> stringify(True)
    'true'
    >>> stringify(1456)
    '1456'
    >>> stringify("1456_T")
    '1456_T'
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def shorten_left(text, length, placeholder):
    """
    Truncate *text* from the left to a maximum *length* (if necessary),
    indicating truncation with the given *placeholder*.

    >>> shorten_left("samples", 7, "…")
    'samples'
    >>> shorten_left("igoRequestId", 6, "…")
    '…estId'
    >>> shorten_left("samples", 1, "…")
    Traceback (most recent call last):
        ...
    ValueError: maximum length (1) must be greater than length of placeholder (1)
    """
    if length <= len(placeholder):
        raise ValueError(f"maximum length ({length}) must be greater than length of placeholder ({len(placeholder)})")

    if len(text) > length:
        return placeholder + text[-(length - len(placeholder)):]
    else:
        return text


def contextualize_char(text, idx, context = 10):
    """
    Marks the *idx* char in *text* and snips out a surrounding amount of
    *context*, without copying all of *text* first.

    >>> contextualize_char('{"samples": x}', 11, context = 3)
    '…s":▸▸▸ ◂◂◂x}'
    >>> contextualize_char('{"a"}', 4, context = 100)
    '{"a"▸▸▸}◂◂◂'
    """
    if context < 0:
        raise ValueError("context must be positive")

    start = max(0, idx - context)
    end   = min(len(text), idx + context + 1)
    idx   = min(idx, context)

    start_placeholder = "…" if start > 0         else ""
    end_placeholder   = "…" if end   < len(text) else ""

    return start_placeholder + mark_char(text[start:end], idx) + end_placeholder


def mark_char(text, idx):
    """
    Prominently marks the *idx* char in *text*.

    >>> mark_char('[1, 2]', 3)
    '[1,▸▸▸ ◂◂◂2]'
    """
    return text[0:idx] + '▸▸▸' + text[idx] + '◂◂◂' + text[idx+1:]
