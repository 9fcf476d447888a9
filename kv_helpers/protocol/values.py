"""
Stored Value Conversion

Redis keeps every scalar as a string. This module converts values to their
stored form on the way in and guesses the original type on the way out.

Conversion table:
    Python value      stored form
    ------------      -----------
    UNDEFINED         "undefined"
    None              "null"
    True / False      "true" / "false"
    123 / 10.5        "123" / "10.5"
    "abc"             "abc"
"""

import re
from typing import Any, Union

# Decimal literal with optional sign, fraction and exponent. Hex, inf and
# nan spellings are deliberately not numbers here.
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_RE = re.compile(r"[+-]?\d+")


class _Undefined:
    """Marker for a value that was stored as the literal "undefined"."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()


def is_empty(item: Any) -> bool:
    """
    Check whether a stored item represents "no value".

    Empty items are None, UNDEFINED, False, the empty string, numeric zero
    and the strings "0", "null" and "undefined".
    """
    if item is None or item is UNDEFINED or item is False:
        return True
    if isinstance(item, str):
        return item in ("", "0", "null", "undefined")
    if isinstance(item, (int, float)) and not isinstance(item, bool):
        return item == 0
    return False


def is_numeric(item: Any) -> bool:
    """
    Check whether an item is a number or a string holding exactly one.

    Partially numeric strings such as "123abc" are not numeric.
    """
    if isinstance(item, bool):
        return False
    if isinstance(item, (int, float)):
        return True
    if isinstance(item, str):
        return _NUMBER_RE.fullmatch(item.strip()) is not None
    return False


def _to_number(item: Union[str, int, float]) -> Union[int, float]:
    if isinstance(item, str):
        text = item.strip()
        if _INTEGER_RE.fullmatch(text):
            try:
                return int(text)
            except ValueError:
                # Past the int/str digit limit; keep the text as stored.
                return item
        item = float(text)
    if isinstance(item, float) and item.is_integer():
        return int(item)
    return item


def from_string(item: Any) -> Any:
    """
    Convert a stored item back into a typed scalar.

    Rules, applied in order:
        1. "undefined" -> UNDEFINED
        2. empty items (see is_empty) -> None
        3. non-numeric items -> returned unchanged
        4. numbers -> int when the value has no fractional part, else float

    Note that "0" and 0 are empty and come back as None, not 0.

    Examples:
        >>> from_string("192")
        192
        >>> from_string("10.11")
        10.11
        >>> from_string("abc")
        'abc'
        >>> from_string("0") is None
        True
    """
    if item is UNDEFINED or item == "undefined":
        return UNDEFINED
    if is_empty(item):
        return None
    if not is_numeric(item):
        return item
    return _to_number(item)


def to_string(value: Any) -> str:
    """Convert a scalar into the form it is stored in."""
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
