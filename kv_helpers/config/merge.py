"""Shallow configuration merging."""

import math
from typing import Any, Dict, Mapping, Optional

from ..protocol.values import UNDEFINED


def is_truthy(value: Any) -> bool:
    """
    Classify a value the way the stored configuration expects.

    Falsy: None, UNDEFINED, False, empty string, zero and NaN.
    Everything else is truthy, including empty containers.
    """
    if value is None or value is UNDEFINED or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    return True


def merge_objects(
        base: Optional[Mapping[str, Any]],
        override: Optional[Mapping[str, Any]],
) -> Dict[str, Any]:
    """
    Overlay the truthy values of ``override`` onto a copy of ``base``.

    Falsy override values never replace a base value. If either argument
    is falsy or not a mapping the result is an empty dict, not the other
    argument.

    Examples:
        >>> merge_objects({"foo": "123", "bar": 1}, {"foo": None, "bar": 2})
        {'foo': '123', 'bar': 2}
        >>> merge_objects(None, {"bar": 2})
        {}
    """
    if not is_truthy(base) or not is_truthy(override):
        return {}
    if not isinstance(base, Mapping) or not isinstance(override, Mapping):
        return {}

    merged = dict(base)
    for key, value in override.items():
        if is_truthy(value):
            merged[key] = value
    return merged
