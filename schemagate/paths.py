"""Dot-path helpers for nested, JSON-shaped maps.

Paths address fields inside nested dictionaries by joining keys with ``.``
(e.g. ``"data.userId"``). Lookups treat absence as a normal outcome and never
raise; writes never mutate their input.
"""

from collections.abc import Mapping
from typing import Any, Dict

from schemagate.types import JsonMap

_MISSING = object()


def _walk(data: Mapping, path: str) -> Any:
    current: Any = data
    for segment in path.split("."):
        if not isinstance(current, Mapping) or segment not in current:
            return _MISSING
        current = current[segment]
    return current


def get_by_path(data: Mapping, path: str, default: Any = None) -> Any:
    """Return the value stored at a dotted path, or ``default`` if absent.

    The walk stops as soon as an intermediate value is not a mapping or a
    key is missing.

    Examples:
        >>> get_by_path({"data": {"role": "admin"}}, "data.role")
        'admin'
        >>> get_by_path({"data": "flat"}, "data.role") is None
        True
    """
    value = _walk(data, path)
    return default if value is _MISSING else value


def set_by_path(data: Mapping, path: str, value: Any) -> JsonMap:
    """Return a new map with ``value`` stored at the dotted path.

    Every map along the path is copied; missing or non-mapping intermediates
    are replaced with fresh dictionaries. Siblings off the path are shared
    with the input, which is never mutated.

    Examples:
        >>> original = {"data": {}}
        >>> set_by_path(original, "data.role", "USER")
        {'data': {'role': 'USER'}}
        >>> original
        {'data': {}}
    """
    result: Dict[str, Any] = {str(key): item for key, item in data.items()}
    head, _, rest = path.partition(".")
    if not rest:
        result[head] = value
        return result

    child = data.get(head)
    if not isinstance(child, Mapping):
        child = {}
    result[head] = set_by_path(child, rest, value)
    return result


def is_blank_or_empty(value: Any) -> bool:
    """True for ``None`` and for empty or whitespace-only strings.

    Every other value, including ``0``, ``False`` and empty collections,
    counts as present.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


__all__ = [
    "get_by_path",
    "set_by_path",
    "is_blank_or_empty",
]
