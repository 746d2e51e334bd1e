"""Lenient field coercion for untrusted stored or imported data."""

from typing import Any, Dict, List


def as_str(value: Any, fallback: str = "") -> str:
    """Return value if it is a string, else fallback."""
    return value if isinstance(value, str) else fallback


def as_list(value: Any) -> List[Any]:
    """Return value if it is a list, else an empty list."""
    return value if isinstance(value, list) else []


def as_dict(value: Any) -> Dict[str, Any]:
    """Return value if it is a dict, else an empty dict."""
    return value if isinstance(value, dict) else {}


def as_str_list(value: Any) -> List[str]:
    """
    Coerce a list of text items, stringifying numbers and dropping anything else.

    Examples:
        >>> as_str_list(["Python", 3, None])
        ['Python', '3']
    """
    items = []
    for item in as_list(value):
        if isinstance(item, str):
            items.append(item)
        elif isinstance(item, (int, float)) and not isinstance(item, bool):
            items.append(str(item))
    return items
