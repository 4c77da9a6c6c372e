"""
Shared helpers for reading provider JSON payloads
"""
from typing import Any
from urllib.parse import quote


def safe_get_nested(data: dict, *keys, default=None):
    """Safely read a nested value from a dictionary

    Args:
        data: Dictionary to search
        *keys: Keys applied one after another
        default: Value returned when a key is missing

    Returns:
        The nested value or default
    """
    current = data
    for key in keys:
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return default
    return current


def path_segment(value: Any) -> str:
    """Percent-encode a value so it stays a single URI path segment"""
    return quote(str(value), safe="")

