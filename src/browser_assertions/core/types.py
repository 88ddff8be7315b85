# src/browser_assertions/core/types.py
"""Shared type aliases and sentinels."""

from typing import Any, Final


class _Unset:
    """Marker for "argument not supplied", distinct from ``None``."""

    _instance = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()

# CSS selector, or XPath when it starts with "//" or "(".
Selector = str


def is_set(value: Any) -> bool:
    """True if ``value`` was supplied by the caller."""
    return value is not UNSET
