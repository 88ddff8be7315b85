# src/browser_assertions/core/membership.py
"""Unordered collection comparison for option-list assertions."""

from collections import Counter
from typing import Iterable


def same_members(a: Iterable[str], b: Iterable[str]) -> bool:
    """
    True if both collections hold the same multiset of values.

    Order is ignored, duplicates are not: ``["x", "x"]`` differs from ``["x"]``.
    """
    return Counter(a) == Counter(b)
