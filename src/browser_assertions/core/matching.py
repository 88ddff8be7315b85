# src/browser_assertions/core/matching.py
"""
Text and Value Matching

Expectations are tagged variants:

- ``Literal``: exact, case-sensitive string equality
- ``Pattern``: regular expression, matches on any substring (``re.search``)
- ``OneOf``: a list of literals/patterns, used by multi-value assertions
- ``Absent``: "must not be present", used by attribute absence checks

There are two list semantics and they are easy to invert:

- ``matches_list``: OR across elements. One element matching is enough.
- ``matches_all``: AND across alternatives. Every alternative must be
  satisfied by some element (not necessarily the same one).
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class Literal:
    """Exact string expectation."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Pattern:
    """Regular expression expectation."""

    regex: "re.Pattern[str]"

    def __str__(self) -> str:
        return describe_regex(self.regex)


@dataclass(frozen=True)
class OneOf:
    """A list of alternatives, each a Literal or a Pattern."""

    alternatives: Tuple[Union[Literal, Pattern], ...]

    def __str__(self) -> str:
        return ", ".join(str(a) for a in self.alternatives)


@dataclass(frozen=True)
class Absent:
    """Explicit "must not be present"."""

    def __str__(self) -> str:
        return "<absent>"


ABSENT = Absent()

Scalar = Union[Literal, Pattern]
Expectation = Union[Literal, Pattern, OneOf, Absent]


def describe_regex(regex: "re.Pattern[str]") -> str:
    """Render a compiled regex the way it would be written in a test."""
    flags = ""
    if regex.flags & re.IGNORECASE:
        flags += "i"
    if regex.flags & re.MULTILINE:
        flags += "m"
    if regex.flags & re.DOTALL:
        flags += "s"
    return f"/{regex.pattern}/{flags}"


def to_expectation(value: Any) -> Expectation:
    """
    Normalize caller input into an expectation.

    ``str`` becomes ``Literal``, a compiled regex becomes ``Pattern`` and a
    list or tuple becomes ``OneOf``. Expectations are returned unchanged.

    Raises:
        TypeError: for any other input (including ``None``)
    """
    if isinstance(value, (Literal, Pattern, OneOf, Absent)):
        return value
    if isinstance(value, str):
        return Literal(value)
    if isinstance(value, re.Pattern):
        return Pattern(value)
    if isinstance(value, (list, tuple)):
        return OneOf(tuple(_to_scalar(item) for item in value))
    raise TypeError(f"Unsupported expectation type: {type(value).__name__}")


def _to_scalar(value: Any) -> Scalar:
    expectation = to_expectation(value)
    if not isinstance(expectation, (Literal, Pattern)):
        raise TypeError(f"Alternatives must be strings or patterns, got {expectation!r}")
    return expectation


def alternatives(expected: Expectation) -> Tuple[Scalar, ...]:
    """The scalar alternatives an expectation is made of."""
    if isinstance(expected, OneOf):
        return expected.alternatives
    if isinstance(expected, (Literal, Pattern)):
        return (expected,)
    raise TypeError(f"{expected!r} has no alternatives")


def matches(actual: Optional[str], expected: Scalar) -> bool:
    """
    Decide whether a single page value satisfies a scalar expectation.

    ``None`` stands for "no value" and never matches.
    """
    if isinstance(expected, Literal):
        return actual is not None and actual == expected.text
    if isinstance(expected, Pattern):
        return actual is not None and expected.regex.search(actual) is not None
    raise TypeError(f"Cannot match a single value against {expected!r}")


def matches_list(actual_list: Iterable[Optional[str]], expected: Scalar) -> bool:
    """True if ANY value in ``actual_list`` matches ``expected``."""
    return any(matches(actual, expected) for actual in actual_list)


def first_unmatched(actual_list: Sequence[Optional[str]], expected: Expectation) -> Optional[Scalar]:
    """
    First alternative of ``expected`` not satisfied by any value.

    Returns None when every alternative is satisfied.
    """
    for alternative in alternatives(expected):
        if not matches_list(actual_list, alternative):
            return alternative
    return None


def matches_all(actual_list: Sequence[Optional[str]], expected: Expectation) -> bool:
    """True if EVERY alternative of ``expected`` is satisfied by SOME value."""
    return first_unmatched(actual_list, expected) is None


def describe(expected: Any) -> str:
    """Human form of an expectation (or raw expected value) for messages."""
    if isinstance(expected, re.Pattern):
        return describe_regex(expected)
    if isinstance(expected, (list, tuple)):
        return ", ".join(describe(item) for item in expected)
    return str(expected)
