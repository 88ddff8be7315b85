# src/browser_assertions/core/counting.py
"""
Element Count Predicates

A count specification is one of:

- an exact non-negative integer: ``3``
- a comparator record: ``{"op": ">=", "value": 2}`` or
  ``{"op": "between", "low": 2, "high": 4}``
- a range record: ``{"atLeast": 2, "atMost": 4}``, ``{"equal": 3}``
  (``at_least``/``at_most`` are accepted as well)

Every form is canonicalized into an inclusive ``CountSpec(low, high)``,
where ``high=None`` is an open upper bound. ``classify`` derives the
``CountCase`` used to phrase default messages; ``evaluate`` never looks at
it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError, model_validator

from browser_assertions.core.exceptions.assertion import InvalidInputException


class CountCase(str, Enum):
    """Shape of a count specification, for message phrasing only."""

    EXACT = "exact"
    AT_LEAST = "atLeast"
    AT_MOST = "atMost"
    BETWEEN = "between"
    INVALID = "invalid"


@dataclass(frozen=True)
class CountSpec:
    """Inclusive range of accepted element counts."""

    low: int
    high: Optional[int] = None

    @classmethod
    def exactly(cls, n: int) -> "CountSpec":
        return cls(n, n)


class CountComparator(BaseModel):
    """Comparator record: an operator and its bound(s)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    op: str = Field(pattern=r"^(==|<|<=|>|>=|between)$")
    value: Optional[StrictInt] = Field(default=None, ge=0)
    low: Optional[StrictInt] = Field(default=None, ge=0)
    high: Optional[StrictInt] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def validate_bounds(self) -> "CountComparator":
        """``between`` takes low/high, every other operator takes value."""
        if self.op == "between":
            if self.low is None or self.high is None or self.value is not None:
                raise ValueError("between requires low and high")
            if self.low > self.high:
                raise ValueError(f"low ({self.low}) cannot exceed high ({self.high})")
        else:
            if self.value is None or self.low is not None or self.high is not None:
                raise ValueError(f"operator {self.op} requires value")
            if self.op == "<" and self.value == 0:
                raise ValueError("no count is lower than 0")
        return self

    def to_spec(self) -> CountSpec:
        if self.op == "between":
            return CountSpec(self.low, self.high)
        n = self.value
        return {
            "==": lambda: CountSpec(n, n),
            "<": lambda: CountSpec(0, n - 1),
            "<=": lambda: CountSpec(0, n),
            ">": lambda: CountSpec(n + 1, None),
            ">=": lambda: CountSpec(n, None),
        }[self.op]()


class CountRange(BaseModel):
    """Range record: ``equal``, or ``atLeast`` and/or ``atMost``."""
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    equal: Optional[StrictInt] = Field(default=None, ge=0)
    at_least: Optional[StrictInt] = Field(default=None, ge=0, alias="atLeast")
    at_most: Optional[StrictInt] = Field(default=None, ge=0, alias="atMost")

    @model_validator(mode="after")
    def validate_bounds(self) -> "CountRange":
        """Exactly one shape must be given and the range must not be empty."""
        if self.equal is not None:
            if self.at_least is not None or self.at_most is not None:
                raise ValueError("equal cannot be combined with atLeast/atMost")
        elif self.at_least is None and self.at_most is None:
            raise ValueError("one of equal, atLeast, atMost is required")
        elif self.at_least is not None and self.at_most is not None and self.at_least > self.at_most:
            raise ValueError(f"atLeast ({self.at_least}) cannot exceed atMost ({self.at_most})")
        return self

    def to_spec(self) -> CountSpec:
        if self.equal is not None:
            return CountSpec(self.equal, self.equal)
        return CountSpec(self.at_least or 0, self.at_most)


def classify(spec: CountSpec) -> CountCase:
    """Map a canonical spec to its message case."""
    if spec.low < 0 or (spec.high is not None and spec.high < spec.low):
        return CountCase.INVALID
    if spec.high is None:
        return CountCase.AT_LEAST
    if spec.low == spec.high:
        return CountCase.EXACT
    if spec.low == 0:
        return CountCase.AT_MOST
    return CountCase.BETWEEN


def parse_count_input(count: Any, assertion_name: str = "assert.elements") -> CountSpec:
    """
    Canonicalize a caller-supplied count.

    Raises:
        InvalidInputException: negative or non-integer counts, malformed
            records, and empty ranges (low > high).
    """
    try:
        if isinstance(count, bool):
            raise ValueError("booleans are not counts")
        if isinstance(count, int):
            spec = CountSpec.exactly(count)
        elif isinstance(count, Mapping) and "op" in count:
            spec = CountComparator.model_validate(dict(count)).to_spec()
        elif isinstance(count, Mapping):
            spec = CountRange.model_validate(dict(count)).to_spec()
        else:
            raise ValueError(f"unsupported count type {type(count).__name__}")
    except (ValueError, ValidationError) as e:
        raise InvalidInputException(
            f"parameter count ({count!r}) is not valid.",
            assertion_name=assertion_name,
            original_exception=e
        ) from e

    if classify(spec) == CountCase.INVALID:
        raise InvalidInputException(
            f"parameter count ({count!r}) is not valid.",
            assertion_name=assertion_name
        )
    return spec


def evaluate(spec: CountSpec, actual_count: int) -> bool:
    """True if ``actual_count`` lies within the spec's inclusive range."""
    if actual_count < spec.low:
        return False
    return spec.high is None or actual_count <= spec.high


def describe_count(spec: CountSpec) -> str:
    """Natural-language cardinality: "exactly 3", "between 2 and 4", ..."""
    case = classify(spec)
    if case == CountCase.EXACT:
        return f"exactly {spec.low}"
    if case == CountCase.AT_LEAST:
        return f"at least {spec.low}"
    if case == CountCase.AT_MOST:
        return f"up to {spec.high}"
    if case == CountCase.BETWEEN:
        return f"between {spec.low} and {spec.high}"
    return "an invalid number of"


def count_message(selector: str, spec: CountSpec, found: int) -> str:
    """Default failure sentence for an element count assertion."""
    noun = "element" if classify(spec) == CountCase.EXACT and spec.low == 1 else "elements"
    return f'Expected selector "{selector}" to find {describe_count(spec)} {noun}, {found} found.'
