# src/browser_assertions/assertions/soft.py
"""
Assertion Outcomes and Soft Assertions

``capture_outcome`` turns one assertion into a value instead of an
exception, for callers that want to inspect Pass/Fail:

    >>> outcome = await capture_outcome(assertions.title("Home"))
    >>> outcome.passed, outcome.message
    (False, 'Expected page title to be "Home", "Login" found.')

``SoftAssertions`` keeps a test running after failed assertions and
reports all of them at the end:

    >>> async with SoftAssertions(assertions) as soft:
    ...     await soft.title("Home")
    ...     await soft.text("h1", "Welcome")
    ...     await soft.elements("li.item", {"atLeast": 3})

Only assertion failures are captured. Invalid input, query failures and
driver errors propagate immediately, so a broken selector still stops
the test.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from browser_assertions.assertions.browser_assertions import BrowserAssertions
from browser_assertions.core.exceptions.assertion import TestAssertionException
from browser_assertions.core.exceptions.enums import ErrorSeverity
from browser_assertions.core.logger import get_logger
from browser_assertions.core.types import UNSET


@dataclass
class AssertionOutcome:
    """Result of one assertion: Pass, or Fail with its message and values."""

    passed: bool
    assertion_name: Optional[str] = None
    message: Optional[str] = None
    actual: Any = UNSET
    expected: Any = UNSET
    timestamp: float = field(default_factory=time.time)
    context: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_failure(cls, failure: TestAssertionException) -> "AssertionOutcome":
        return cls(
            passed=False,
            assertion_name=failure.assertion_name,
            message=failure.message,
            actual=failure.actual,
            expected=failure.expected,
            context=dict(failure.error_context.data)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert outcome to dictionary for reporting."""
        data: Dict[str, Any] = {
            "passed": self.passed,
            "assertion_name": self.assertion_name,
            "message": self.message,
            "timestamp": self.timestamp,
            "context": self.context,
        }
        if self.actual is not UNSET:
            data["actual"] = str(self.actual)
        if self.expected is not UNSET:
            data["expected"] = str(self.expected)
        return data


async def capture_outcome(assertion: Awaitable[None]) -> AssertionOutcome:
    """
    Await an assertion and report its outcome.

    Raises:
        AutomationException: any failure other than an assertion failure
    """
    try:
        await assertion
    except TestAssertionException as failure:
        return AssertionOutcome.from_failure(failure)
    return AssertionOutcome(passed=True)


class SoftAssertions:
    """
    Soft assertion collector over a ``BrowserAssertions`` instance.

    Every coordinator coroutine is available on this object with the same
    signature. Failed assertions are recorded instead of raised;
    ``assert_all`` (called automatically when the ``async with`` block
    exits normally) raises one ``TestAssertionException`` listing them.
    """

    def __init__(self, assertions: BrowserAssertions):
        self.assertions = assertions
        self.outcomes: List[AssertionOutcome] = []
        self.logger = get_logger("soft_assertions")

    async def __aenter__(self) -> "SoftAssertions":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            self.assert_all()

    def __getattr__(self, name: str) -> Callable[..., Awaitable[AssertionOutcome]]:
        if name.startswith("_"):
            raise AttributeError(name)
        method = getattr(self.assertions, name)
        if not callable(method):
            raise AttributeError(f"{name} is not an assertion")

        async def soft_assertion(*args: Any, **kwargs: Any) -> AssertionOutcome:
            outcome = await capture_outcome(method(*args, **kwargs))
            self.outcomes.append(outcome)
            if not outcome.passed:
                self.logger.warning(
                    "Soft assertion failed",
                    assertion_name=outcome.assertion_name,
                    message=outcome.message
                )
            return outcome

        return soft_assertion

    @property
    def failures(self) -> List[AssertionOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.passed]

    def has_failures(self) -> bool:
        """Check if there are any assertion failures."""
        return bool(self.failures)

    def get_failure_count(self) -> int:
        return len(self.failures)

    def clear(self) -> None:
        """Forget all recorded outcomes."""
        self.outcomes.clear()

    def assert_all(self) -> None:
        """
        Raise if any soft assertion failed.

        Raises:
            TestAssertionException: with one numbered line per failure
        """
        failures = self.failures
        if not failures:
            return

        details = [
            f"{i}. [{failure.assertion_name}] {failure.message}"
            for i, failure in enumerate(failures, 1)
        ]
        message = (
            f"Soft assertions failed: {len(failures)} of {len(self.outcomes)}\n"
            + "\n".join(details)
        )
        raise TestAssertionException(
            message,
            assertion_name="soft_assertions",
            severity=ErrorSeverity.MEDIUM
        ).add_context("failure_count", len(failures)) \
            .add_context("failure_details", [f.to_dict() for f in failures])
