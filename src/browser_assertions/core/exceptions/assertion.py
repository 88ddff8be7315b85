# src/browser_assertions/core/exceptions/assertion.py
"""
Assertion Failure Taxonomy

The four failure kinds an assertion can surface, plus the wrapper used
for driver errors that escape a browser call:

- InvalidInputException: bad expectation or count, raised before the page is touched
- QueryException: the selector matched nothing when a match was required
- FatalException: the page cannot be inspected at all (e.g. url unreadable)
- TestAssertionException: the page was inspected and did not match
- BrowserOperationException: a foreign driver error, relabeled

Only ``TestAssertionException`` is an ``AssertionError``; the other kinds
are reported by test runners as errors rather than failures, which keeps
broken selectors and invalid input from passing for a legitimately
different page state.
"""

from .base import AutomationException
from .enums import ErrorCategory, ErrorKind, ErrorSeverity


class InvalidInputException(AutomationException, ValueError):
    """The caller supplied a structurally invalid expectation or count."""

    kind = ErrorKind.INVALID_INPUT
    default_category = ErrorCategory.INPUT
    default_severity = ErrorSeverity.HIGH


class QueryException(AutomationException):
    """
    A selector required to match at least one element matched none.

    Usually points at a broken selector rather than a different page state.
    """

    kind = ErrorKind.QUERY
    default_category = ErrorCategory.ELEMENT
    default_severity = ErrorSeverity.MEDIUM


class FatalException(AutomationException):
    """The browser could not be used for an operation with no fallback."""

    kind = ErrorKind.FATAL
    default_category = ErrorCategory.INFRASTRUCTURE
    default_severity = ErrorSeverity.CRITICAL


class BrowserOperationException(AutomationException):
    """A driver error that surfaced through an assertion."""

    kind = ErrorKind.BROWSER
    default_category = ErrorCategory.BROWSER
    default_severity = ErrorSeverity.MEDIUM


class TestAssertionException(AutomationException, AssertionError):
    """
    Page state was obtainable, but the comparison failed.

    Always carries a message (custom or synthesized) and, where useful,
    the actual and expected values.
    """

    __test__ = False  # not a pytest test class

    kind = ErrorKind.ASSERTION
    default_category = ErrorCategory.VALIDATION
    default_severity = ErrorSeverity.LOW
