# src/browser_assertions/core/exceptions/utils.py
"""
Exception Utility Functions

- ``relabel``: rename a failure after the assertion that surfaces it
- ``create_exception_from_playwright_error``: classify driver errors
- ``reject_assertion``: log and raise an assertion failure
"""

from typing import Any, NoReturn, Optional

from browser_assertions.config.settings import AssertionSettings
from browser_assertions.core.logger import log_assertion
from browser_assertions.core.types import UNSET

from .assertion import BrowserOperationException, FatalException, TestAssertionException
from .base import AutomationException

_FATAL_MARKERS = (
    "target closed",
    "target page, context or browser has been closed",
    "browser has been closed",
    "browser has disconnected",
)

_SELECTOR_MARKERS = (
    "is not a valid selector",
    "failed to execute 'queryselector",
    "unexpected token",
    "syntaxerror",
)


def create_exception_from_playwright_error(
        playwright_error: BaseException,
        assertion_name: str
) -> AutomationException:
    """
    Convert a driver exception into the assertion failure taxonomy.

    The original message is preserved; the error is classified from its
    text because the driver raises a single error type for most failures.
    """
    error_message = str(playwright_error)
    lowered = error_message.lower()

    if any(marker in lowered for marker in _FATAL_MARKERS):
        return FatalException(
            error_message,
            assertion_name=assertion_name,
            original_exception=playwright_error
        ).add_tag("browser_closed")

    exception = BrowserOperationException(
        error_message,
        assertion_name=assertion_name,
        original_exception=playwright_error
    )
    if any(marker in lowered for marker in _SELECTOR_MARKERS):
        exception.add_tag("invalid_selector")
    elif "timeout" in lowered:
        exception.add_tag("timeout")
    return exception


def relabel(error: BaseException, assertion_name: str) -> AutomationException:
    """
    Return ``error`` as a failure of ``assertion_name``.

    Framework exceptions are copied with the new name, keeping their class,
    message, values and context. Anything else is classified through
    ``create_exception_from_playwright_error``. Callers raise the result
    ``from`` the original error so the chain stays visible.

    Example:
        >>> try:
        ...     await self.attribute(selector, "href", expected, msg)
        ... except AutomationException as err:
        ...     raise relabel(err, "assert.href") from err
    """
    if not isinstance(error, AutomationException):
        return create_exception_from_playwright_error(error, assertion_name)

    if error.assertion_name == assertion_name:
        return error

    relabeled = type(error)(
        error.message,
        assertion_name=assertion_name,
        actual=error.actual,
        expected=error.expected,
        category=error.category,
        severity=error.severity,
        context=dict(error.error_context.data),
        original_exception=error.original_exception
    )
    relabeled.error_context.tags.update(error.error_context.tags)
    relabeled.add_context("relabeled_from", error.assertion_name)
    return relabeled


def reject_assertion(
        assertion_name: str,
        message: str,
        actual: Any = UNSET,
        expected: Any = UNSET,
        settings: Optional[AssertionSettings] = None,
        **context: Any
) -> NoReturn:
    """
    Log a failed assertion and raise it.

    ``settings`` controls whether values reach the log record; see
    ``log_assertion``.

    Raises:
        TestAssertionException: always
    """
    log_assertion(
        assertion_name,
        None if expected is UNSET else expected,
        None if actual is UNSET else actual,
        False,
        settings=settings,
        **context
    )
    raise TestAssertionException(
        message,
        assertion_name=assertion_name,
        actual=actual,
        expected=expected,
        context=context or None
    )
