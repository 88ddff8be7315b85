# src/browser_assertions/core/exceptions/base.py
"""
Base Exception Class for Browser Assertions

This module provides the foundation exception class that every assertion
failure inherits from. Besides the message, each exception records the
name of the assertion that produced it (``"assert.text"``), the actual and
expected values when they are useful for a diff, and a structured context
for logging and reporting.

The assertion name is fixed at construction. Delegating assertions (for
example ``href`` on top of ``attribute``) obtain a renamed copy through
``relabel`` in ``exceptions.utils`` instead of mutating the original.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

from browser_assertions.core.types import UNSET, is_set

from .enums import ErrorCategory, ErrorKind, ErrorSeverity, LogLevel


@dataclass
class ErrorContext:
    """
    Structured context information for debugging and reporting.
    """

    data: Dict[str, Any] = field(default_factory=dict)
    tags: Set[str] = field(default_factory=set)

    def add(self, key: str, value: Any) -> 'ErrorContext':
        """Add context data."""
        self.data[key] = value
        return self

    def add_tag(self, tag: str) -> 'ErrorContext':
        """Add a tag for categorization."""
        self.tags.add(tag)
        return self

    def merge(self, other: 'ErrorContext') -> 'ErrorContext':
        """Merge with another context."""
        self.data.update(other.data)
        self.tags.update(other.tags)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "data": self.data.copy(),
            "tags": sorted(self.tags),
        }


class AutomationException(Exception):
    """
    Base exception class for all browser assertion failures.

    Attributes:
        message: Human-readable error description
        assertion_name: Dotted name of the assertion that failed ("assert.url")
        kind: Failure kind from the taxonomy
        category: Error category for classification
        severity: Error severity level
        actual: Value observed on the page (``UNSET`` when not reported)
        expected: Value the caller expected (``UNSET`` when not reported)
        error_context: Additional context information
        original_exception: Exception that caused this error, if any
        timestamp: When the error occurred

    Example:
        >>> try:
        ...     await browser.url()
        ... except Exception as e:
        ...     raise AutomationException(
        ...         "Can't obtain page url.",
        ...         assertion_name="assert.url",
        ...         original_exception=e
        ...     ).add_context("operation", "read_url")
    """

    kind: ErrorKind = ErrorKind.BROWSER
    default_category: ErrorCategory = ErrorCategory.BROWSER
    default_severity: ErrorSeverity = ErrorSeverity.MEDIUM

    def __init__(
            self,
            message: str,
            assertion_name: Optional[str] = None,
            actual: Any = UNSET,
            expected: Any = UNSET,
            category: Optional[ErrorCategory] = None,
            severity: Optional[ErrorSeverity] = None,
            context: Optional[Dict[str, Any]] = None,
            original_exception: Optional[BaseException] = None
    ):
        """
        Initialize the exception.

        Args:
            message: Clear, actionable error description
            assertion_name: Name of the assertion reporting the failure
            actual: Observed value, for structured reporting
            expected: Expected value, for structured reporting
            category: Error category (class default if None)
            severity: Severity level (class default if None)
            context: Additional debugging context
            original_exception: Original exception that caused this error
        """
        self.message = message
        self.assertion_name = assertion_name
        self.actual = actual
        self.expected = expected
        self.category = category or self.default_category
        self.severity = severity or self.default_severity
        self.log_level = LogLevel.from_severity(self.severity)
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        self.error_context = ErrorContext()
        if context:
            for key, value in context.items():
                self.error_context.add(key, value)

        for tag in self.category.get_monitoring_tags():
            self.error_context.add_tag(tag)

        if original_exception is not None:
            self.error_context.add("original_type", type(original_exception).__name__)
            self.error_context.add("original_message", str(original_exception))

        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.assertion_name:
            return f"[{self.assertion_name}] {self.message}"
        return self.message

    @property
    def has_actual(self) -> bool:
        return is_set(self.actual)

    @property
    def has_expected(self) -> bool:
        return is_set(self.expected)

    def add_context(self, key: str, value: Any) -> 'AutomationException':
        """
        Add contextual information to the exception.

        Supports method chaining:

            >>> QueryException("Element not found.", assertion_name="assert.style") \\
            ...     .add_context("selector", "#main")
        """
        self.error_context.add(key, value)
        return self

    def add_tag(self, tag: str) -> 'AutomationException':
        """Add a tag for categorization and monitoring."""
        self.error_context.add_tag(tag)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for reporters and log sinks.

        ``actual`` and ``expected`` are only present when the assertion
        reported them.
        """
        data: Dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "assertion_name": self.assertion_name,
            "kind": self.kind.value,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "log_level": self.log_level.value,
            "context": self.error_context.to_dict(),
            "timestamp": self.timestamp.isoformat(),
            "original_exception": {
                "type": type(self.original_exception).__name__,
                "message": str(self.original_exception)
            } if self.original_exception is not None else None,
        }
        if self.has_actual:
            data["actual"] = self.actual
        if self.has_expected:
            data["expected"] = self.expected
        return data

    def to_json(self) -> str:
        """Convert exception to JSON string for logging/monitoring."""
        return json.dumps(self.to_dict(), indent=2, default=str)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"assertion_name={self.assertion_name!r}, "
            f"message={self.message!r})"
        )
