# src/browser_assertions/core/exceptions/enums.py
"""
Exception Classification Enums

This module defines the enums used to classify assertion engine failures.
Every error raised by the engine carries an ``ErrorKind`` (what went
wrong, from the caller's point of view), an ``ErrorCategory`` (which part
of the system produced it) and an ``ErrorSeverity`` (how it is logged).

Kinds map one-to-one onto the failure taxonomy:
- INVALID_INPUT: the caller built an invalid expectation or count
- QUERY: a selector that had to match something matched nothing
- FATAL: the browser could not be used for the operation at all
- ASSERTION: page state was readable but did not match the expectation
- BROWSER: a driver error surfaced through an assertion
"""

from enum import Enum
from typing import Dict, Set


class ErrorKind(str, Enum):
    """Failure kinds surfaced by browser assertions."""

    INVALID_INPUT = "invalid-input"
    """Structurally invalid expectation or count. Raised before any browser call."""

    QUERY = "query"
    """A selector required to match at least one element matched none."""

    FATAL = "fatal"
    """The browser capability itself is unusable for this operation."""

    ASSERTION = "assertion"
    """Page state was obtained, but the comparison failed."""

    BROWSER = "browser"
    """A driver-level failure relabeled with the enclosing assertion name."""

    def is_test_failure(self) -> bool:
        """Whether this kind represents a legitimate test failure."""
        return self == ErrorKind.ASSERTION


class ErrorSeverity(str, Enum):
    """
    Error severity levels for exception prioritization.

    Usage:
        >>> error = QueryException("Selector matched nothing", assertion_name="assert.class")
        >>> error.severity
        <ErrorSeverity.MEDIUM: 'medium'>
    """

    LOW = "low"
    """Expectation mismatches. The page is fine, the test says otherwise."""

    MEDIUM = "medium"
    """Broken selectors and driver hiccups. Usually a test maintenance issue."""

    HIGH = "high"
    """Programming errors in the test itself (invalid input)."""

    CRITICAL = "critical"
    """The browser is unusable. Nothing else in the test can be trusted."""

    def should_alert(self) -> bool:
        """Determine if this severity level requires alerting."""
        return self in [ErrorSeverity.HIGH, ErrorSeverity.CRITICAL]


class ErrorCategory(str, Enum):
    """Error categories for organizing exception types by functional area."""

    VALIDATION = "validation"
    """Assertion mismatches between page state and expectations."""

    ELEMENT = "element"
    """Selectors that do not resolve to any element."""

    INPUT = "input"
    """Invalid arguments passed to an assertion."""

    BROWSER = "browser"
    """Driver errors: closed targets, evaluation failures, invalid selectors."""

    INFRASTRUCTURE = "infrastructure"
    """Environment failures: the page cannot be inspected at all."""

    def get_monitoring_tags(self) -> Set[str]:
        """Get monitoring tags for this category."""
        base_tags = {self.value, "assertion_error"}

        tag_mapping: Dict[ErrorCategory, Set[str]] = {
            ErrorCategory.VALIDATION: {"assertion_failure", "test_validation"},
            ErrorCategory.ELEMENT: {"element_issue", "selector_error"},
            ErrorCategory.INPUT: {"invalid_input", "test_bug"},
            ErrorCategory.BROWSER: {"browser_issue", "driver_error"},
            ErrorCategory.INFRASTRUCTURE: {"infra_issue", "system_error"},
        }

        return base_tags.union(tag_mapping.get(self, set()))


class LogLevel(str, Enum):
    """Logging levels used when an exception is reported."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_numeric(self) -> int:
        """Convert to Python logging numeric level."""
        import logging

        level_mapping: Dict[LogLevel, int] = {
            LogLevel.DEBUG: logging.DEBUG,
            LogLevel.INFO: logging.INFO,
            LogLevel.WARNING: logging.WARNING,
            LogLevel.ERROR: logging.ERROR,
            LogLevel.CRITICAL: logging.CRITICAL,
        }
        return level_mapping[self]

    @classmethod
    def from_severity(cls, severity: ErrorSeverity) -> 'LogLevel':
        """Determine log level from error severity."""
        severity_mapping: Dict[ErrorSeverity, LogLevel] = {
            ErrorSeverity.LOW: LogLevel.INFO,
            ErrorSeverity.MEDIUM: LogLevel.WARNING,
            ErrorSeverity.HIGH: LogLevel.ERROR,
            ErrorSeverity.CRITICAL: LogLevel.CRITICAL,
        }
        return severity_mapping[severity]
