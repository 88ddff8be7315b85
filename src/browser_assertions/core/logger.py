# src/browser_assertions/core/logger.py
"""
Structured Logging for Browser Assertions

structlog renders every record; the standard library only provides the
handlers (stderr and an optional rotating file), attached to the
``browser_assertions`` logger so the host application's root logger is
left alone.

Every assertion outcome goes through ``log_assertion``, leaving a
machine-readable trail of what was checked, against which value, and with
what result. Records carry the correlation and test ids set through
``LoggingContext``.
"""

import logging
import logging.handlers
import sys
from contextvars import ContextVar, Token
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from uuid import uuid4

import structlog

from browser_assertions.config.settings import AssertionSettings, get_settings

PACKAGE_LOGGER = "browser_assertions"

correlation_id_var: ContextVar[str] = ContextVar('correlation_id', default='')
test_id_var: ContextVar[str] = ContextVar('test_id', default='')


def _add_correlation_context(logger, method_name, event_dict):
    """Copy the correlation and test ids of the current context into the record."""
    correlation_id = correlation_id_var.get()
    if correlation_id:
        event_dict['correlation_id'] = correlation_id

    test_id = test_id_var.get()
    if test_id:
        event_dict['test_id'] = test_id

    return event_dict


def _add_run_context(logger, method_name, event_dict):
    event_dict['timestamp'] = datetime.now().isoformat()
    event_dict['framework'] = 'browser-assertions'
    return event_dict


class LoggingManager:
    """
    Configures structlog once per process and hands out named loggers.

    Loggers requested before ``configure_logging`` is called trigger a
    configuration from ``get_settings()``.
    """

    def __init__(self):
        self._configured = False
        self._loggers: Dict[str, Any] = {}

    def configure_logging(
            self,
            log_level: str = "INFO",
            enable_console: bool = True,
            enable_file: bool = False,
            log_file_path: Optional[Path] = None,
            enable_json_format: bool = False,
            enable_correlation_id: bool = True,
            max_file_size_mb: int = 50,
            backup_count: int = 5,
            force: bool = False
    ) -> None:
        """
        Configure structlog and the package handlers.

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            enable_console: Write records to stderr
            enable_file: Write records to a rotating file
            log_file_path: Path to log file (default: logs/assertions.log)
            enable_json_format: Render records as JSON instead of console lines
            enable_correlation_id: Add correlation/test ids to records
            max_file_size_mb: Rotate the log file at this size
            backup_count: Number of rotated files to keep
            force: Reconfigure even if logging was already configured
        """
        if self._configured and not force:
            return

        processors: List[Any] = [_add_correlation_context] if enable_correlation_id else []
        processors.extend([
            _add_run_context,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.JSONRenderer(default=str) if enable_json_format
            else structlog.dev.ConsoleRenderer(colors=False),
        ])

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=False,
        )

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.setLevel(getattr(logging, log_level.upper()))
        package_logger.propagate = False
        for handler in package_logger.handlers[:]:
            package_logger.removeHandler(handler)
            handler.close()

        handlers: List[logging.Handler] = []
        if enable_console:
            handlers.append(logging.StreamHandler(sys.stderr))
        if enable_file:
            log_path = log_file_path or Path("logs/assertions.log")
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=max_file_size_mb * 1024 * 1024,
                backupCount=backup_count,
                encoding='utf-8'
            ))
        for handler in handlers:
            handler.setFormatter(logging.Formatter("%(message)s"))
            package_logger.addHandler(handler)

        self._configured = True
        self._loggers.clear()

        self.get_logger("logging").debug(
            "Assertion logging ready",
            level=log_level,
            handlers=[type(handler).__name__ for handler in handlers],
            renderer="json" if enable_json_format else "console"
        )

    def get_logger(self, name: str = "core"):
        """Logger named ``browser_assertions.<name>``."""
        if not self._configured:
            self.configure_logging(**get_settings().get_logging_options())

        if name not in self._loggers:
            self._loggers[name] = structlog.get_logger(f"{PACKAGE_LOGGER}.{name}")
        return self._loggers[name]


_logging_manager = LoggingManager()


def setup_logging(force: bool = True, **options: Any) -> None:
    """
    (Re)configure logging for browser assertions.

    ``options`` are the keyword arguments of
    ``LoggingManager.configure_logging``; ``Settings.get_logging_options()``
    produces them from configuration.

    Example:
        >>> setup_logging(**get_settings().get_logging_options())
        >>> setup_logging(log_level="DEBUG", enable_file=True,
        ...               log_file_path=Path("logs/run.log"))
    """
    _logging_manager.configure_logging(force=force, **options)


def get_logger(name: str = "core"):
    """
    Get a configured logger instance.

    Example:
        >>> logger = get_logger("browser")
        >>> logger.info("Page opened", url="https://example.com")
    """
    return _logging_manager.get_logger(name)


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """Set (or generate) the correlation id of the current context and return it."""
    if correlation_id is None:
        correlation_id = str(uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


class LoggingContext:
    """
    Scope correlation and test ids to a block.

    Example:
        >>> with LoggingContext(test_id="test_login"):
        ...     await assertions.title("Login")  # records carry test_id
    """

    def __init__(self, correlation_id: Optional[str] = None, test_id: Optional[str] = None):
        self.correlation_id = correlation_id
        self.test_id = test_id
        self._tokens: List[Token] = []

    def __enter__(self) -> "LoggingContext":
        if self.correlation_id is not None or not correlation_id_var.get():
            self._tokens.append(correlation_id_var.set(self.correlation_id or str(uuid4())))
        if self.test_id is not None:
            self._tokens.append(test_id_var.set(self.test_id))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        while self._tokens:
            token = self._tokens.pop()
            token.var.reset(token)


def log_assertion(
        assertion_name: str,
        expected: Any,
        actual: Any,
        passed: bool,
        settings: Optional[AssertionSettings] = None,
        **details: Any
) -> None:
    """
    Log an assertion result.

    Passing assertions are logged at INFO (DEBUG when ``log_passed`` is
    disabled); failures at ERROR. Values are left out of the record when
    ``log_values`` is disabled. ``settings`` defaults to
    ``get_settings().assertions``.

    Example:
        >>> log_assertion("assert.title", "Welcome", page_title, page_title == "Welcome")
    """
    settings = settings or get_settings().assertions
    logger = get_logger("assertions")

    if passed:
        log_method = logger.info if settings.log_passed else logger.debug
    else:
        log_method = logger.error

    record: Dict[str, Any] = {
        "assertion_name": assertion_name,
        "passed": passed,
        "event_type": "assertion",
        **details,
    }
    if settings.log_values:
        record["expected"] = expected
        record["actual"] = actual

    log_method(
        f"Assertion {assertion_name}: {'PASSED' if passed else 'FAILED'}",
        **record
    )
