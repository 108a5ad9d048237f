"""Structured logging configuration for the setup tool."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .config import SetupSettings

ROOT_LOGGER_NAME = "shopsmart"

CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
DEBUG_CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_RESERVED_RECORD_KEYS = {
    "name", "msg", "args", "levelname", "levelno", "pathname", "filename",
    "module", "lineno", "funcName", "created", "msecs", "relativeCreated",
    "thread", "threadName", "processName", "process", "getMessage", "exc_info",
    "exc_text", "stack_info", "taskName", "message", "asctime",
}


class StructuredFormatter(logging.Formatter):
    """Custom formatter that outputs structured JSON logs."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Extra fields passed through the adapter
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


class MaxLevelFilter(logging.Filter):
    """Pass only records below a level."""

    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


class SetupLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds setup-specific context."""

    def __init__(self, logger: logging.Logger, extra: Dict[str, Any]):
        """Initialize with logger and extra context."""
        super().__init__(logger, extra)

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        """Process log message and add extra context."""
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(self, **context) -> "SetupLoggerAdapter":
        """Create new adapter with additional context."""
        new_extra = self.extra.copy()
        new_extra.update(context)
        return SetupLoggerAdapter(self.logger, new_extra)


class LoggingManager:
    """Manage logging configuration for the setup tool."""

    def __init__(self, settings: SetupSettings):
        """Initialize logging manager with settings."""
        self.settings = settings
        self._configured = False

    def setup_logging(self) -> None:
        """Set up logging configuration based on settings."""
        if self._configured:
            return

        level = "DEBUG" if self.settings.debug else self.settings.log_level
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(level)
        root_logger.propagate = False

        # Remove handlers left over from a previous run in the same process
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            handler.close()

        # INFO and DEBUG go to stdout, WARNING and above to stderr
        console_format = logging.Formatter(
            DEBUG_CONSOLE_FORMAT if self.settings.debug else CONSOLE_FORMAT
        )
        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setLevel(level)
        stdout_handler.addFilter(MaxLevelFilter(logging.WARNING))
        stdout_handler.setFormatter(console_format)
        root_logger.addHandler(stdout_handler)

        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(max(logging.getLevelName(level), logging.WARNING))
        stderr_handler.setFormatter(console_format)
        root_logger.addHandler(stderr_handler)

        if self.settings.log_file:
            log_file = self.settings.log_file.expanduser()
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_handler.setFormatter(StructuredFormatter())
            root_logger.addHandler(file_handler)

        self._configured = True

    def get_logger(self, name: str, **context) -> SetupLoggerAdapter:
        """Get a logger with setup-specific context."""
        if not self._configured:
            self.setup_logging()

        return SetupLoggerAdapter(logging.getLogger(name), context)

    def get_component_logger(self, component: str, **context) -> SetupLoggerAdapter:
        """Get a logger for a specific setup component."""
        context["component"] = component
        return self.get_logger(f"{ROOT_LOGGER_NAME}.{component}", **context)


# Global logging manager instance
_logging_manager: Optional[LoggingManager] = None


def setup_logging(settings: SetupSettings) -> LoggingManager:
    """Set up global logging configuration."""
    global _logging_manager
    _logging_manager = LoggingManager(settings)
    _logging_manager.setup_logging()
    return _logging_manager


def get_component_logger(component: str, **context) -> SetupLoggerAdapter:
    """Get a component-specific logger.

    Works before ``setup_logging`` is called; records are then handled by
    whatever handlers the process already has.
    """
    context["component"] = component
    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{component}")
    return SetupLoggerAdapter(logger, context)
