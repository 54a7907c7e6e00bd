"""
rediskit - Structured Logging

JSON log formatting for the "rediskit" logger hierarchy.
Modules log through logging.getLogger(__name__) and attach structured
fields with extra={...}; this formatter folds those fields into the JSON.
"""

import json
import logging
from datetime import UTC, datetime

# LogRecord attributes that are never copied as extra fields
_RESERVED_ATTRS = frozenset(
    (
        "args",
        "msg",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
        "message",
    )
)


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key, value in record.__dict__.items():
            if key not in log_data and not key.startswith("_") and key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(level: str | int | None = None) -> logging.Logger:
    """
    Install a JSON handler on the "rediskit" logger.

    Calling it again replaces the handler instead of stacking a second one.

    Args:
        level: Log level name or number (default: LOG_LEVEL from configuration)

    Returns:
        The configured package logger
    """
    if level is None:
        from ..config import get_config

        level = get_config().log_level

    logger = logging.getLogger("rediskit")
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(level if isinstance(level, int) else str(level).upper())

    return logger
