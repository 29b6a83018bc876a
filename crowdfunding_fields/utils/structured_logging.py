"""
Structured Logging

JSON-formatted logging for hook dispatch and metadata writes.
Records emitted while a hook is running carry the hook name.
"""

import json
import logging
from contextvars import ContextVar
from datetime import datetime, timezone

# Context variable for the hook currently being dispatched
current_hook_var: ContextVar[str] = ContextVar("current_hook", default="")


class HookContextFilter(logging.Filter):
    """Logging filter to add the current hook name to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.hook = current_hook_var.get("")
        return True


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs in a format suitable for log aggregation systems
    like ELK Stack, Loki, or CloudWatch.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "hook": getattr(record, "hook", ""),
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add extra fields from record
        for key in ["campaign_id", "field_key", "meta_key", "plugin"]:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data)


def setup_structured_logging(
    log_level: str = "INFO",
    json_format: bool = True,
    log_file: str | None = None,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_format: Use JSON formatter (True for production)
        log_file: Optional file path for log output
    """
    # Get root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Remove existing handlers
    root_logger.handlers.clear()

    # Create handler
    handler = logging.FileHandler(log_file) if log_file else logging.StreamHandler()

    # Set formatter
    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - [%(hook)s] %(message)s"))

    # Add hook context filter
    handler.addFilter(HookContextFilter())

    root_logger.addHandler(handler)

    # Configure specific loggers
    loggers_config = {
        "crowdfunding_fields": log_level,
        "sqlalchemy.engine": "WARNING",
    }

    for logger_name, level in loggers_config.items():
        logger = logging.getLogger(logger_name)
        logger.setLevel(getattr(logging, level.upper()))


def get_current_hook() -> str:
    """Get the name of the hook being dispatched, or "" outside dispatch."""
    return current_hook_var.get("")
