"""Structured key=value logging for Story Doctor.

Assessment code attaches identifiers through ``extra=``::

    logger.info("Stored questions", extra={"work_id": work.id})

or through ``log_with_context`` for ad-hoc fields.
"""

import logging
import sys
from typing import Any

# Identifiers promoted to top-level fields of every log line
CONTEXT_FIELDS = ("work_id", "session_id", "question_set_id")


class StructuredFormatter(logging.Formatter):
    """Render a record as space-separated key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "module": record.module,
            "function": record.funcName,
            "message": record.getMessage(),
        }

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        log_data.update(getattr(record, "extra_data", None) or {})

        if record.exc_info:
            log_data["exc"] = self.formatException(record.exc_info)

        return " ".join(f"{k}={v}" for k, v in log_data.items())


def _level_for_env() -> int:
    try:
        from story_doctor.core.config import get_settings

        return logging.DEBUG if get_settings().STORY_DOCTOR_ENV == "dev" else logging.INFO
    except Exception:
        # Settings invalid or unreadable
        return logging.INFO


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger writing structured lines to stdout.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger, configured once per name
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.setLevel(_level_for_env())

    return logger


def log_with_context(logger: logging.Logger, level: int, msg: str, **context: Any) -> None:
    """
    Log with identifiers and free-form fields.

    Known identifiers (work_id, session_id, question_set_id) become top-level
    fields; anything else is appended as extra data.
    """
    extra: dict[str, Any] = {field: context.pop(field) for field in CONTEXT_FIELDS if field in context}
    extra["extra_data"] = context
    logger.log(level, msg, extra=extra)
