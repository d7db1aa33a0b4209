"""JSON logging for ChatHotel.

Structured fields travel in ``extra={"context": {...}}``. Guest and reply
text placed under one of ``TEXT_FIELDS`` is shortened by the formatter, so
callers can log message bodies as-is.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

LOGGER_PREFIX = "chathotel"

TEXT_FIELDS = frozenset({"text", "reply", "message"})
PREVIEW_LIMIT = 100

QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def preview(text: str | None, limit: int = PREVIEW_LIMIT) -> str:
    """Shorten message text for log lines."""
    text = text or ""
    return text if len(text) <= limit else f"{text[:limit]}..."


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with long message bodies previewed."""

    def __init__(self, service: str = "ChatHotel", preview_limit: int = PREVIEW_LIMIT):
        super().__init__()
        self.service = service
        self.preview_limit = preview_limit

    def _context(self, context: dict[str, Any]) -> dict[str, Any]:
        return {
            key: preview(value, self.preview_limit) if key in TEXT_FIELDS and isinstance(value, str) else value
            for key, value in context.items()
        }

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "service": self.service,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = getattr(record, "context", None)
        if isinstance(context, dict) and context:
            log_data["context"] = self._context(context)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", service: str = "ChatHotel") -> None:
    """Install the JSON handler on the root logger.

    Calling it again (one call per app instance) swaps the previous JSON
    handler instead of stacking another one; handlers installed by other
    tools are left in place.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in root_logger.handlers[:]:
        if isinstance(handler.formatter, JSONFormatter):
            root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter(service=service))
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_PREFIX}.{name}")


class LoggerAdapter(logging.LoggerAdapter):
    """Binds per-message fields (phone, message id) to every record.

    A ``context=`` keyword on the call is merged over the bound fields.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        context = kwargs.pop("context", None)
        if context or self.extra:
            kwargs["extra"] = {"context": {**self.extra, **(context or {})}}
        return msg, kwargs
