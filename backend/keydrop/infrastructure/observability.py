"""Structured Logging - store-aware JSON/text formatters and setup.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Store context (collection, entity_id) and request context (path, status_code)
      surfaced when passed as extras
    - A KeydropError carried in exc_info contributes its code, severity and
      ErrorContext; explicit extras win over values taken from the error
    - Tracebacks only accompany records that carry exc_info (store and crypto failures)

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - Text format keeps the same context as a trailing [key=value ...] block
    - setup_logging called once on startup via lifespan; re-running replaces its handler
"""

import logging
import json
from datetime import datetime, timezone

from keydrop.core.errors import KeydropError

_CONTEXT_FIELDS = ("collection", "entity_id", "error_code", "severity", "path", "status_code")

_HANDLER_NAME = "keydrop"


def _context_of(record: logging.LogRecord) -> dict:
    """Context fields for `record`: explicit extras first, then the logged KeydropError."""
    context = {}
    error = record.exc_info[1] if record.exc_info else None
    if isinstance(error, KeydropError):
        context.update(
            error_code=error.code,
            severity=error.severity.value,
            collection=error.context.collection,
            entity_id=error.context.entity_id,
        )
        if error.__cause__ is not None:
            context["cause"] = type(error.__cause__).__name__
    for key in _CONTEXT_FIELDS:
        val = record.__dict__.get(key)
        if val is not None:
            context[key] = val
    return {k: v for k, v in context.items() if v is not None}


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(_context_of(record))
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class ContextTextFormatter(logging.Formatter):
    """Human-readable lines with the store context appended."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        context = _context_of(record)
        if context:
            line += " [" + " ".join(f"{k}={v}" for k, v in context.items()) + "]"
        return line


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else ContextTextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
