"""Structured Logging — JSON formatter and setup for the host process.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (component, path, method, error_code) surfaced when present
    - JSON format when requested, human-readable otherwise

Design Decisions:
    - setup_logging called once on startup via the FastAPI lifespan
    - Handler installed on the "webfocus" logger, so embedding applications keep
      control of the root logger
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_KEYS = ("component", "path", "method", "error_code", "status_code")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "text") -> logging.Handler:
    """Configure the webfocus logger hierarchy. Idempotent."""
    logger = logging.getLogger("webfocus")
    for existing in list(logger.handlers):
        if getattr(existing, "_webfocus", False):
            logger.removeHandler(existing)
    handler = logging.StreamHandler()
    handler._webfocus = True
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
