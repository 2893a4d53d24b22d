"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, service, logger name, and message
    - Todo-scoped fields (todo_id, watch_state, active_watches) and request fields
      (error_code, path) surfaced when present
    - JSON format in production, human-readable in development
    - setup_logging installs at most one service handler on the root logger

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging may run twice (entry point, then lifespan): the second call
      replaces the first handler instead of duplicating every line
"""

import logging
import json
from datetime import datetime, timezone

SERVICE_NAME = "todo-service"

_EXTRA_KEYS = ("todo_id", "watch_state", "active_watches", "error_code", "path")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": SERVICE_NAME,
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


class _ServiceHandler(logging.StreamHandler):
    """Marker type so setup_logging can find the handler it installed."""


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = _ServiceHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s — %(message)s",
        ))
    for existing in [h for h in logging.root.handlers if isinstance(h, _ServiceHandler)]:
        logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
