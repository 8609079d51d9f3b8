"""Central logging configuration for the backend.

This module configures Python logging with sane defaults and is intended to be
invoked from `rateboard.main` (and the display client) during startup.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

logger = logging.getLogger("rateboard")

# LogRecord attributes that must not be overwritten through `extra`
_RESERVED_KEYS = frozenset(
    {
        "name",
        "msg",
        "message",
        "asctime",
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
        "args",
    }
)


class HealthCheckFilter(logging.Filter):
    """Filter out health check requests from uvicorn access logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if any(endpoint in message for endpoint in ("/health", "/ready")):
            return False
        return True


def log_event(event_name: str, *, log: Optional[logging.Logger] = None, level: int = logging.INFO, **fields: object) -> None:
    """Emit an 'event | k=v ...' line and carry the fields via `extra`.

    Uses lazy %-params so formatting only happens when the record is emitted.
    """
    target = log or logger
    if not fields:
        target.log(level, "%s", event_name, extra={"event": event_name})
        return

    keys = sorted(fields.keys())
    tmpl = " ".join(f"{k}=%s" for k in keys)
    args = (event_name, *(fields[k] for k in keys))

    safe_extra: dict[str, object] = {"event": event_name}
    for k, v in fields.items():
        safe_key = k if k not in _RESERVED_KEYS else f"field_{k}"
        safe_extra[safe_key] = v

    target.log(level, "%s | " + tmpl, *args, extra=safe_extra)


def setup_logging(level: Optional[str] = None) -> None:
    """Initialize application logging.

    - Level is taken from the `LOG_LEVEL` environment variable if not provided.
    - Uses a concise, structured-ish format with timestamps.
    """

    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    root_logger = logging.getLogger()

    # Configure handlers once to avoid duplicates in reloads
    if not root_logger.handlers:
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    # Always align root level (uvicorn may install handlers before we run)
    root_logger.setLevel(log_level)

    logging.getLogger("uvicorn").setLevel(log_level)
    logging.getLogger("uvicorn.error").setLevel(log_level)

    # The display polls every few seconds; keep probe hits out of the access log
    access_logger = logging.getLogger("uvicorn.access")
    if not any(isinstance(f, HealthCheckFilter) for f in access_logger.filters):
        access_logger.addFilter(HealthCheckFilter())

    # Detailed SQL is controlled via engine echo; only show engine logs at DEBUG
    sqlalchemy_engine_level = logging.DEBUG if root_logger.level == logging.DEBUG else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(sqlalchemy_engine_level)

    # APScheduler logs every one-shot rotation job at INFO
    logging.getLogger("apscheduler").setLevel(logging.WARNING)
