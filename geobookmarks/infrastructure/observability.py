"""Structured Logging — JSON and text formatters, one-shot root logger setup.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - LOG_EXTRA_FIELDS surfaced when present, in both formats; every field is emitted
      somewhere (geohash/geohash_level by the store, attempt by region sampling,
      error_code/path by the API error handlers)
    - Calling setup_logging again replaces its own handler instead of stacking another

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - geopy's per-request debug chatter capped at WARNING; our own loggers carry the geohash
"""

import logging
import json
from datetime import datetime, timezone

LOG_EXTRA_FIELDS = ("geohash", "geohash_level", "error_code", "attempt", "path")

_HANDLER_MARK = "_geobookmarks_handler"


def _extras(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in LOG_EXTRA_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extras(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable line with extras appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _extras(record)
        if not extras:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in extras.items())
        # Traceback (if any) stays on the lines after the first
        head, sep, tail = line.partition("\n")
        return f"{head} [{pairs}]{sep}{tail}"


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure the root logger for the application. Returns the installed handler."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, _HANDLER_MARK, False):
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    setattr(handler, _HANDLER_MARK, True)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("geopy").setLevel(logging.WARNING)
    return handler
