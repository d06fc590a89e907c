"""Structured Logging — lookup log lines as JSON (production) or key=value text (development).

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Only whitelisted extra fields (LOOKUP_FIELDS) are surfaced, in both formats
    - setup_logging is idempotent: calling it again replaces its own handler
    - SQLAlchemy engine logging never drops below WARNING (no per-query SQL)
"""

import logging
import json
from datetime import datetime, timezone

LOOKUP_FIELDS = (
    "path", "error_code", "operation", "page", "page_size",
    "total_records", "filter_count",
)

_HANDLER_NAME = "geolookup"


def _lookup_extras(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in LOOKUP_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_lookup_extras(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable line with lookup fields appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _lookup_extras(record)
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in extras.items())
        return line


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure root logging for the application."""
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    engine_logger = logging.getLogger("sqlalchemy.engine")
    engine_logger.setLevel(max(engine_logger.getEffectiveLevel(), logging.WARNING))
