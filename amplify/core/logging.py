"""Amplify: Structured JSON Logging."""

import json
import logging
import sys
from datetime import datetime, timezone

CONTEXT_KEYS = (
    "operation",
    "entity_id",
    "campaign_id",
    "recipient_id",
    "duration_ms",
    "status_code",
)

_level = logging.INFO


class JSONFormatter(logging.Formatter):
    """Produces structured JSON log lines for production observability."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        # Attach extra fields if present
        for key in CONTEXT_KEYS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)
        return json.dumps(log_entry, default=str)


def configure_logging(level: str) -> None:
    """Apply the configured level to every amplify logger."""
    global _level
    _level = getattr(logging, level.upper(), logging.INFO)
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("amplify.") and isinstance(logger, logging.Logger):
            logger.setLevel(_level)


def get_logger(name: str) -> logging.Logger:
    """Return a named logger with structured JSON handler."""
    logger = logging.getLogger(f"amplify.{name}")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
    logger.setLevel(_level)
    return logger
