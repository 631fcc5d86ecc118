"""Logging setup for the email writer service."""

import json
import logging
from datetime import datetime, timezone
from typing import Optional

from config import Settings, get_settings


class JSONFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, exception."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(level_override: Optional[str] = None, settings: Optional[Settings] = None) -> None:
    """Configure the root logger from settings (LOG_LEVEL, LOG_FORMAT, QUIET_LOGGERS).

    Args:
        level_override: If set, takes precedence over the configured level.
        settings: Settings to use instead of the cached application settings.
    """
    settings = settings or get_settings()
    level_name = (level_override or settings.log_level).upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(level)
    if settings.log_format.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
    root.addHandler(handler)

    # library loggers are capped at WARNING unless the root is stricter
    quiet_level = max(logging.WARNING, level)
    for name in settings.quiet_loggers:
        logging.getLogger(name).setLevel(quiet_level)
