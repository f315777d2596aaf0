"""
Logging configuration.
Console output in plain or JSON form, plus an optional rotating log file.
"""

import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from .settings import Settings


class LunchboxJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that adds a timestamp, level and logger name"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name

        # Context attached through `extra=`
        for key in ("user_id", "kid_id", "selection_id"):
            if hasattr(record, key):
                log_record[key] = getattr(record, key)


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    """Build a dictConfig mapping for the given settings"""
    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json" if settings.log_json else "standard",
        },
    }
    if settings.log_file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": settings.log_file,
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
            "formatter": "json",
            "encoding": "utf8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
            },
            "json": {
                "()": LunchboxJsonFormatter,
                "format": "%(timestamp)s %(level)s %(logger)s %(message)s",
            },
        },
        "handlers": handlers,
        "loggers": {
            "lunchbox": {
                "handlers": list(handlers),
                "level": settings.log_level.upper(),
                "propagate": False,
            },
            "uvicorn.access": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
        },
    }


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Apply the logging configuration and return the package logger"""
    if settings is None:
        from .settings import settings as default_settings
        settings = default_settings

    logging.config.dictConfig(build_logging_config(settings))
    logger = logging.getLogger("lunchbox")
    logger.debug("Logging initialized with level %s", settings.log_level)
    return logger
