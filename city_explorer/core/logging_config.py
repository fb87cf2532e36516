"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)`; this only wires handlers
and levels once at startup.
"""

from __future__ import annotations

import logging
import logging.config

from . import settings

_configured = False


def logging_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {
                "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "plain",
            }
        },
        "loggers": {
            "city_explorer": {"level": level},
            # httpx logs every request at INFO.
            "httpx": {"level": "WARNING"},
        },
        "root": {"level": level, "handlers": ["console"]},
    }


def configure_logging(level: str | None = None) -> None:
    global _configured
    if _configured:
        return None
    logging.config.dictConfig(logging_config(level or settings.log_level()))
    _configured = True
