# core/logging.py
"""
Application logging setup (stdlib logging, configured once at startup).
"""
import logging
import logging.config

from config import settings

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Install a console handler on the root logger."""
    global _configured
    if _configured:
        return

    level = (level or getattr(settings, "LOG_LEVEL", "INFO")).upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {"level": level, "handlers": ["console"]},
        }
    )
    _configured = True
