# /luct-portal/app/core/logging_config.py

import logging
from logging.config import dictConfig

from .config import LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Installs a single console handler for the `app` logger tree."""
    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "loggers": {
            "app": {"handlers": ["console"], "level": level, "propagate": False},
        },
    })
    logging.getLogger(__name__).debug("Logging configured at level %s", level)
