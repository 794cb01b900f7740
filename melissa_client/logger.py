import os
from logging import Logger, config, getLevelName, getLogger
from typing import Any, Protocol

LOGGER_NAME = "melissa"


class LogSink(Protocol):
    """Anything that accepts a severity level and a message, e.g. logging.Logger."""

    def log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None: ...


def build_log_config(level: str | None = None) -> dict[str, Any]:
    """Build the dictConfig for the `melissa` logger.

    The level falls back to the LOG_LEVEL environment variable (DEBUG, INFO, WARNING, ERROR).
    """
    log_level = getLevelName((level or os.getenv("LOG_LEVEL", "INFO")).upper())
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(levelname)-8s %(asctime)s - %(name)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            LOGGER_NAME: {"handlers": ["default"], "level": log_level, "propagate": False},
        },
    }


def configure_logging(level: str | None = None) -> Logger:
    """Apply the logging configuration and return the `melissa` logger.

    The library never calls this on import; applications opt in and pass the
    returned logger to the client.
    """
    config.dictConfig(build_log_config(level))
    return getLogger(LOGGER_NAME)
