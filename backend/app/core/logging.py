"""Logging configuration for the API process and the Celery workers.

Both processes log to stdout with the same line format. Celery installs
its own handlers unless the `setup_logging` signal is connected, so the
Celery app connects `configure_worker_logging` to it.
"""

import logging
import sys
from typing import Any, Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(processName)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS: dict[str, int] = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "celery.beat": logging.INFO,
    "celery.worker.strategy": logging.WARNING,
}


def setup_logging(level: LogLevel = "INFO") -> None:
    """Configure application logging.

    Replaces any handlers already on the root logger so that calling this
    again (e.g. once per worker process) does not duplicate lines.

    Args:
        level: The logging level to use.
    """
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


def configure_worker_logging(loglevel: Any = None, **kwargs: Any) -> None:
    """Celery `setup_logging` signal handler.

    Args:
        loglevel: Level passed by the worker (`-l` option), name or number.
    """
    if isinstance(loglevel, int):
        loglevel = logging.getLevelName(loglevel)
    setup_logging(level=loglevel or "INFO")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name.

    Args:
        name: The name for the logger (typically __name__).

    Returns:
        A configured logger instance.
    """
    return logging.getLogger(name)
