"""Application-wide logger writing to platformdirs user_log_dir."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "taskapp_cli"
_LOG_FILE = "taskapp.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the application logger, or a child of it for *component*.

    The file handler is attached to the root application logger on first
    call; child loggers propagate to it.
    """
    global _logger
    if _logger is None:
        _logger = _create_logger()
    if component:
        return _logger.getChild(component)
    return _logger


def _create_logger() -> logging.Logger:
    log_dir = Path(user_log_dir(_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(logging.DEBUG)
    if not logger.handlers:
        logger.addHandler(handler)
    logger.propagate = False
    return logger


def set_log_level(level: str) -> None:
    """Set the application log level by name (e.g. ``"INFO"``).

    Raises:
        ValueError: If *level* is not a standard logging level name
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    get_logger().setLevel(numeric)
