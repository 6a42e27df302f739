"""Logging configuration for lexitrack."""
import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from lexitrack.config import settings


def resolve_level(level: Union[int, str]) -> int:
    """Numeric logging level for a level name such as "debug".

    Raises:
        ValueError: for an unknown level name.
    """
    if isinstance(level, int):
        return level
    levels = logging.getLevelNamesMapping()
    try:
        return levels[level.upper()]
    except KeyError:
        raise ValueError(
            f"Unknown log level {level!r}, expected one of {', '.join(sorted(levels))}"
        ) from None


def setup_logging(level: Optional[Union[int, str]] = None) -> None:
    """Set up logging configuration.

    Args:
        level: Optional logging level. If None, uses LOG_LEVEL from settings.

    Raises:
        ValueError: for an unknown level name.
    """
    level = resolve_level(settings.logging.level if level is None else level)

    formatter = logging.Formatter(settings.logging.format)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove any existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler if log directory is specified
    if settings.logging.dir:
        log_dir = Path(settings.logging.dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            log_dir / "lexitrack.log",
            when=settings.logging.rotation,
            interval=settings.logging.interval,
            backupCount=settings.logging.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Set logging levels for third-party libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("faker").setLevel(logging.WARNING)

    root_logger.debug("Logging configured with level: %s", logging.getLevelName(level))
