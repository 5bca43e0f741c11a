"""Logging configuration for Rollcall.

Everything is logged under the "rollcall" logger. Import and sweep runs write
to a per-day file so a scheduled sweep and an interactive import on the same
day end up in one place.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional
from config import Config

LOGGER_NAME = "rollcall"

_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_CONSOLE_FORMAT = "%(levelname)s - %(message)s"


def log_file_for(config: Config, day: Optional[date] = None) -> Path:
    """Get the log file path for a given day (defaults to today)."""
    day = day or date.today()
    return config.log_dir / f"rollcall-{day.isoformat()}.log"


def setup_logging(config: Config, console: bool = True) -> logging.Logger:
    """Set up application logging with file and console handlers.

    Args:
        config: Application configuration containing log settings.
        console: Whether to also log to stderr. Scheduled sweeps usually
                 run with console output disabled.

    Returns:
        Configured logger instance.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level)

    # Safe to call more than once
    logger.handlers.clear()

    file_handler = logging.FileHandler(log_file_for(config))
    file_handler.setLevel(config.log_level)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(config.log_level)
        console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get the application logger, or one of its children.

    Args:
        name: Optional child name, e.g. "importing.runner".

    Returns:
        The rollcall logger, or rollcall.<name> when a name is given.
    """
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)
