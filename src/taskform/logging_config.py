"""Logging setup for applications embedding the form core."""

from __future__ import annotations

import logging
from typing import Optional

from dotenv import load_dotenv

from .config import Settings, get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(settings: Optional[Settings] = None) -> int:
    """Configure logging from LOG_LEVEL / LOG_FILE and return the level used."""
    # Load .env first so LOG_LEVEL and LOG_FILE are visible to the settings
    load_dotenv()

    if settings is None:
        get_settings.cache_clear()
        settings = get_settings()

    log_level = _resolve_level(settings.log_level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = []

    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    # Always add console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        force=True,  # Override any existing configuration
    )
    logging.getLogger("taskform").setLevel(log_level)
    return log_level


__all__ = ["configure_logging", "LOG_FORMAT"]
