"""Unified logging configuration for the design-to-code backend."""
from __future__ import annotations

import logging

from . import config

# Prevent duplicate handlers
_configured_loggers: set[str] = set()


def resolve_level(name: str) -> int:
    """'DEBUG' → logging.DEBUG; unknown names fall back to INFO."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logger(name: str, filename: str) -> logging.Logger:
    """Setup a logger with file and console handlers.

    Args:
        name: Logger name (e.g., 'api', 'designbridge')
        filename: Log file name (e.g., 'api.log')

    Returns:
        Configured logger instance
    """
    if name in _configured_loggers:
        return logging.getLogger(name)

    config.LOG_DIR.mkdir(parents=True, exist_ok=True)
    level = resolve_level(config.LOG_LEVEL)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False  # Prevent duplicate logs

    # File handler
    fh = logging.FileHandler(config.LOG_DIR / filename, encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"
    ))

    # Console handler
    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(logging.Formatter(
        "%(asctime)s [%(name)s] %(message)s"
    ))

    logger.addHandler(fh)
    logger.addHandler(sh)

    _configured_loggers.add(name)
    return logger


# Pre-configured loggers
def get_engine_logger() -> logging.Logger:
    """Logger for the inference engine (covers all designbridge.* modules)."""
    return setup_logger("designbridge", "engine.log")


def get_api_logger() -> logging.Logger:
    """Logger for API requests."""
    return setup_logger("api", "api.log")
