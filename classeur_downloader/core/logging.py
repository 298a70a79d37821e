"""Logging utilities for classeur_downloader modules."""

import logging
from typing import List

ROOT_LOGGER = 'classeur_downloader'

# One logger per area; setup_logging() configures exactly these.
LOGGER_AREAS = ('api', 'concurrency', 'downloader', 'materializer', 'writer', 'tree')


def qualified_name(area: str) -> str:
    """Full logger name for ``area``; already qualified names pass through."""
    if area == ROOT_LOGGER or area.startswith(ROOT_LOGGER + '.'):
        return area
    return f'{ROOT_LOGGER}.{area}'


def get_logger(area: str) -> logging.Logger:
    """Get the logger for one area of the package, e.g. ``'writer'``.

    Records propagate to the root logger. Until logging is configured
    (basicConfig() or setup_logging()), an unset level defaults to WARNING
    so library use stays quiet.
    """
    logger = logging.getLogger(qualified_name(area))
    logger.propagate = True

    if not logging.getLogger().handlers and logger.level == logging.NOTSET:
        logger.setLevel(logging.WARNING)

    return logger


def package_loggers() -> List[logging.Logger]:
    """The package logger followed by every area logger."""
    names = [ROOT_LOGGER] + [qualified_name(area) for area in LOGGER_AREAS]
    return [logging.getLogger(name) for name in names]
