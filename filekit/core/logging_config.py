"""Logging configuration for filekit."""

from __future__ import annotations

import logging
from typing import Optional

from .settings import ApplicationSettings, settings as default_settings

LOGGER_NAME = "filekit"
LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"

_STREAM_HANDLER_ATTR = "_is_filekit_stream_handler"


def _create_stream_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(handler, _STREAM_HANDLER_ATTR, True)
    return handler


def configure_logging(
    level: Optional[int | str] = None,
    settings: Optional[ApplicationSettings] = None,
) -> logging.Logger:
    """Attach the filekit stream handler to the package logger if missing.

    *level* defaults to ``FILEKIT_LOG_LEVEL``.  Calling this repeatedly only
    updates the level; a second handler is never added.
    """

    settings = settings or default_settings
    if level is None:
        level = settings.log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers:
        if getattr(handler, _STREAM_HANDLER_ATTR, False):
            handler.setLevel(level)
            break
    else:
        logger.addHandler(_create_stream_handler(level))

    logger.setLevel(level)
    return logger


__all__ = ["LOGGER_NAME", "configure_logging"]
