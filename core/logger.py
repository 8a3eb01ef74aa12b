"""Logging helpers for the application.

Provides a convenience `get_logger` factory that configures a stream and
rotating file handler so every engine module logs the same way.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from core import config

LOG_DIR = config.LOG_DIR
os.makedirs(LOG_DIR, exist_ok=True)

LOG_FILE = os.path.join(LOG_DIR, "diet_planner.log")

_formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

_stream_handler = logging.StreamHandler()
_stream_handler.setFormatter(_formatter)

_file_handler = RotatingFileHandler(LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3)
_file_handler.setFormatter(_formatter)

DEFAULT_LEVEL = logging.getLevelName(config.LOG_LEVEL)
if not isinstance(DEFAULT_LEVEL, int):
    DEFAULT_LEVEL = logging.INFO


def get_logger(name: str = __name__, level: int = DEFAULT_LEVEL) -> logging.Logger:
    """Return a configured logger with stream and rotating file handlers.

    Handlers are attached once per logger name, so repeated calls from the
    same module do not duplicate output.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level)
        logger.addHandler(_stream_handler)
        logger.addHandler(_file_handler)
    return logger
