"""Logging set-up driven by VACCEL_DEBUG_LEVEL and VACCEL_LOG_FILE."""

from __future__ import annotations

import enum
import logging
import os
import re
import sys

LOGGER_NAME = "vaccelrt"

_SCREEN_FILES = ("/dev/stdout", "/dev/stderr")
_FORMAT = "%(asctime)s - %(levelname)s: %(message)s"


class DebugLevel(enum.IntEnum):
    """Verbosity levels accepted in VACCEL_DEBUG_LEVEL."""

    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4


_LOGGING_LEVELS = {
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARN: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
}


def enabled_levels(level):
    """Return the set of levels turned on by a debug level.

    Each level enables itself and every less verbose one; unknown
    values enable nothing.
    """
    try:
        chosen = DebugLevel(level)
    except ValueError:
        return frozenset()
    return frozenset(lvl for lvl in DebugLevel if lvl <= chosen)


class _LevelFilter(logging.Filter):
    def __init__(self, allowed):
        super().__init__()
        self._allowed = frozenset(allowed)

    def filter(self, record):
        return record.levelno in self._allowed


def _atoi(text):
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def init_logging(environ=None):
    """Configure the runtime logger from the environment and return it."""
    env = os.environ if environ is None else environ
    shutdown_logging()

    allowed = frozenset()
    level_text = env.get("VACCEL_DEBUG_LEVEL")
    if level_text is not None:
        allowed = enabled_levels(_atoi(level_text))

    log_file = env.get("VACCEL_LOG_FILE")
    if log_file and log_file not in _SCREEN_FILES:
        handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler.addFilter(_LevelFilter(_LOGGING_LEVELS[lvl] for lvl in allowed))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(handler)
    return logger


def shutdown_logging():
    """Detach and close every handler of the runtime logger."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()