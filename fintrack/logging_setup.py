"""Central logging configuration for the ``fintrack`` package.

``configure_logging`` attaches a single ``StreamHandler`` to the package logger
and is called once by ``create_app``. Library modules only call
``get_logger(__name__)`` and never attach handlers themselves.
"""

import logging
import os
import sys

_PKG_LOGGER_NAME = "fintrack"
_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_handler = None


def _parse_level(level):
    if isinstance(level, int):
        return level
    if level is None:
        level = os.getenv("FINTRACK_LOG_LEVEL")
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    return logging.INFO


def configure_logging(level=None, fmt=None, stream=None):
    """Configure the package logger. Repeated calls only adjust the level."""
    global _handler
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    numeric = _parse_level(level)

    if _handler is None:
        for h in list(logger.handlers):
            if isinstance(h, logging.NullHandler):
                logger.removeHandler(h)
        _handler = logging.StreamHandler(stream or sys.stderr)
        _handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
        logger.addHandler(_handler)
        # Avoid double emission via the root logger.
        logger.propagate = False

    _handler.setLevel(numeric)
    logger.setLevel(numeric)
    return logger


def get_logger(name):
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _handler is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
