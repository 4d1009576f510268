"""Logging setup for the ledgerkit command line."""

import logging
import sys
import threading
from typing import Any, Optional, Union

LOGGER_NAME = "ledgerkit"
LOG_FORMAT = "%(asctime)s level=%(levelname)s logger=%(name)s %(message)s"

_handler: Optional[logging.Handler] = None
_lock = threading.Lock()


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    stream: Any = None,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Configure the ledgerkit logger hierarchy.

    The handler is installed once; later calls only change the level.

    Args:
        level: Level name (e.g. "INFO") or number
        stream: Stream for the default handler (stderr if None)
        handler: Handler to install instead of a stream handler

    Returns:
        The top-level ledgerkit logger
    """
    global _handler
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    with _lock:
        if _handler is None:
            _handler = handler or logging.StreamHandler(stream or sys.stderr)
            _handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(_handler)
            logger.propagate = False

    return logger


def reset_logging() -> None:
    """Remove the installed handler. FOR TESTING ONLY."""
    global _handler
    logger = logging.getLogger(LOGGER_NAME)
    with _lock:
        if _handler is not None:
            logger.removeHandler(_handler)
            _handler = None
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
