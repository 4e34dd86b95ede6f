"""Logging bootstrap shared by the desktop app and the terminal tool."""

import logging

from core.config import LOG_FORMAT, LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL) -> None:
    """
    Route log records to stderr using the project's format.

    Core modules only ever call logging.getLogger(__name__); this is the
    one place that decides where the records end up. Calling it twice is
    harmless because basicConfig is a no-op once handlers exist.
    """
    numeric_level = getattr(logging, level, None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
