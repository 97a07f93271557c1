"""
shapegeo.log - Logging module with proper Python exception handling.

Usage:
    from shapegeo import log

    log.info("Hello")
    log.warn("Something wrong")

    try:
        do_something()
    except Exception as e:
        log.error(e, "Failed to do something")  # includes traceback
"""

import logging
import traceback
from enum import IntEnum

_logger = logging.getLogger("shapegeo")
_callback = None


class Level(IntEnum):
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR


def debug(msg_or_exc, context: str = ""):
    """Log debug message or exception with context."""
    if isinstance(msg_or_exc, BaseException):
        _log_exception(Level.DEBUG, msg_or_exc, context)
    else:
        _emit(Level.DEBUG, str(msg_or_exc))


def info(msg_or_exc, context: str = ""):
    """Log info message or exception with context."""
    if isinstance(msg_or_exc, BaseException):
        _log_exception(Level.INFO, msg_or_exc, context)
    else:
        _emit(Level.INFO, str(msg_or_exc))


def warn(msg_or_exc, context: str = ""):
    """Log warning message or exception with context."""
    if isinstance(msg_or_exc, BaseException):
        _log_exception(Level.WARN, msg_or_exc, context)
    else:
        _emit(Level.WARN, str(msg_or_exc))


def warning(msg_or_exc, context: str = ""):
    """Alias for warn()."""
    warn(msg_or_exc, context)


def error(msg_or_exc, context: str = ""):
    """Log error message or exception with context."""
    if isinstance(msg_or_exc, BaseException):
        _log_exception(Level.ERROR, msg_or_exc, context)
    else:
        _emit(Level.ERROR, str(msg_or_exc))


def exception(msg: str = ""):
    """Log error with current exception traceback."""
    tb = traceback.format_exc()
    _emit(Level.ERROR, f"{msg}\n{tb}" if msg else tb)


def set_level(level):
    """Set minimal level for the shapegeo logger."""
    _logger.setLevel(int(level))


def set_callback(callback):
    """
    Install a callback(level, message) that receives every record
    passing the level filter. None removes it.
    """
    global _callback
    _callback = callback


def _emit(level: Level, message: str):
    if not _logger.isEnabledFor(level):
        return
    _logger.log(level, message)
    if _callback is not None:
        _callback(level, message)


def _log_exception(level: Level, exc: BaseException, context: str):
    """Format and log exception with traceback."""
    exc_type = type(exc).__name__
    exc_msg = str(exc)

    # Get traceback if available
    tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    if context:
        full_msg = f"{context}: {exc_type}: {exc_msg}\n{tb}"
    else:
        full_msg = f"{exc_type}: {exc_msg}\n{tb}"

    _emit(level, full_msg)
