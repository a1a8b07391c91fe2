"""
Logging setup for the ``kaleido`` namespace.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def _reset_handlers(logger: logging.Logger) -> None:
    # close before dropping so file handles from an earlier run are released
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Point the package logger at stderr and, optionally, a log file.

    Safe to call repeatedly (e.g. once per ``main()``): previous handlers
    are closed and replaced.

    Args:
        level: Logging level for the logger and all of its handlers.
        log_file: Optional file path; truncated on each call.
    """
    logger = logging.getLogger("kaleido")
    logger.setLevel(level)
    _reset_handlers(logger)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stderr)]  # stdout is kept for usage text
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to %d handler(s) at %s", len(handlers), logging.getLevelName(level))
    return logger
