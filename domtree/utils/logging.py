"""
Logging setup for domtree.

Every module logs through ``logging.getLogger(__name__)``, so all library
loggers sit below the ``domtree`` logger. setup_logging() attaches handlers
to that logger only and leaves the root logger to the host application.
"""

import logging
import os
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "domtree"

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"

# Marks the handlers installed by setup_logging()
_HANDLER_FLAG = "_domtree_handler"


class LogFormatter(logging.Formatter):
    """Console formatter that colors the level name of each record."""

    RESET = '\033[0m'
    LEVEL_COLORS = {
        logging.DEBUG: '\033[34m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[31m\033[1m',
    }

    def __init__(self, colored: bool = True, **kwargs):
        super().__init__(**kwargs)
        self.colored = colored

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        if not self.colored or color is None:
            return message
        return message.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)


def _to_level(level: Union[str, int, None], default: int) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        if isinstance(value, int):
            return value
    return default


def _install(logger: logging.Logger, handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_FLAG, True)
    logger.addHandler(handler)


def setup_logging(log_file: Optional[str] = None,
                  console_level: Union[str, int] = "WARNING",
                  file_level: Union[str, int] = "DEBUG") -> logging.Logger:
    """
    Configure the ``domtree`` logger.

    Handlers from an earlier call are replaced, so calling this again
    changes the levels instead of duplicating output.

    Args:
        log_file: Also write records to this file, creating its directory
        console_level: Threshold for stderr output, a level name or number
        file_level: Threshold for the log file

    Returns:
        The ``domtree`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            logger.removeHandler(handler)
            handler.close()

    console_level = _to_level(console_level, logging.WARNING)
    file_level = _to_level(file_level, logging.DEBUG)

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(LogFormatter(colored=sys.stderr.isatty(), fmt=CONSOLE_FORMAT,
                                      datefmt='%H:%M:%S'))
    _install(logger, console)

    level = console_level
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        _install(logger, file_handler)
        level = min(level, file_level)

    # domtree.dom.* records are filtered here before reaching any handler
    logger.setLevel(level)
    return logger


def log_exception(logger: logging.Logger, exception: BaseException,
                  message: str = "An exception occurred") -> None:
    """Log exception at ERROR level with its traceback."""
    logger.error("%s: %s", message, exception,
                 exc_info=(type(exception), exception, exception.__traceback__))
