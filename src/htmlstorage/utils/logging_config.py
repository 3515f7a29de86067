"""
Logging setup for the editor.
"""

import logging
import os
import sys
from typing import Final, Optional

LOG_FORMAT: Final[str] = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: Optional[str] = None, log_file: Optional[str] = "htmlstorage.log",
                 console: bool = False) -> logging.Logger:
    """
    Set up a logger whose level comes from the LOG_LEVEL environment variable.

    Falls back to INFO if LOG_LEVEL is not set or not a level name.

    Args:
        name: Logger name; the root logger if None
        log_file: File to log to, or None for no file
        console: Whether to also log to stderr (leave off while curses owns the terminal)

    Returns:
        The configured logger
    """

    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers = []

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger
