"""Logging configuration for jj-tui.

The terminal belongs to the TUI, so records only ever go to a file.
"""

import logging
from pathlib import Path
from typing import Optional

LOGGER_NAME = "jj_tui"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_file: Optional[str] = None, level: int = logging.DEBUG) -> logging.Logger:
    """Configure the package logger.

    Args:
        log_file: Path of the log file; None installs a NullHandler
        level: Minimum level written to the file

    Returns:
        The "jj_tui" logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    if not log_file:
        logger.addHandler(logging.NullHandler())
        return logger

    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(path)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    logger.setLevel(level)
    logger.addHandler(file_handler)
    logger.info("Logging to %s", path)
    return logger
