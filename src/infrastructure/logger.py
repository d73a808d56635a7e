"""
Logger Module

Named loggers shared by the collaborators, the service and the CLI.
Console output at INFO, a DEBUG log file at the project root (or at
$PUNCH_REPORT_LOG_FILE).
"""

import logging
import os
import sys
from pathlib import Path

LOG_FILE_ENV = "PUNCH_REPORT_LOG_FILE"

_DEFAULT_LOG_FILE = Path(__file__).parent.parent.parent / "app.log"

_FORMATTER = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)


def get_logger(name: str) -> logging.Logger:
    """
    Get or create a logger with console and file handlers.

    Args:
        name: Component name, e.g. "ReportService"
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(_FORMATTER)
    logger.addHandler(console_handler)

    log_path = Path(os.environ.get(LOG_FILE_ENV) or _DEFAULT_LOG_FILE)
    try:
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    except OSError as e:
        logger.warning(f"Could not open log file {log_path}, logging to console only: {e}")
    else:
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(_FORMATTER)
        logger.addHandler(file_handler)

    return logger


def set_console_level(level: int) -> None:
    """Change the console threshold of every logger created by get_logger."""
    for logger in logging.Logger.manager.loggerDict.values():
        if not isinstance(logger, logging.Logger):
            continue
        for handler in logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(level)
