"""
Logging configuration for the Freedom Number planner.

Provides a single place to configure console (and optionally file) logging
for the application and its services.
"""

import logging
from pathlib import Path
from typing import Optional, Union

# Package logger; service modules log under it via logging.getLogger(__name__)
APP_LOGGER = "freedom_number"

# Standard log format with module name and line number
LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Track if logging is already configured
_LOGGING_CONFIGURED = False


def setup_logging(
    level: Union[int, str] = logging.INFO, log_file: Optional[Path] = None
) -> None:
    """
    Configure logging for the application.

    Streamlit reruns the main script on every interaction, so repeated calls
    are ignored once handlers are installed.

    Args:
        level: Log level for the package logger (name or number)
        log_file: Optional file that also receives every message
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    app_logger = logging.getLogger(APP_LOGGER)
    app_logger.setLevel(level)
    app_logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    app_logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        app_logger.addHandler(file_handler)

    _LOGGING_CONFIGURED = True
    app_logger.debug("Logging configured at level %s", logging.getLevelName(level))
