"""Logging configuration for ticketscan.

Logging is off unless switched on through environment variables, so that
library users embedding the scanner do not get unexpected output.

Environment Variables:
    TICKETSCAN_LOG: Set to "true" to enable logging (default: "false")
    TICKETSCAN_LOG_FILE: Path to log file (default: ~/.ticketscan.log)
"""

import logging
import os
from pathlib import Path

LOG_ENABLED = os.environ.get("TICKETSCAN_LOG", "false").lower() == "true"
LOG_FILE = Path(os.environ.get("TICKETSCAN_LOG_FILE", str(Path.home() / ".ticketscan.log")))

# Module-level logger instance
_logger: logging.Logger | None = None


def setup_logging() -> logging.Logger:
    """Configure the package logger based on environment variables.

    Attaches a file handler to the "ticketscan" logger when TICKETSCAN_LOG
    is "true". Otherwise a NullHandler keeps the logger silent. Module
    loggers created with ``logging.getLogger(__name__)`` propagate here.

    Returns:
        Configured logger instance
    """
    global _logger

    if _logger is not None:
        return _logger

    logger = logging.getLogger("ticketscan")
    logger.handlers.clear()

    if LOG_ENABLED:
        LOG_FILE.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.FileHandler(LOG_FILE)
        handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.addHandler(logging.NullHandler())

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Get the configured logger instance, creating it if necessary."""
    global _logger
    if _logger is None:
        return setup_logging()
    return _logger


def log_message(message: str) -> None:
    """Log a message if logging is enabled.

    Args:
        message: Message to log
    """
    logger = get_logger()
    logger.info(message)


def log_request(method: str, url: str, status_code: int | None = None) -> None:
    """Log an outgoing HTTP request and its outcome.

    Args:
        method: HTTP method
        url: Full request URL
        status_code: Response status, or None if no response was received
    """
    logger = get_logger()
    outcome = status_code if status_code is not None else "no response"
    logger.info(f"REQUEST: {method} {url} | STATUS: {outcome}")


__all__ = [
    "LOG_ENABLED",
    "LOG_FILE",
    "setup_logging",
    "get_logger",
    "log_message",
    "log_request",
]
