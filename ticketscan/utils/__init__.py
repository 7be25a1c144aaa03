"""Utility modules for ticketscan.

This package contains:
- console: Rich-based terminal output utilities
- errors: Base exception and exit codes
- logging: Logging configuration
"""

from ticketscan.utils.console import (
    console,
    print_error,
    print_info,
    print_warning,
)
from ticketscan.utils.errors import ConfigValidationError, ExitCode, TicketScanError
from ticketscan.utils.logging import log_message, log_request, setup_logging

__all__ = [
    # Console
    "console",
    "print_error",
    "print_warning",
    "print_info",
    # Errors
    "ExitCode",
    "TicketScanError",
    "ConfigValidationError",
    # Logging
    "setup_logging",
    "log_message",
    "log_request",
]
