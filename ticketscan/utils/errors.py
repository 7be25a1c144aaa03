"""Custom exceptions and exit codes for ticketscan.

This module defines the exit codes and the root of the exception
hierarchy used throughout the application.
"""

from enum import IntEnum
from typing import ClassVar


class ExitCode(IntEnum):
    """Process exit codes reported by the CLI.

    These codes are used for consistent error reporting and can be
    checked by calling scripts or CI systems.
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFIG_ERROR = 2
    FETCH_ERROR = 3
    NOT_FOUND = 4
    USER_CANCELLED = 130


class TicketScanError(Exception):
    """Base exception for ticketscan errors.

    All custom exceptions in this application should inherit from this class.
    Each exception type has an associated exit code for proper error reporting.
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.GENERAL_ERROR

    def __init__(self, message: str, exit_code: ExitCode | None = None) -> None:
        """Initialize the exception."""
        super().__init__(message)
        self._exit_code = exit_code

    @property
    def exit_code(self) -> ExitCode:
        """Get the exit code for this exception."""
        if self._exit_code is not None:
            return self._exit_code
        return self.__class__._default_exit_code


class ConfigValidationError(TicketScanError):
    """Configuration read from the environment is invalid.

    Raised when:
    - A numeric setting cannot be parsed or is out of range
    - Basic auth is half configured (email without API token or vice versa)
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.CONFIG_ERROR


__all__ = [
    "ExitCode",
    "TicketScanError",
    "ConfigValidationError",
]
