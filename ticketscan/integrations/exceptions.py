"""Exceptions raised while fetching ticket records.

Exception hierarchy:
- TicketFetchError: the REST call failed (network error or non-2xx status)
    - TicketNotFoundError: the API answered 404 for the ticket
- MalformedRecordError: the response body could not be parsed as JSON

A page that is not a tracker page, or shows no ticket, is not an error:
adapters return an empty list for it.
"""

from __future__ import annotations

from typing import ClassVar

from ticketscan.utils.errors import ExitCode, TicketScanError


class TicketFetchError(TicketScanError):
    """Raised when the ticket record cannot be retrieved.

    Attributes:
        url: The request URL
        status_code: HTTP status of the response, or None for transport failures
        original_error: The underlying exception if available
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.FETCH_ERROR

    def __init__(
        self,
        message: str,
        url: str,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize TicketFetchError.

        Args:
            message: Description of the failure
            url: The request URL
            status_code: Optional HTTP status code
            original_error: Optional underlying exception
        """
        self.url = url
        self.status_code = status_code
        self.original_error = original_error
        super().__init__(message)


class TicketNotFoundError(TicketFetchError):
    """Raised when the API reports the ticket does not exist (HTTP 404).

    Attributes:
        ticket_id: The ticket identifier that was requested
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.NOT_FOUND

    def __init__(self, ticket_id: str, url: str, message: str | None = None) -> None:
        self.ticket_id = ticket_id
        if message is None:
            message = f"Ticket '{ticket_id}' not found"
        super().__init__(message, url=url, status_code=404)


class MalformedRecordError(TicketScanError):
    """Raised when a response body is not valid JSON.

    Attributes:
        url: The request URL
        raw_response: The body that failed to parse (truncated)
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.FETCH_ERROR

    def __init__(self, message: str, url: str, raw_response: str | None = None) -> None:
        self.url = url
        self.raw_response = raw_response
        super().__init__(message)


__all__ = [
    "MalformedRecordError",
    "TicketFetchError",
    "TicketNotFoundError",
]
