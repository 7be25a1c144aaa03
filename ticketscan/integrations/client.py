"""Minimal REST client for tracker APIs.

ApiClient wraps httpx with the behavior the adapters rely on: credentials
applied to every request, a per-request timeout, JSON body parsing, and
non-2xx responses surfaced as TicketFetchError. There is no retry at this
layer; a failed request fails the whole scan.

HTTP Client Sharing:
    Callers may inject a shared ``httpx.AsyncClient`` to get connection
    pooling across scans. The timeout is still applied per request. Without
    an injected client, a short-lived client is created for each request.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ticketscan.config.settings import (
    DEFAULT_TIMEOUT_SECONDS,
    AuthScheme,
    JiraCredentials,
)
from ticketscan.integrations.exceptions import (
    MalformedRecordError,
    TicketFetchError,
    TicketNotFoundError,
)
from ticketscan.utils.logging import log_request

logger = logging.getLogger(__name__)

# HTTP status code for Not Found
HTTP_NOT_FOUND = 404

# Amount of an unparseable body kept on MalformedRecordError
_RAW_RESPONSE_PREVIEW = 500


class ApiClient:
    """Issue GET requests against a REST API root.

    Attributes:
        base_url: API root without trailing slash (e.g. https://host/rest/api/3)
    """

    def __init__(
        self,
        base_url: str,
        *,
        credentials: JiraCredentials | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._credentials = credentials or JiraCredentials()
        self._timeout_seconds = timeout_seconds
        self._http_client = http_client

    def url_for(self, path: str) -> str:
        """Build the absolute URL for a path relative to the API root."""
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request_kwargs(self) -> dict[str, Any]:
        """Build headers and auth for the configured credentials."""
        headers = {"Accept": "application/json"}
        kwargs: dict[str, Any] = {"headers": headers}

        creds = self._credentials
        if creds.scheme is AuthScheme.BEARER:
            headers["Authorization"] = f"Bearer {creds.token}"
        elif creds.scheme is AuthScheme.BASIC:
            kwargs["auth"] = httpx.BasicAuth(creds.email, creds.token)
        elif creds.scheme is AuthScheme.SESSION:
            headers["Cookie"] = creds.session_cookie
        return kwargs

    async def get_json(self, path: str, *, ticket_id: str | None = None) -> Any:
        """GET a resource and return its parsed JSON body.

        Args:
            path: Path relative to the API root (e.g. "issue/PROJ-1")
            ticket_id: Ticket being fetched, for 404 error context

        Returns:
            Parsed JSON body

        Raises:
            TicketNotFoundError: If the API returns 404
            TicketFetchError: For other non-2xx responses and transport failures
            MalformedRecordError: If the body is not valid JSON
        """
        url = self.url_for(path)
        response = await self._get(url)
        log_request("GET", url, response.status_code)

        if response.status_code == HTTP_NOT_FOUND:
            raise TicketNotFoundError(ticket_id=ticket_id or path, url=url)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise TicketFetchError(
                f"GET {url} failed with HTTP {status}",
                url=url,
                status_code=status,
                original_error=e,
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise MalformedRecordError(
                f"Response from {url} is not valid JSON: {e}",
                url=url,
                raw_response=response.text[:_RAW_RESPONSE_PREVIEW],
            ) from e

    async def _get(self, url: str) -> httpx.Response:
        """Send the GET using the shared client or a short-lived one."""
        kwargs = self._request_kwargs()
        timeout = httpx.Timeout(self._timeout_seconds)
        logger.debug("GET %s", url)
        try:
            if self._http_client is not None:
                return await self._http_client.get(url, timeout=timeout, **kwargs)
            async with httpx.AsyncClient(timeout=timeout) as client:
                return await client.get(url, **kwargs)
        except httpx.TimeoutException as e:
            log_request("GET", url)
            raise TicketFetchError(
                f"GET {url} timed out after {self._timeout_seconds:g}s",
                url=url,
                original_error=e,
            ) from e
        except httpx.TransportError as e:
            log_request("GET", url)
            raise TicketFetchError(f"GET {url} failed: {e}", url=url, original_error=e) from e


__all__ = [
    "ApiClient",
    "HTTP_NOT_FOUND",
]
