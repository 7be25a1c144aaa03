"""Tracker integrations for ticketscan.

This package provides:
- page: Page URL and document model handed to adapters
- routes: Path templates for URL route matching
- client: REST client used to fetch ticket records
- exceptions: Fetch and parse errors
- adf: Atlassian Document Format to Markdown conversion
- adapters: Tracker adapters and their registry
- scanner: Runs all adapters against a page

Example usage:
    from ticketscan.integrations import scan_page

    tickets = await scan_page("https://acme.atlassian.net/browse/ACME-42")
"""

from ticketscan.integrations.adapters import (
    AdapterRegistry,
    JiraAdapter,
    TicketData,
    Tracker,
    TrackerAdapter,
)
from ticketscan.integrations.adf import adf_to_markdown
from ticketscan.integrations.client import ApiClient
from ticketscan.integrations.exceptions import (
    MalformedRecordError,
    TicketFetchError,
    TicketNotFoundError,
)
from ticketscan.integrations.page import (
    HtmlPageDocument,
    PageContext,
    PageDocument,
    PageUrl,
    StaticPageDocument,
)
from ticketscan.integrations.scanner import scan_context, scan_page

__all__ = [
    # Page model
    "HtmlPageDocument",
    "PageContext",
    "PageDocument",
    "PageUrl",
    "StaticPageDocument",
    # Adapters
    "AdapterRegistry",
    "JiraAdapter",
    "TicketData",
    "Tracker",
    "TrackerAdapter",
    # Conversion
    "adf_to_markdown",
    # HTTP
    "ApiClient",
    # Exceptions
    "MalformedRecordError",
    "TicketFetchError",
    "TicketNotFoundError",
    # Scanning
    "scan_context",
    "scan_page",
]
