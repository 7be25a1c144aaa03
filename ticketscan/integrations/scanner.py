"""Run every registered adapter against a page.

Adapters run one after another and their results are concatenated. An
adapter that does not recognize the page contributes nothing; an adapter
that fails to fetch a ticket it recognized fails the whole scan.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from ticketscan.config.settings import Settings
from ticketscan.integrations.adapters import AdapterRegistry, TicketData, TrackerAdapter
from ticketscan.integrations.page import PageContext, PageDocument, PageUrl, StaticPageDocument

logger = logging.getLogger(__name__)


async def scan_page(
    url: str | PageUrl,
    document: PageDocument | None = None,
    *,
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
    adapters: Sequence[TrackerAdapter] | None = None,
) -> list[TicketData]:
    """Return the tickets shown on a page.

    Args:
        url: Page URL, as a string or parsed
        document: Page document; defaults to one without a body id
        settings: Credentials and timeout (defaults to the environment)
        http_client: Optional shared HTTP client
        adapters: Adapters to run; defaults to every registered adapter

    Returns:
        Tickets from all adapters, in adapter order

    Raises:
        TicketFetchError: If an adapter fails to fetch a recognized ticket
        MalformedRecordError: If a tracker response cannot be parsed
    """
    page = PageContext(
        url=url if isinstance(url, PageUrl) else PageUrl.parse(url),
        document=document or StaticPageDocument(),
    )
    return await scan_context(page, settings=settings, http_client=http_client, adapters=adapters)


async def scan_context(
    page: PageContext,
    *,
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
    adapters: Sequence[TrackerAdapter] | None = None,
) -> list[TicketData]:
    """Like scan_page, for an already built PageContext."""
    if adapters is None:
        if settings is None:
            settings = Settings.from_env()
        adapters = AdapterRegistry.create_adapters(settings=settings, http_client=http_client)

    tickets: list[TicketData] = []
    for adapter in adapters:
        found = await adapter.scan(page.url, page.document)
        if found:
            logger.debug(f"{adapter.name}: {len(found)} ticket(s) on {page.url.href}")
        tickets.extend(found)
    return tickets


__all__ = ["scan_context", "scan_page"]
