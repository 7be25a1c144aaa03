"""Jira adapter.

Recognizes the issue selected on a Jira page, fetches it from the Jira
REST API v3 and converts its ADF description to Markdown.

Supported page URLs:
- Backlog and active sprints:
  https://<site>.atlassian.net/secure/RapidBoard.jspa?...&selectedIssue=<ISSUE-KEY>
- Issues and filters: https://<site>.atlassian.net/projects/<PROJECT-KEY>/issues/<ISSUE-KEY>
- Issue view: https://<site>.atlassian.net/browse/<ISSUE-KEY>

Self-managed instances are recognized by the ``jira`` id on the document
body. They may be served from a path prefix (e.g. https://host/jira/browse/KEY)
and may carry a ``/jira/software`` product segment before the route.

API reference: https://developer.atlassian.com/cloud/jira/platform/rest/v3/
"""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import quote

import httpx

from ticketscan.config.settings import Settings
from ticketscan.integrations.adapters.base import TicketData, Tracker, TrackerAdapter
from ticketscan.integrations.adapters.registry import AdapterRegistry
from ticketscan.integrations.adf import adf_to_markdown
from ticketscan.integrations.client import ApiClient
from ticketscan.integrations.page import PageDocument, PageUrl, StaticPageDocument
from ticketscan.integrations.routes import PathTemplate, match_first

logger = logging.getLogger(__name__)

# Atlassian Cloud sites live under this domain
CLOUD_DOMAIN_SUFFIX = ".atlassian.net"

# Self-managed Jira renders <body id="jira">
BODY_MARKER_ID = "jira"

# REST API root, relative to the instance base URL
API_ROOT = "/rest/api/3"

# Query parameter naming the issue opened on board and sprint views
SELECTED_ISSUE_PARAM = "selectedIssue"

# Product segment some Jira Software routes are nested under
PRODUCT_SEGMENT = "/jira/software"

# Known page routes, stripped from the end of the path to find the
# instance's mount point. The optional single-letter segment covers the
# "/jira/software/c/" cloud variant.
_PAGE_ROUTE_SUFFIX = re.compile(
    r"/(jira/software/([^/]/)?)?"
    r"(browse/[^/]+|projects/[^/]+/issues/[^/]+|projects/[^/]+/boards/.*|secure/RapidBoard\.jspa)$"
)

# Routes that identify a single issue, in priority order
ISSUE_ROUTES: tuple[PathTemplate, ...] = (
    PathTemplate("/projects/:project/issues/:id"),
    PathTemplate("/browse/:id"),
)


def is_jira_page(url: PageUrl, document: PageDocument) -> bool:
    """Check whether a page is served by Jira.

    Cloud sites are recognized by domain; self-managed instances on any
    domain by the body marker id.
    """
    if url.host.endswith(CLOUD_DOMAIN_SUFFIX):
        return True
    return document.body_id == BODY_MARKER_ID


def get_path_prefix(url: PageUrl) -> str:
    """Return the path the Jira instance is mounted under.

    The known page route is removed from the end of the path. Cloud sites
    and root-mounted instances yield "". If no known route matches, the
    whole path is returned.
    """
    return _PAGE_ROUTE_SUFFIX.sub("", url.path, count=1)


def get_selected_issue_id(url: PageUrl, prefix: str = "") -> str | None:
    """Extract the key of the issue the page shows.

    The ``selectedIssue`` query parameter wins over the path. Otherwise the
    path, with the mount prefix and product segment removed, is matched
    against the issue routes.

    Args:
        url: Page URL
        prefix: Mount prefix from get_path_prefix

    Returns:
        Issue key or id as it appears in the URL, or None
    """
    selected = url.get_param(SELECTED_ISSUE_PARAM)
    if selected:
        return selected

    path = url.path[len(prefix) :]
    if path.startswith(PRODUCT_SEGMENT):
        path = path[len(PRODUCT_SEGMENT) :]

    matched = match_first(ISSUE_ROUTES, path)
    if matched is None:
        return None
    _template, params = matched
    return params["id"]


def extract_ticket_info(record: dict[str, Any], host: str) -> TicketData:
    """Map a Jira issue record to TicketData.

    Args:
        record: Issue JSON from GET /rest/api/3/issue/{key}
        host: Host of the scanned page

    Returns:
        The ticket, with its canonical browse URL on ``host``

    Raises:
        KeyError, TypeError: If the record lacks the expected fields
    """
    ticket_id = record["key"]
    fields = record["fields"]

    return TicketData(
        type=fields["issuetype"]["name"].lower(),
        id=ticket_id,
        title=fields["summary"],
        description=adf_to_markdown(fields.get("description")),
        url=f"https://{host}/browse/{ticket_id}",
    )


@AdapterRegistry.register
class JiraAdapter(TrackerAdapter):
    """Adapter for Jira Cloud and self-managed Jira pages."""

    TRACKER = Tracker.JIRA

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize JiraAdapter.

        Args:
            settings: Credentials and timeout; read from the environment
                when not given
            http_client: Optional shared HTTP client for connection pooling
        """
        self._settings = settings if settings is not None else Settings.from_env()
        self._http_client = http_client

    @property
    def name(self) -> str:
        return "Jira"

    def is_applicable(self, url: PageUrl, document: PageDocument) -> bool:
        return is_jira_page(url, document)

    def api_client(self, url: PageUrl, prefix: str) -> ApiClient:
        """Build an API client for the instance serving the page."""
        return ApiClient(
            f"{url.origin}{prefix}{API_ROOT}",
            credentials=self._settings.credentials,
            timeout_seconds=self._settings.timeout_seconds,
            http_client=self._http_client,
        )

    async def scan(self, url: PageUrl, document: PageDocument) -> list[TicketData]:
        """Fetch the issue selected on a Jira page.

        Returns:
            A single ticket, or an empty list when the page is not a Jira
            page or does not show a specific issue
        """
        if not self.is_applicable(url, document):
            logger.debug("Not a Jira page: %s", url.href)
            return []

        prefix = get_path_prefix(url)
        issue_id = get_selected_issue_id(url, prefix)
        if not issue_id:
            logger.debug("No selected issue on Jira page %s", url.href)
            return []

        client = self.api_client(url, prefix)
        record = await client.get_json(f"issue/{quote(issue_id, safe='')}", ticket_id=issue_id)
        ticket = extract_ticket_info(record, url.host)
        logger.debug("Found Jira issue %s on %s", ticket.id, url.href)
        return [ticket]


async def scan(
    url: str | PageUrl,
    document: PageDocument | None = None,
    *,
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> list[TicketData]:
    """Scan a page for the Jira issue it shows.

    Args:
        url: Page URL, as a string or parsed
        document: Page document; defaults to one without a body id
        settings: Credentials and timeout (defaults to the environment)
        http_client: Optional shared HTTP client

    Returns:
        Zero or one tickets
    """
    page_url = url if isinstance(url, PageUrl) else PageUrl.parse(url)
    adapter = JiraAdapter(settings=settings, http_client=http_client)
    return await adapter.scan(page_url, document or StaticPageDocument())


__all__ = [
    "API_ROOT",
    "BODY_MARKER_ID",
    "CLOUD_DOMAIN_SUFFIX",
    "ISSUE_ROUTES",
    "JiraAdapter",
    "extract_ticket_info",
    "get_path_prefix",
    "get_selected_issue_id",
    "is_jira_page",
    "scan",
]
