"""Tests for ticketscan.integrations.scanner module."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.helpers import make_issue_record, make_response
from ticketscan.integrations.adapters.base import TicketData, TrackerAdapter
from ticketscan.integrations.exceptions import TicketFetchError
from ticketscan.integrations.page import PageContext, PageUrl, StaticPageDocument
from ticketscan.integrations.scanner import scan_context, scan_page


def make_ticket(ticket_id: str) -> TicketData:
    return TicketData(
        type="task",
        id=ticket_id,
        title=f"Ticket {ticket_id}",
        description=None,
        url=f"https://tracker.example/browse/{ticket_id}",
    )


def make_adapter(name: str, tickets: list[TicketData]) -> MagicMock:
    adapter = MagicMock(spec=TrackerAdapter)
    adapter.name = name
    adapter.scan = AsyncMock(return_value=tickets)
    return adapter


class TestScanPage:
    """Tests for scan_page."""

    @pytest.mark.asyncio
    async def test_uses_registered_adapters(self, settings, mock_http_client):
        tickets = await scan_page(
            "https://acme.atlassian.net/browse/ACME-42",
            settings=settings,
            http_client=mock_http_client,
        )

        assert [t.id for t in tickets] == ["ACME-42"]

    @pytest.mark.asyncio
    async def test_unrelated_page_yields_nothing(self, settings, mock_http_client):
        tickets = await scan_page(
            "https://example.com/browse/X-1",
            settings=settings,
            http_client=mock_http_client,
        )

        assert tickets == []
        mock_http_client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_document_passed_to_adapters(self, settings, mock_http_client):
        mock_http_client.get.return_value = make_response(make_issue_record(key="OPS-3"))

        tickets = await scan_page(
            PageUrl.parse("https://tracker.internal.example/jira/browse/OPS-3"),
            StaticPageDocument(body_id="jira"),
            settings=settings,
            http_client=mock_http_client,
        )

        assert [t.url for t in tickets] == ["https://tracker.internal.example/browse/OPS-3"]

    @pytest.mark.asyncio
    async def test_invalid_url(self):
        with pytest.raises(ValueError):
            await scan_page("not a url", adapters=[])


class TestScanContext:
    """Tests for scan_context with explicit adapters."""

    @pytest.mark.asyncio
    async def test_results_concatenated_in_adapter_order(self):
        first = make_adapter("First", [make_ticket("A-1")])
        empty = make_adapter("Empty", [])
        second = make_adapter("Second", [make_ticket("B-1"), make_ticket("B-2")])
        page = PageContext.from_url("https://tracker.example/browse/A-1")

        tickets = await scan_context(page, adapters=[first, empty, second])

        assert [t.id for t in tickets] == ["A-1", "B-1", "B-2"]
        first.scan.assert_awaited_once_with(page.url, page.document)
        empty.scan.assert_awaited_once_with(page.url, page.document)

    @pytest.mark.asyncio
    async def test_no_adapters(self):
        page = PageContext.from_url("https://tracker.example/browse/A-1")

        assert await scan_context(page, adapters=[]) == []

    @pytest.mark.asyncio
    async def test_failure_fails_the_scan(self):
        failing = make_adapter("Failing", [])
        failing.scan.side_effect = TicketFetchError("boom", url="https://tracker.example")
        later = make_adapter("Later", [make_ticket("B-1")])
        page = PageContext.from_url("https://tracker.example/browse/A-1")

        with pytest.raises(TicketFetchError):
            await scan_context(page, adapters=[failing, later])

        later.scan.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_settings_read_from_environment(self, monkeypatch, mock_http_client):
        monkeypatch.setenv("TICKETSCAN_JIRA_SESSION", "JSESSIONID=env")
        monkeypatch.delenv("TICKETSCAN_JIRA_TOKEN", raising=False)
        monkeypatch.delenv("TICKETSCAN_JIRA_EMAIL", raising=False)
        monkeypatch.delenv("TICKETSCAN_JIRA_API_TOKEN", raising=False)
        page = PageContext.from_url("https://acme.atlassian.net/browse/ACME-42")

        await scan_context(page, http_client=mock_http_client)

        headers = mock_http_client.get.call_args.kwargs["headers"]
        assert headers["Cookie"] == "JSESSIONID=env"
