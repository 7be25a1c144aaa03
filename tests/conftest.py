"""Shared pytest fixtures for ticketscan tests."""

from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest

from tests.helpers import make_issue_record, make_response
from ticketscan.config.settings import Settings

# Enable pytest-asyncio for async test support
pytest_plugins = ("pytest_asyncio",)


@pytest.fixture
def issue_record() -> dict[str, Any]:
    """A bug record without description."""
    return make_issue_record()


@pytest.fixture
def mock_http_client(issue_record: dict[str, Any]) -> AsyncMock:
    """Shared AsyncClient mock whose GET returns issue_record."""
    client = AsyncMock(spec=httpx.AsyncClient)
    client.get.return_value = make_response(issue_record)
    return client


@pytest.fixture
def settings() -> Settings:
    """Anonymous settings with the default timeout."""
    return Settings()
