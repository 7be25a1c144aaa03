"""Tests for ticketscan.integrations.adapters.registry module."""

import logging
from unittest.mock import MagicMock

import pytest

from ticketscan.config.settings import Settings
from ticketscan.integrations.adapters import JiraAdapter
from ticketscan.integrations.adapters.base import Tracker, TrackerAdapter
from ticketscan.integrations.adapters.registry import AdapterRegistry


class StubAdapter(TrackerAdapter):
    """Adapter with no dependencies, for registry tests."""

    TRACKER = Tracker.JIRA

    @property
    def name(self) -> str:
        return "Stub"

    def is_applicable(self, url, document):
        return False

    async def scan(self, url, document):
        return []


@pytest.fixture
def isolated_registry():
    """Run a test against an empty registry and restore it afterwards."""
    saved = dict(AdapterRegistry._adapters)
    AdapterRegistry.clear()
    yield AdapterRegistry
    AdapterRegistry.clear()
    AdapterRegistry._adapters.update(saved)


class TestRegistration:
    """Tests for AdapterRegistry.register."""

    def test_jira_registered_on_import(self):
        assert Tracker.JIRA in AdapterRegistry.list_trackers()
        assert AdapterRegistry.get_adapter_class(Tracker.JIRA) is JiraAdapter

    def test_register_returns_class(self, isolated_registry):
        assert isolated_registry.register(StubAdapter) is StubAdapter
        assert isolated_registry.get_adapter_class(Tracker.JIRA) is StubAdapter

    def test_rejects_non_adapter(self, isolated_registry):
        with pytest.raises(TypeError, match="subclass of TrackerAdapter"):
            isolated_registry.register(object)

    def test_rejects_missing_tracker(self, isolated_registry):
        class NoTracker(TrackerAdapter):
            @property
            def name(self) -> str:
                return "None"

            def is_applicable(self, url, document):
                return False

            async def scan(self, url, document):
                return []

        with pytest.raises(TypeError, match="TRACKER"):
            isolated_registry.register(NoTracker)

    def test_replacement_logs_warning(self, isolated_registry, caplog):
        isolated_registry.register(JiraAdapter)

        with caplog.at_level(logging.WARNING):
            isolated_registry.register(StubAdapter)

        assert "Replacing existing adapter JiraAdapter with StubAdapter" in caplog.text

    def test_clear(self, isolated_registry):
        isolated_registry.register(StubAdapter)
        isolated_registry.clear()

        assert isolated_registry.list_trackers() == []
        assert isolated_registry.get_adapter_class(Tracker.JIRA) is None


class TestCreateAdapters:
    """Tests for AdapterRegistry.create_adapters."""

    def test_injects_settings_and_client(self, isolated_registry):
        isolated_registry.register(JiraAdapter)
        settings = Settings(timeout_seconds=5.0)
        http_client = MagicMock()

        adapters = isolated_registry.create_adapters(settings=settings, http_client=http_client)

        assert len(adapters) == 1
        adapter = adapters[0]
        assert isinstance(adapter, JiraAdapter)
        assert adapter._settings is settings
        assert adapter._http_client is http_client

    def test_adapter_without_dependencies(self, isolated_registry):
        isolated_registry.register(StubAdapter)

        adapters = isolated_registry.create_adapters(settings=Settings(), http_client=MagicMock())

        assert [type(a) for a in adapters] == [StubAdapter]

    def test_fresh_instances(self, isolated_registry):
        isolated_registry.register(StubAdapter)

        first = isolated_registry.create_adapters()
        second = isolated_registry.create_adapters()

        assert first[0] is not second[0]

    def test_empty_registry(self, isolated_registry):
        assert isolated_registry.create_adapters() == []
