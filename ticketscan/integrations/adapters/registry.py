"""Adapter registry.

Adapters register themselves with a class decorator; the scanner asks the
registry for one fresh instance of every registered adapter per scan.

Example usage:
    @AdapterRegistry.register
    class JiraAdapter(TrackerAdapter):
        TRACKER = Tracker.JIRA
        ...

    adapters = AdapterRegistry.create_adapters(settings=settings)
"""

from __future__ import annotations

import inspect
import logging
import threading
from typing import ClassVar

import httpx

from ticketscan.config.settings import Settings
from ticketscan.integrations.adapters.base import Tracker, TrackerAdapter

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Registry of tracker adapter classes.

    All methods are class methods - no instance needed. Registrations are
    protected by a lock so adapters may be registered from any thread.
    """

    _adapters: ClassVar[dict[Tracker, type[TrackerAdapter]]] = {}
    _lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def register(cls, adapter_class: type[TrackerAdapter]) -> type[TrackerAdapter]:
        """Decorator to register an adapter class.

        Raises:
            TypeError: If adapter_class is not a TrackerAdapter subclass or
                lacks a Tracker-valued TRACKER attribute
        """
        if not isinstance(adapter_class, type) or not issubclass(adapter_class, TrackerAdapter):
            raise TypeError(
                f"Adapter class must be a subclass of TrackerAdapter, "
                f"got {type(adapter_class).__name__}"
            )

        tracker = getattr(adapter_class, "TRACKER", None)
        if not isinstance(tracker, Tracker):
            raise TypeError(
                f"Adapter class {adapter_class.__name__} must have a TRACKER "
                f"class attribute holding a Tracker enum value"
            )

        with cls._lock:
            existing = cls._adapters.get(tracker)
            if existing is not None and existing is not adapter_class:
                logger.warning(
                    f"Replacing existing adapter {existing.__name__} "
                    f"with {adapter_class.__name__} for tracker {tracker.name}"
                )
            cls._adapters[tracker] = adapter_class

        return adapter_class

    @classmethod
    def get_adapter_class(cls, tracker: Tracker) -> type[TrackerAdapter] | None:
        with cls._lock:
            return cls._adapters.get(tracker)

    @classmethod
    def list_trackers(cls) -> list[Tracker]:
        """List registered trackers, sorted by name for deterministic order."""
        with cls._lock:
            return sorted(cls._adapters.keys(), key=lambda t: t.name)

    @classmethod
    def create_adapters(
        cls,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> list[TrackerAdapter]:
        """Instantiate every registered adapter.

        Dependencies are injected based on each adapter's __init__ signature.

        Args:
            settings: Settings passed to adapters accepting ``settings``
            http_client: Shared client passed to adapters accepting ``http_client``

        Returns:
            One adapter per registered tracker, in list_trackers order
        """
        with cls._lock:
            classes = [cls._adapters[t] for t in sorted(cls._adapters, key=lambda t: t.name)]

        adapters = []
        for adapter_class in classes:
            params = inspect.signature(adapter_class.__init__).parameters
            kwargs: dict[str, object] = {}
            if "settings" in params and settings is not None:
                kwargs["settings"] = settings
            if "http_client" in params and http_client is not None:
                kwargs["http_client"] = http_client
            # Dynamic injection based on runtime inspection - mypy can't verify this
            adapters.append(adapter_class(**kwargs))  # type: ignore[arg-type]
        return adapters

    @classmethod
    def clear(cls) -> None:
        """Remove all registrations. Intended for tests."""
        with cls._lock:
            cls._adapters.clear()


__all__ = ["AdapterRegistry"]
