"""Base classes for tracker adapters.

This module defines:
- Tracker enum for supported issue trackers
- TicketData, the canonical ticket shape every adapter returns
- TrackerAdapter, the abstract base class all adapters implement

An adapter looks at one page and returns the tickets it recognizes on it.
Adapters return a list so that trackers with list views can report several
tickets per page; a page the adapter does not recognize yields an empty
list rather than an error.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, ClassVar

from ticketscan.integrations.page import PageDocument, PageUrl


class Tracker(Enum):
    """Supported issue trackers."""

    JIRA = "jira"


@dataclass(frozen=True)
class TicketData:
    """A ticket recognized on a page.

    Attributes:
        type: Issue type name, lowercased (e.g. "bug")
        id: Tracker-native identifier (e.g. "PROJ-123")
        title: Ticket summary, verbatim
        description: Description as Markdown; None when the ticket has none
        url: Canonical URL of the ticket
    """

    type: str
    id: str
    title: str
    description: str | None
    url: str

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict of the ticket fields."""
        return asdict(self)


class TrackerAdapter(ABC):
    """Recognize and fetch tickets shown on a tracker's pages.

    Class Attributes:
        TRACKER: Tracker enum value used for registry registration
    """

    TRACKER: ClassVar[Tracker]

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable tracker name."""
        pass

    @abstractmethod
    def is_applicable(self, url: PageUrl, document: PageDocument) -> bool:
        """Check whether the page belongs to this adapter's tracker.

        Must not perform I/O.
        """
        pass

    @abstractmethod
    async def scan(self, url: PageUrl, document: PageDocument) -> list[TicketData]:
        """Return the tickets shown on the page.

        Returns:
            Tickets found; empty when the page is not applicable or shows
            no specific ticket

        Raises:
            TicketFetchError: If fetching a recognized ticket fails
            MalformedRecordError: If the tracker's response cannot be parsed
        """
        pass


__all__ = [
    "TicketData",
    "Tracker",
    "TrackerAdapter",
]
