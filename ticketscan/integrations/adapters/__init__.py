"""Tracker adapters.

Importing this package registers every built-in adapter with
AdapterRegistry.
"""

from ticketscan.integrations.adapters.base import TicketData, Tracker, TrackerAdapter
from ticketscan.integrations.adapters.jira import JiraAdapter
from ticketscan.integrations.adapters.registry import AdapterRegistry

__all__ = [
    "AdapterRegistry",
    "JiraAdapter",
    "TicketData",
    "Tracker",
    "TrackerAdapter",
]
