"""Configuration for ticketscan."""

from ticketscan.config.settings import (
    AuthScheme,
    JiraCredentials,
    Settings,
    parse_credentials,
    parse_timeout,
)
from ticketscan.utils.errors import ConfigValidationError

__all__ = [
    "AuthScheme",
    "ConfigValidationError",
    "JiraCredentials",
    "Settings",
    "parse_credentials",
    "parse_timeout",
]
