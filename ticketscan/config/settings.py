"""Settings dataclass for ticketscan configuration.

Settings are read from environment variables only; the scanner has no
configuration file. Validation is fail-fast: a malformed value raises
ConfigValidationError instead of silently falling back to a default.

Environment Variables:
    TICKETSCAN_JIRA_TOKEN: Bearer token (personal access token)
    TICKETSCAN_JIRA_EMAIL: Account email for basic auth
    TICKETSCAN_JIRA_API_TOKEN: API token for basic auth
    TICKETSCAN_JIRA_SESSION: Cookie header of an existing session (e.g. "JSESSIONID=...")
    TICKETSCAN_TIMEOUT: Request timeout in seconds (default: 30)
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from ticketscan.utils.errors import ConfigValidationError

DEFAULT_TIMEOUT_SECONDS = 30.0
MAX_TIMEOUT_SECONDS = 300.0


class AuthScheme(Enum):
    """How requests to the Jira REST API authenticate.

    Attributes:
        ANONYMOUS: No credentials (public instances)
        BEARER: Personal access token in the Authorization header
        BASIC: Account email and API token
        SESSION: Existing browser session cookie
    """

    ANONYMOUS = "anonymous"
    BEARER = "bearer"
    BASIC = "basic"
    SESSION = "session"


@dataclass(frozen=True)
class JiraCredentials:
    """Credentials for the Jira REST API.

    Only the fields relevant to ``scheme`` are populated.
    """

    scheme: AuthScheme = AuthScheme.ANONYMOUS
    token: str = ""
    email: str = ""
    session_cookie: str = ""

    def __repr__(self) -> str:
        # Never print secrets
        return f"JiraCredentials(scheme={self.scheme.value!r}, email={self.email!r})"


@dataclass
class Settings:
    """Configuration settings for ticketscan.

    Attributes:
        credentials: Credentials used for Jira API requests
        timeout_seconds: Per-request timeout for API calls
    """

    credentials: JiraCredentials = field(default_factory=JiraCredentials)
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Populated Settings instance

        Raises:
            ConfigValidationError: If any value is malformed
        """
        env = os.environ if environ is None else environ
        return cls(
            credentials=parse_credentials(env),
            timeout_seconds=parse_timeout(env.get("TICKETSCAN_TIMEOUT")),
        )


def parse_timeout(value: str | None) -> float:
    """Parse a request timeout in seconds.

    Args:
        value: Raw string value, or None when unset

    Returns:
        Timeout in seconds

    Raises:
        ConfigValidationError: If value is not a positive number within bounds
    """
    if value is None or value.strip() == "":
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(value.strip())
    except ValueError:
        raise ConfigValidationError(
            f"Invalid TICKETSCAN_TIMEOUT '{value}': expected a number of seconds"
        ) from None
    if not math.isfinite(timeout) or timeout <= 0 or timeout > MAX_TIMEOUT_SECONDS:
        raise ConfigValidationError(
            f"TICKETSCAN_TIMEOUT must be greater than 0 and at most "
            f"{MAX_TIMEOUT_SECONDS:g} seconds, got {value}"
        )
    return timeout


def parse_credentials(env: Mapping[str, str]) -> JiraCredentials:
    """Pick the Jira credentials configured in the environment.

    Precedence: bearer token, then basic auth, then session cookie.
    With nothing configured, requests are anonymous.

    Raises:
        ConfigValidationError: If basic auth is only half configured
    """
    token = env.get("TICKETSCAN_JIRA_TOKEN", "").strip()
    if token:
        return JiraCredentials(scheme=AuthScheme.BEARER, token=token)

    email = env.get("TICKETSCAN_JIRA_EMAIL", "").strip()
    api_token = env.get("TICKETSCAN_JIRA_API_TOKEN", "").strip()
    if email and api_token:
        return JiraCredentials(scheme=AuthScheme.BASIC, email=email, token=api_token)
    if email or api_token:
        missing = "TICKETSCAN_JIRA_API_TOKEN" if email else "TICKETSCAN_JIRA_EMAIL"
        raise ConfigValidationError(f"Basic auth is incomplete: {missing} is not set")

    session = env.get("TICKETSCAN_JIRA_SESSION", "").strip()
    if session:
        return JiraCredentials(scheme=AuthScheme.SESSION, session_cookie=session)

    return JiraCredentials()


__all__ = [
    "AuthScheme",
    "DEFAULT_TIMEOUT_SECONDS",
    "JiraCredentials",
    "MAX_TIMEOUT_SECONDS",
    "Settings",
    "parse_credentials",
    "parse_timeout",
]
