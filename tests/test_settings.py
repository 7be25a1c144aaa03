"""Tests for ticketscan.config.settings module."""

import pytest

from ticketscan.config.settings import (
    DEFAULT_TIMEOUT_SECONDS,
    AuthScheme,
    JiraCredentials,
    Settings,
    parse_credentials,
    parse_timeout,
)
from ticketscan.utils.errors import ConfigValidationError, ExitCode


class TestSettingsFromEnv:
    """Tests for Settings.from_env."""

    def test_defaults(self):
        settings = Settings.from_env({})

        assert settings.credentials == JiraCredentials()
        assert settings.credentials.scheme is AuthScheme.ANONYMOUS
        assert settings.timeout_seconds == DEFAULT_TIMEOUT_SECONDS

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("TICKETSCAN_TIMEOUT", "7")
        monkeypatch.delenv("TICKETSCAN_JIRA_TOKEN", raising=False)

        assert Settings.from_env().timeout_seconds == 7.0

    def test_invalid_value_raises(self):
        with pytest.raises(ConfigValidationError):
            Settings.from_env({"TICKETSCAN_TIMEOUT": "soon"})


class TestParseTimeout:
    """Tests for parse_timeout."""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_unset_uses_default(self, value):
        assert parse_timeout(value) == DEFAULT_TIMEOUT_SECONDS

    @pytest.mark.parametrize("value,expected", [("12.5", 12.5), (" 60 ", 60.0), ("300", 300.0)])
    def test_valid(self, value, expected):
        assert parse_timeout(value) == expected

    @pytest.mark.parametrize("value", ["abc", "0", "-1", "300.5", "nan-ish", "nan", "inf"])
    def test_invalid(self, value):
        with pytest.raises(ConfigValidationError) as exc_info:
            parse_timeout(value)

        assert "TICKETSCAN_TIMEOUT" in str(exc_info.value)
        assert exc_info.value.exit_code == ExitCode.CONFIG_ERROR


class TestParseCredentials:
    """Tests for parse_credentials."""

    def test_anonymous(self):
        assert parse_credentials({}) == JiraCredentials()

    def test_bearer(self):
        creds = parse_credentials({"TICKETSCAN_JIRA_TOKEN": "pat"})

        assert creds.scheme is AuthScheme.BEARER
        assert creds.token == "pat"

    def test_basic(self):
        creds = parse_credentials(
            {"TICKETSCAN_JIRA_EMAIL": "dev@acme.test", "TICKETSCAN_JIRA_API_TOKEN": "tok"}
        )

        assert creds == JiraCredentials(scheme=AuthScheme.BASIC, email="dev@acme.test", token="tok")

    def test_session(self):
        creds = parse_credentials({"TICKETSCAN_JIRA_SESSION": "JSESSIONID=abc; atl=1"})

        assert creds.scheme is AuthScheme.SESSION
        assert creds.session_cookie == "JSESSIONID=abc; atl=1"

    def test_bearer_takes_precedence(self):
        creds = parse_credentials(
            {
                "TICKETSCAN_JIRA_TOKEN": "pat",
                "TICKETSCAN_JIRA_EMAIL": "dev@acme.test",
                "TICKETSCAN_JIRA_API_TOKEN": "tok",
                "TICKETSCAN_JIRA_SESSION": "JSESSIONID=abc",
            }
        )

        assert creds.scheme is AuthScheme.BEARER

    def test_basic_before_session(self):
        creds = parse_credentials(
            {
                "TICKETSCAN_JIRA_EMAIL": "dev@acme.test",
                "TICKETSCAN_JIRA_API_TOKEN": "tok",
                "TICKETSCAN_JIRA_SESSION": "JSESSIONID=abc",
            }
        )

        assert creds.scheme is AuthScheme.BASIC

    @pytest.mark.parametrize(
        "env,missing",
        [
            ({"TICKETSCAN_JIRA_EMAIL": "dev@acme.test"}, "TICKETSCAN_JIRA_API_TOKEN"),
            ({"TICKETSCAN_JIRA_API_TOKEN": "tok"}, "TICKETSCAN_JIRA_EMAIL"),
        ],
    )
    def test_incomplete_basic_auth(self, env, missing):
        with pytest.raises(ConfigValidationError, match=missing):
            parse_credentials(env)

    def test_blank_values_ignored(self):
        assert parse_credentials({"TICKETSCAN_JIRA_TOKEN": "  "}) == JiraCredentials()


class TestJiraCredentialsRepr:
    """Secrets never appear in the repr."""

    def test_repr_hides_token(self):
        creds = JiraCredentials(scheme=AuthScheme.BASIC, email="dev@acme.test", token="s3cret")

        assert "s3cret" not in repr(creds)
        assert "dev@acme.test" in repr(creds)

    def test_repr_hides_session(self):
        creds = JiraCredentials(scheme=AuthScheme.SESSION, session_cookie="JSESSIONID=abc")

        assert "JSESSIONID" not in repr(creds)
