"""Tests for ticketscan.utils.logging module."""

import importlib
import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

import ticketscan.utils.logging as logging_module

API = "https://acme.atlassian.net/rest/api/3"


@pytest.fixture(autouse=True)
def restore_logging_module():
    """Reload the module with the real environment after each test."""
    yield
    logger = logging.getLogger("ticketscan")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logging_module._logger = None
    importlib.reload(logging_module)


class TestLogging:
    """Tests for logging functionality."""

    def test_log_disabled_by_default(self):
        """Logging is disabled when TICKETSCAN_LOG is not set."""
        with patch.dict(os.environ, {}, clear=True):
            importlib.reload(logging_module)

            assert logging_module.LOG_ENABLED is False

    def test_log_enabled_with_env_var(self):
        """Logging is enabled when TICKETSCAN_LOG=true."""
        with patch.dict(os.environ, {"TICKETSCAN_LOG": "TRUE"}):
            importlib.reload(logging_module)

            assert logging_module.LOG_ENABLED is True

    def test_log_file_default_path(self):
        """Default log file is in home directory."""
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("TICKETSCAN_LOG_FILE", None)
            importlib.reload(logging_module)

            assert logging_module.LOG_FILE == Path.home() / ".ticketscan.log"

    def test_log_file_custom_path(self, tmp_path):
        """Custom log file path from environment."""
        custom_path = str(tmp_path / "custom.log")
        with patch.dict(os.environ, {"TICKETSCAN_LOG_FILE": custom_path}):
            importlib.reload(logging_module)

            assert str(logging_module.LOG_FILE) == custom_path

    def test_setup_logging_disabled_uses_null_handler(self):
        with patch.object(logging_module, "LOG_ENABLED", False):
            logging_module._logger = None
            logger = logging_module.setup_logging()

        assert logger.name == "ticketscan"
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_setup_logging_is_cached(self):
        logging_module._logger = None

        assert logging_module.setup_logging() is logging_module.get_logger()

    def test_enabled_logging_writes_file(self, tmp_path):
        log_file = tmp_path / "logs" / "ticketscan.log"
        with (
            patch.object(logging_module, "LOG_ENABLED", True),
            patch.object(logging_module, "LOG_FILE", log_file),
        ):
            logging_module._logger = None
            logging_module.log_message("hello")
            logging_module.log_request("GET", f"{API}/issue/A-1", 200)
            logging_module.log_request("GET", f"{API}/issue/A-2")
            for handler in logging_module.get_logger().handlers:
                handler.flush()

        content = log_file.read_text()
        assert "hello" in content
        assert f"REQUEST: GET {API}/issue/A-1 | STATUS: 200" in content
        assert "issue/A-2 | STATUS: no response" in content

    def test_module_loggers_propagate_to_package_logger(self, tmp_path):
        log_file = tmp_path / "ticketscan.log"
        with (
            patch.object(logging_module, "LOG_ENABLED", True),
            patch.object(logging_module, "LOG_FILE", log_file),
        ):
            logging_module._logger = None
            logging_module.setup_logging()
            logging.getLogger("ticketscan.integrations.client").debug("GET somewhere")
            for handler in logging_module.get_logger().handlers:
                handler.flush()

        assert "GET somewhere" in log_file.read_text()
