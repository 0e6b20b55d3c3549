"""Shared pytest fixtures and configuration."""

import pytest
from unittest.mock import AsyncMock

from ace_uploader.mcp_logger import NotificationChannel
from ace_uploader.settings import ConfigStore


@pytest.fixture
def config_argv():
    """Minimal valid upload settings."""
    return ["--base-url", "https://example.com", "--token", "test-token"]


@pytest.fixture
def config_store():
    """Fresh, uninitialized configuration store."""
    return ConfigStore()


@pytest.fixture
def channel():
    """Notification channel independent of the process-wide one."""
    return NotificationChannel()


@pytest.fixture
def mock_host():
    """MCP host accepting every log message."""
    host = AsyncMock()
    host.send_log_message.return_value = None
    return host


@pytest.fixture
def failing_host():
    """MCP host whose delivery always fails."""
    host = AsyncMock()
    host.send_log_message.side_effect = ConnectionError("client not connected")
    return host
