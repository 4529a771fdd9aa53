"""Pytest configuration and fixtures."""

import pytest
from unittest.mock import MagicMock

from config import reset_config
from resources.registry import reset_registry


@pytest.fixture(autouse=True)
def reset_globals():
    """Reset config and registry singletons between tests."""
    reset_config()
    reset_registry()
    yield
    reset_config()
    reset_registry()


@pytest.fixture
def mock_plugins_admin():
    """Create a mock PluginsAdmin."""
    return MagicMock()


@pytest.fixture
def mock_consumers_admin():
    """Create a mock ConsumersAdmin."""
    return MagicMock()


@pytest.fixture
def mock_client(mock_plugins_admin, mock_consumers_admin):
    """Create a mock KongAdminClient wired to the admin mocks."""
    client = MagicMock()
    client.plugins.return_value = mock_plugins_admin
    client.consumers.return_value = mock_consumers_admin
    return client


@pytest.fixture
def sample_remote_plugin():
    """Plugin object as returned by the Kong Admin API."""
    return {
        "id": "4d924084-1adb-40a5-c042-63b19db421d1",
        "name": "rate-limiting",
        "service_id": "5fd1z584-1adb-40a5-c042-63b19db49x21",
        "route_id": None,
        "consumer_id": None,
        "enabled": True,
        "created_at": 1422386534,
        "config": {
            "minute": 20,
            "hour": 500,
            "policy": "cluster",
            "id": "injected-id",
            "created_at": 1422386534,
        },
    }


@pytest.fixture
def sample_consumer_config_body():
    """Raw response body for a consumer plugin config."""
    return (
        '{"id": "cfg-1", "consumer_id": "c1", "created_at": 1500000000, '
        '"key": "secret-key"}'
    )
