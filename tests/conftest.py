"""Pytest fixtures."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from apps.core_api.main import app, settings
from chatwoot_tools.adapters.chatwoot import register_chatwoot_operations
from chatwoot_tools.adapters.chatwoot.client import ChatwootClient
from chatwoot_tools.adapters.chatwoot.context import OperationContext
from chatwoot_tools.node import ChatwootNode
from chatwoot_tools.registry import OperationRegistry


@pytest.fixture
def chatwoot_client():
    """Client pointed at a fake instance; tests patch its request method."""
    return ChatwootClient("https://chat.example.com/", "test-token")


@pytest.fixture
def mock_request(chatwoot_client):
    """Replace ChatwootClient.request with an AsyncMock."""
    with patch.object(chatwoot_client, "request", new_callable=AsyncMock) as mock:
        mock.return_value = {}
        yield mock


@pytest.fixture
def make_ctx(chatwoot_client):
    """Build an OperationContext for one item's parameters."""

    def factory(settings=None, item_index=0, **parameters):
        parameters.setdefault("account_id", 1)
        return OperationContext(
            client=chatwoot_client,
            parameters=parameters,
            item_index=item_index,
            settings=settings,
        )

    return factory


@pytest.fixture
def registry():
    """Registry with every Chatwoot operation."""
    registry = OperationRegistry()
    register_chatwoot_operations(registry)
    return registry


@pytest.fixture
def node(registry, chatwoot_client):
    """Executor over the fake client."""
    return ChatwootNode(registry, chatwoot_client, node_name="Chatwoot Test")


@pytest.fixture
def client(node, chatwoot_client):
    """FastAPI test client with state wired to the fake Chatwoot client.

    The lifespan is not run; state is set directly.
    """
    app.state.settings = settings
    app.state.chatwoot_client = chatwoot_client
    app.state.node = node
    app.state.trigger = None
    app.state.trigger_events = asyncio.Queue()
    return TestClient(app)
