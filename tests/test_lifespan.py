"""Application startup/shutdown tests."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI

from apps.core_api import main
from chatwoot_tools.adapters.chatwoot.client import ChatwootClient
from chatwoot_tools.adapters.chatwoot.exceptions import ChatwootAPIError, ChatwootConfigurationError
from chatwoot_tools.adapters.chatwoot.storage import InMemoryWebhookStore
from chatwoot_tools.adapters.chatwoot.trigger import ChatwootTrigger


@pytest.fixture
def trigger_settings():
    with patch.object(main.settings, "TRIGGER_ENABLED", True), patch.object(
        main.settings, "TRIGGER_ACCOUNT_ID", "1"
    ), patch.object(main.settings, "REDIS_URL", ""):
        yield main.settings


@pytest.mark.asyncio
async def test_failed_activation_still_releases_resources(trigger_settings):
    store = InMemoryWebhookStore()
    store.disconnect = AsyncMock()

    with patch.object(ChatwootClient, "close", new_callable=AsyncMock) as close, patch.object(
        main, "create_webhook_store", AsyncMock(return_value=store)
    ), patch.object(
        ChatwootTrigger, "activate", AsyncMock(side_effect=ChatwootAPIError("Failed to fetch webhooks: boom"))
    ):
        with pytest.raises(ChatwootAPIError):
            async with main.lifespan(FastAPI()):
                pass

    close.assert_awaited_once()
    store.disconnect.assert_awaited_once()


@pytest.mark.asyncio
async def test_missing_trigger_account_fails_startup(trigger_settings):
    with patch.object(main.settings, "TRIGGER_ACCOUNT_ID", ""), patch.object(
        ChatwootClient, "request", new_callable=AsyncMock
    ) as request, patch.object(ChatwootClient, "close", new_callable=AsyncMock) as close:
        with pytest.raises(ChatwootConfigurationError):
            async with main.lifespan(FastAPI()):
                pass

    request.assert_not_called()
    close.assert_awaited_once()


@pytest.mark.asyncio
async def test_shutdown_deactivates_trigger(trigger_settings):
    with patch.object(ChatwootClient, "close", new_callable=AsyncMock) as close, patch.object(
        ChatwootTrigger, "activate", new_callable=AsyncMock
    ), patch.object(ChatwootTrigger, "deactivate", new_callable=AsyncMock) as deactivate:
        app = FastAPI()
        async with main.lifespan(app):
            assert isinstance(app.state.trigger, ChatwootTrigger)
            assert app.state.trigger_events.maxsize == trigger_settings.TRIGGER_EVENT_QUEUE_SIZE

    deactivate.assert_awaited_once()
    close.assert_awaited_once()
