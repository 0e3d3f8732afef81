"""Webhook trigger store tests."""

import json
from unittest.mock import AsyncMock

import pytest

from chatwoot_tools.adapters.chatwoot.storage import (
    InMemoryWebhookStore,
    RedisWebhookStore,
    create_webhook_store,
)


@pytest.mark.asyncio
async def test_in_memory_round_trip():
    store = InMemoryWebhookStore()

    await store.set("trigger-a", {"webhookId": 15})
    assert await store.get("trigger-a") == {"webhookId": 15}

    await store.delete("trigger-a")
    assert await store.get("trigger-a") is None


@pytest.mark.asyncio
async def test_redis_store_prefixes_keys_and_stores_json():
    store = RedisWebhookStore("redis://localhost:6379/0")
    store._client = AsyncMock()
    store._client.get.return_value = json.dumps({"webhookId": 15})

    await store.set("trigger-a", {"webhookId": 15})
    value = await store.get("trigger-a")
    await store.delete("trigger-a")

    store._client.set.assert_awaited_once_with("chatwoot:trigger:trigger-a", '{"webhookId": 15}')
    store._client.get.assert_awaited_once_with("chatwoot:trigger:trigger-a")
    store._client.delete.assert_awaited_once_with("chatwoot:trigger:trigger-a")
    assert value == {"webhookId": 15}


def test_redis_store_requires_connect():
    with pytest.raises(RuntimeError):
        RedisWebhookStore("redis://localhost:6379/0").client


@pytest.mark.asyncio
async def test_empty_url_selects_in_memory_store():
    assert isinstance(await create_webhook_store(""), InMemoryWebhookStore)
