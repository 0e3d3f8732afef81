"""Webhook Trigger State Stores.

Persist which remote webhook a trigger instance owns, keyed by instance.

Key Structure (Redis):
- chatwoot:trigger:{instance_key} → {"webhookId": ...} (JSON)
"""

import json
from typing import Any, Protocol

from redis import asyncio as aioredis


class WebhookStore(Protocol):
    """Per-instance key/value state for the webhook trigger."""

    async def get(self, key: str) -> dict[str, Any] | None:
        ...

    async def set(self, key: str, value: dict[str, Any]) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...


# ============================================================================
# IN-MEMORY STORE
# ============================================================================


class InMemoryWebhookStore:
    """Process-local store; state is lost on restart."""

    def __init__(self):
        self._data: dict[str, dict[str, Any]] = {}

    async def get(self, key: str) -> dict[str, Any] | None:
        value = self._data.get(key)
        return dict(value) if value is not None else None

    async def set(self, key: str, value: dict[str, Any]) -> None:
        self._data[key] = dict(value)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)


# ============================================================================
# REDIS STORE
# ============================================================================


class RedisWebhookStore:
    """Redis-backed store, shared by every replica of the service."""

    def __init__(self, redis_url: str, key_prefix: str = "chatwoot:trigger:"):
        """Initialize Redis store.

        Args:
            redis_url: Redis connection URL (redis://localhost:6379/0)
            key_prefix: Prepended to every instance key
        """
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self._client: aioredis.Redis | None = None

    async def connect(self) -> None:
        """Connect to Redis."""
        if self._client is None:
            self._client = aioredis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> aioredis.Redis:
        """Get Redis client.

        Raises:
            RuntimeError: If not connected
        """
        if self._client is None:
            raise RuntimeError("RedisWebhookStore not connected. Call connect() first.")
        return self._client

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    async def get(self, key: str) -> dict[str, Any] | None:
        raw = await self.client.get(self._key(key))
        return json.loads(raw) if raw else None

    async def set(self, key: str, value: dict[str, Any]) -> None:
        await self.client.set(self._key(key), json.dumps(value))

    async def delete(self, key: str) -> None:
        await self.client.delete(self._key(key))


async def create_webhook_store(redis_url: str, key_prefix: str = "chatwoot:trigger:") -> WebhookStore:
    """Redis store when a URL is configured, in-memory otherwise."""
    if not redis_url:
        return InMemoryWebhookStore()
    store = RedisWebhookStore(redis_url, key_prefix=key_prefix)
    await store.connect()
    return store
