"""Chatwoot Webhook Trigger.

Keeps exactly one remote webhook registered for this service instance and
turns inbound deliveries into output records.

Lifecycle:
- check_exists: reuse a matching registration, drop a stale one
- create: register and remember the new webhook ID
- delete: unregister the remembered webhook
"""

from typing import Any

from chatwoot_obs.logging import get_logger
from chatwoot_obs.metrics import trigger_reconciliations_total, webhook_events_total

from .client import ChatwootClient
from .exceptions import ChatwootAPIError
from .locator import resolve_resource_id
from .operations.webhook import create_webhook, delete_webhook, fetch_webhooks
from .schemas import WebhookRegistration
from .storage import WebhookStore

logger = get_logger(__name__)


def _extract_webhook_id(response: Any) -> Any:
    if not isinstance(response, dict):
        return None
    payload = response.get("payload")
    if isinstance(payload, dict):
        webhook = payload.get("webhook")
        if isinstance(webhook, dict):
            return webhook.get("id")
        return payload.get("id")
    return response.get("id")


class ChatwootTrigger:
    """Webhook registration owned by one trigger instance.

    A missing account ID raises ChatwootConfigurationError at construction,
    before any request is made.
    """

    def __init__(
        self,
        client: ChatwootClient,
        store: WebhookStore,
        instance_key: str,
        node_name: str,
        webhook_url: str,
        account_id: str,
        events: list[str],
        inbox_id: str | None = None,
        activation_mode: str = "trigger",
    ):
        self.client = client
        self.store = store
        self.instance_key = instance_key
        self.node_name = node_name
        self.webhook_url = webhook_url
        self.account_id = resolve_resource_id(account_id, "account_id")
        self.events = list(events)
        self.inbox_id = inbox_id if inbox_id and inbox_id != "all" else None
        self.activation_mode = activation_mode

    @property
    def webhook_name(self) -> str:
        """Manual (test) activations are tagged so they are easy to spot."""
        if self.activation_mode == "manual":
            return f"[N8N-TEST] {self.node_name}"
        return f"[N8N] {self.node_name}"

    async def _remember(self, webhook_id: Any) -> None:
        await self.store.set(self.instance_key, WebhookRegistration(webhook_id=webhook_id).to_storage())

    async def registered_webhook_id(self) -> Any:
        data = await self.store.get(self.instance_key)
        if not data:
            return None
        return WebhookRegistration.model_validate(data).webhook_id

    async def check_exists(self) -> bool:
        """Whether a webhook matching URL, subscriptions and name is registered.

        A webhook with our URL but different settings is deleted so that
        create() can register a fresh one.
        """
        try:
            webhooks = await fetch_webhooks(self.client, self.account_id)
        except ChatwootAPIError as e:
            raise ChatwootAPIError(
                f"Failed to fetch webhooks: {e.message}",
                status_code=e.status_code,
                description=e.description,
            ) from e

        expected_events = sorted(self.events)
        for webhook in webhooks:
            if webhook.get("url") != self.webhook_url:
                continue

            if (
                sorted(webhook.get("subscriptions") or []) == expected_events
                and webhook.get("name") == self.webhook_name
            ):
                await self._remember(webhook["id"])
                trigger_reconciliations_total.labels("active").inc()
                logger.info("trigger_webhook_found", webhook_id=webhook["id"])
                return True

            try:
                await delete_webhook(self.client, self.account_id, webhook["id"])
            except ChatwootAPIError as e:
                raise ChatwootAPIError(
                    f"Failed to delete existing webhook: {e.message}",
                    status_code=e.status_code,
                    description=e.description,
                ) from e
            trigger_reconciliations_total.labels("replaced").inc()
            logger.info("trigger_webhook_stale_deleted", webhook_id=webhook["id"])
            return False

        trigger_reconciliations_total.labels("missing").inc()
        return False

    async def create(self) -> bool:
        webhook: dict[str, Any] = {
            "name": self.webhook_name,
            "url": self.webhook_url,
            "subscriptions": self.events,
        }
        if self.inbox_id:
            webhook["inbox_id"] = self.inbox_id

        try:
            response = await create_webhook(self.client, self.account_id, {"webhook": webhook})
        except ChatwootAPIError as e:
            raise ChatwootAPIError(
                f"Failed to create webhook: {e.message}",
                status_code=e.status_code,
                description=e.description,
            ) from e

        webhook_id = _extract_webhook_id(response)
        if not webhook_id:
            raise ChatwootAPIError(
                f"Failed to extract webhook ID from response. Response: {response}"
            )

        await self._remember(webhook_id)
        logger.info("trigger_webhook_created", webhook_id=webhook_id, events=self.events)
        return True

    async def delete(self) -> bool:
        webhook_id = await self.registered_webhook_id()
        if webhook_id:
            try:
                await delete_webhook(self.client, self.account_id, webhook_id)
            except ChatwootAPIError as e:
                raise ChatwootAPIError(
                    f"Failed to delete webhook: {e.message}",
                    status_code=e.status_code,
                    description=e.description,
                ) from e
            await self.store.delete(self.instance_key)
            logger.info("trigger_webhook_deleted", webhook_id=webhook_id)
        return True

    async def activate(self) -> None:
        if not await self.check_exists():
            await self.create()

    async def deactivate(self) -> None:
        await self.delete()

    def deliver(self, body: Any) -> list[dict[str, Any]]:
        """Pass an inbound delivery through unchanged, one record per object."""
        webhook_events_total.inc()
        if isinstance(body, list):
            return [entry if isinstance(entry, dict) else {"value": entry} for entry in body]
        return [body if isinstance(body, dict) else {"value": body}]
