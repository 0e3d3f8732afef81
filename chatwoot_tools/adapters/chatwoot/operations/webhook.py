"""Account webhook operations.

The module-level helpers take a client directly so the trigger lifecycle
can reuse them outside of an operation context.
"""

from typing import Any

from ..client import ChatwootClient
from ..context import OperationContext
from ..utils import extract_list

RESOURCE = "webhook"


def _webhooks_path(account_id: str, suffix: str = "") -> str:
    return f"/api/v1/accounts/{account_id}/webhooks{suffix}"


async def fetch_webhooks(client: ChatwootClient, account_id: str) -> list[dict[str, Any]]:
    """List webhooks, whichever envelope the server uses."""
    response = await client.request("GET", _webhooks_path(account_id))
    return extract_list(response, "webhooks", "payload")


async def create_webhook(client: ChatwootClient, account_id: str, body: dict[str, Any]) -> Any:
    return await client.request("POST", _webhooks_path(account_id), body=body)


async def update_webhook(
    client: ChatwootClient, account_id: str, webhook_id: str, body: dict[str, Any]
) -> Any:
    return await client.request("PUT", _webhooks_path(account_id, f"/{webhook_id}"), body=body)


async def delete_webhook(client: ChatwootClient, account_id: str, webhook_id: str) -> None:
    await client.request("DELETE", _webhooks_path(account_id, f"/{webhook_id}"))


def _webhook_body(ctx: OperationContext) -> dict[str, Any]:
    body: dict[str, Any] = {
        "url": ctx.get_parameter("webhook_url"),
        "subscriptions": ctx.get_parameter("events"),
    }
    if ctx.get_parameter("filter_by_inbox", False):
        inbox_id = ctx.optional_resource_id("inbox_id")
        if inbox_id:
            body["inbox_id"] = inbox_id
    return body


async def create_webhook_operation(ctx: OperationContext) -> Any:
    return await create_webhook(ctx.client, ctx.resource_id("account_id"), _webhook_body(ctx))


async def get_all_webhooks(ctx: OperationContext) -> list[dict[str, Any]]:
    return await fetch_webhooks(ctx.client, ctx.resource_id("account_id"))


async def update_webhook_operation(ctx: OperationContext) -> Any:
    return await update_webhook(
        ctx.client,
        ctx.resource_id("account_id"),
        ctx.resource_id("webhook_id"),
        _webhook_body(ctx),
    )


async def delete_webhook_operation(ctx: OperationContext) -> dict[str, Any]:
    await delete_webhook(ctx.client, ctx.resource_id("account_id"), ctx.resource_id("webhook_id"))
    return {"success": True}


OPERATIONS = {
    "create": create_webhook_operation,
    "getAll": get_all_webhooks,
    "update": update_webhook_operation,
    "delete": delete_webhook_operation,
}
