"""Inbox operations, including WhatsApp provider channel management."""

import asyncio
import re
from typing import Any

from chatwoot_obs.logging import get_logger
from chatwoot_tools.base import BinaryData, ExecutionItem

from ..context import OperationContext
from ..exceptions import ChatwootTimeoutError

logger = get_logger(__name__)

RESOURCE = "inbox"

DEFAULT_QR_POLL_ATTEMPTS = 20
DEFAULT_QR_POLL_INTERVAL = 3.0

DATA_URL_PATTERN = re.compile(r"^data:(image/\w+);base64,(.+)$", re.DOTALL)
CONNECTED_STATES = ("open", "connected")


def _inbox_path(ctx: OperationContext, suffix: str = "") -> str:
    inbox_id = ctx.resource_id("inbox_id")
    return ctx.account_path(f"/inboxes/{inbox_id}{suffix}")


async def get_inbox(ctx: OperationContext) -> dict[str, Any]:
    return await ctx.request("GET", _inbox_path(ctx))


async def list_inboxes(ctx: OperationContext) -> dict[str, Any]:
    return await ctx.request("GET", ctx.account_path("/inboxes"))


async def list_inbox_agents(ctx: OperationContext) -> dict[str, Any]:
    inbox_id = ctx.resource_id("inbox_id")
    return await ctx.request("GET", ctx.account_path(f"/inbox_members/{inbox_id}"))


async def _change_members(ctx: OperationContext, method: str) -> dict[str, Any]:
    return await ctx.request(
        method,
        ctx.account_path("/inbox_members"),
        body={
            "inbox_id": ctx.resource_id("inbox_id"),
            "user_ids": ctx.get_parameter("user_ids"),
        },
    )


async def add_inbox_agents(ctx: OperationContext) -> dict[str, Any]:
    return await _change_members(ctx, "POST")


async def update_inbox_agents(ctx: OperationContext) -> dict[str, Any]:
    """Replace the inbox's agents with the given user IDs."""
    return await _change_members(ctx, "PATCH")


async def remove_inbox_agents(ctx: OperationContext) -> dict[str, Any]:
    return await _change_members(ctx, "DELETE")


async def on_whatsapp(ctx: OperationContext) -> dict[str, Any]:
    """Check whether a phone number has a WhatsApp account."""
    return await ctx.request(
        "POST",
        _inbox_path(ctx, "/on_whatsapp"),
        body={"phone_number": ctx.get_parameter("phone_number")},
    )


async def whatsapp_disconnect(ctx: OperationContext) -> dict[str, Any]:
    return await ctx.request("POST", _inbox_path(ctx, "/disconnect_channel_provider"))


def _qr_code_item(qr_data_url: str) -> ExecutionItem:
    match = DATA_URL_PATTERN.match(qr_data_url)
    if not match:
        return ExecutionItem(
            data={
                "message": "QR Code URL retrieved successfully",
                "connection": "connecting",
                "qr_code_url": qr_data_url,
            }
        )

    mime_type, encoded = match.groups()
    return ExecutionItem(
        data={
            "message": "QR Code generated successfully",
            "connection": "connecting",
            "qr_code_url": qr_data_url,
        },
        binary={"file": BinaryData(data=encoded, mime_type=mime_type, file_name="qr-code.png")},
    )


async def whatsapp_get_qr_code(ctx: OperationContext) -> ExecutionItem | dict[str, Any]:
    """Start the provider pairing flow and wait for a QR code.

    Polls the inbox until it reports `connecting` with a QR data URL, or is
    already connected. Raises ChatwootTimeoutError when the attempts run out.
    """
    settings = ctx.settings
    max_attempts = getattr(settings, "QR_POLL_MAX_ATTEMPTS", DEFAULT_QR_POLL_ATTEMPTS)
    interval = getattr(settings, "QR_POLL_INTERVAL_SECONDS", DEFAULT_QR_POLL_INTERVAL)

    await ctx.request("POST", _inbox_path(ctx, "/setup_channel_provider"))

    for attempt in range(max_attempts):
        inbox = await ctx.request("GET", _inbox_path(ctx))
        provider_connection = inbox.get("provider_connection") or {}
        connection = provider_connection.get("connection")

        if connection == "connecting" and provider_connection.get("qr_data_url"):
            logger.info("whatsapp_qr_ready", attempt=attempt + 1)
            return _qr_code_item(provider_connection["qr_data_url"])

        if connection in CONNECTED_STATES:
            ctx.add_hint(
                "This WhatsApp inbox is already connected and ready to send/receive messages.",
                type="info",
            )
            return {"message": "Channel already connected", "connection": connection}

        # "reconnecting" and anything else: keep polling
        if attempt < max_attempts - 1:
            await asyncio.sleep(interval)

    raise ChatwootTimeoutError(
        f"Timeout waiting for QR code after {max_attempts} attempts",
        item_index=ctx.item_index,
    )


OPERATIONS = {
    "get": get_inbox,
    "list": list_inboxes,
    "listAgents": list_inbox_agents,
    "addAgents": add_inbox_agents,
    "updateAgents": update_inbox_agents,
    "removeAgents": remove_inbox_agents,
    "onWhatsapp": on_whatsapp,
    "whatsappDisconnect": whatsapp_disconnect,
    "whatsappGetQrCode": whatsapp_get_qr_code,
}
