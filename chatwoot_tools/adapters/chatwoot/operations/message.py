"""Conversation message operations."""

from typing import Any

from chatwoot_obs.logging import get_logger

from ..context import OperationContext
from ..utils import extract_list, parse_json_parameter

logger = get_logger(__name__)

RESOURCE = "message"


def _messages_path(ctx: OperationContext, suffix: str = "") -> str:
    conversation_id = ctx.resource_id("conversation_id")
    return ctx.account_path(f"/conversations/{conversation_id}{suffix}")


async def send_message(ctx: OperationContext) -> dict[str, Any]:
    """Send a message, either from fields or from a raw JSON body."""
    if ctx.get_parameter("use_raw_json", False):
        body = parse_json_parameter(ctx.get_parameter("json_body", "{}"), "json_body")
    else:
        body = {
            "content": ctx.get_parameter("content"),
            "message_type": ctx.get_parameter("message_type"),
            "private": ctx.get_parameter("private", False),
        }
        additional_fields = ctx.get_parameter("additional_fields", {})
        if additional_fields.get("content_type"):
            body["content_type"] = additional_fields["content_type"]
        for field in ("content_attributes", "template_params"):
            if additional_fields.get(field):
                body[field] = parse_json_parameter(additional_fields[field], field)

    return await ctx.request("POST", _messages_path(ctx, "/messages"), body=body)


async def get_all_messages(ctx: OperationContext) -> Any:
    """Fetch messages, one record per message.

    With a positive `minimum_count`, pages backwards using the oldest ID of
    each page as the next `before` cursor until at least that many messages
    are collected or a page comes back empty. Otherwise a single request
    honouring the `before`/`after` options, returning the response itself
    when it carries no `payload`.
    """
    path = _messages_path(ctx, "/messages")
    options = ctx.get_parameter("options", {})
    minimum_count = int(ctx.get_parameter("minimum_count", 0) or 0)

    query = {key: options[key] for key in ("before", "after") if options.get(key)}

    if minimum_count <= 0:
        response = await ctx.request("GET", path, query=query)
        if isinstance(response, dict) and "payload" not in response:
            return response
        return extract_list(response, "payload")

    messages: list[dict[str, Any]] = []
    pages = 0
    while len(messages) < minimum_count:
        page = extract_list(await ctx.request("GET", path, query=query), "payload")
        pages += 1
        if not page:
            break
        messages.extend(page)
        query = {"before": min(message["id"] for message in page)}

    logger.debug("messages_paginated", pages=pages, count=len(messages), minimum=minimum_count)
    return messages


async def delete_message(ctx: OperationContext) -> dict[str, Any]:
    message_id = ctx.resource_id("message_id")
    await ctx.request("DELETE", _messages_path(ctx, f"/messages/{message_id}"))
    return {"success": True}


async def set_typing(ctx: OperationContext) -> dict[str, Any]:
    return await ctx.request(
        "POST",
        _messages_path(ctx, "/toggle_typing_status"),
        body={"typing_status": ctx.get_parameter("typing_status")},
    )


async def update_presence(ctx: OperationContext) -> dict[str, Any]:
    return await ctx.request("POST", _messages_path(ctx, "/update_last_seen"))


OPERATIONS = {
    "send": send_message,
    "getAll": get_all_messages,
    "delete": delete_message,
    "setTyping": set_typing,
    "updatePresence": update_presence,
}
