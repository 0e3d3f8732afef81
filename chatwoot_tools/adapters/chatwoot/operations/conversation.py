"""Conversation operations."""

from datetime import datetime
from typing import Any

from ..context import OperationContext
from ..exceptions import ChatwootValidationError
from ..utils import parse_json_parameter
from . import _labels

RESOURCE = "conversation"


def _conversation_path(ctx: OperationContext, suffix: str = "") -> str:
    conversation_id = ctx.resource_id("conversation_id")
    return ctx.account_path(f"/conversations/{conversation_id}{suffix}")


async def create_conversation(ctx: OperationContext) -> dict[str, Any]:
    body: dict[str, Any] = {"contact_id": ctx.resource_id("contact_id")}

    inbox_id = ctx.optional_resource_id("inbox_id")
    if inbox_id:
        body["inbox_id"] = inbox_id

    additional_fields = dict(ctx.get_parameter("additional_fields", {}))
    if "custom_attributes" in additional_fields:
        additional_fields["custom_attributes"] = parse_json_parameter(
            additional_fields["custom_attributes"], "custom_attributes"
        )
    body.update(additional_fields)

    return await ctx.request("POST", ctx.account_path("/conversations"), body=body)


async def get_conversation(ctx: OperationContext) -> dict[str, Any]:
    return await ctx.request("GET", _conversation_path(ctx))


async def list_conversations(ctx: OperationContext) -> dict[str, Any]:
    filters = ctx.get_parameter("filters", {})
    query = {
        key: filters[key] for key in ("status", "assignee_type", "page") if filters.get(key)
    }

    inbox_id = ctx.optional_resource_id("inbox_id")
    if inbox_id:
        query["inbox_id"] = inbox_id

    return await ctx.request("GET", ctx.account_path("/conversations"), query=query)


def _snooze_epoch(ctx: OperationContext, value: Any) -> int:
    if isinstance(value, (int, float)):
        return int(value)
    try:
        return int(datetime.fromisoformat(str(value).replace("Z", "+00:00")).timestamp())
    except ValueError as e:
        raise ChatwootValidationError(
            f"Invalid snooze date: {value}", item_index=ctx.item_index
        ) from e


async def toggle_status(ctx: OperationContext) -> dict[str, Any]:
    """Change status; a snooze date is sent as epoch seconds."""
    body: dict[str, Any] = {"status": ctx.get_parameter("status")}

    snooze_until = ctx.get_parameter("snooze_until", None)
    if snooze_until:
        body["snoozed_until"] = _snooze_epoch(ctx, snooze_until)

    return await ctx.request("POST", _conversation_path(ctx, "/toggle_status"), body=body)


async def assign_agent(ctx: OperationContext) -> dict[str, Any]:
    return await ctx.request(
        "POST",
        _conversation_path(ctx, "/assignments"),
        body={"assignee_id": ctx.resource_id("agent_id")},
    )


async def assign_team(ctx: OperationContext) -> dict[str, Any]:
    return await ctx.request(
        "POST",
        _conversation_path(ctx, "/assignments"),
        body={"team_id": ctx.resource_id("team_id")},
    )


async def list_conversation_labels(ctx: OperationContext) -> Any:
    return await _labels.list_labels(ctx, _conversation_path(ctx, "/labels"))


async def add_conversation_labels(ctx: OperationContext) -> Any:
    return await _labels.add_labels(ctx, _conversation_path(ctx, "/labels"))


async def update_conversation_labels(ctx: OperationContext) -> Any:
    return await _labels.replace_labels(ctx, _conversation_path(ctx, "/labels"))


async def remove_conversation_labels(ctx: OperationContext) -> Any:
    return await _labels.remove_labels(ctx, _conversation_path(ctx, "/labels"))


async def set_custom_attributes(ctx: OperationContext) -> dict[str, Any]:
    custom_attributes = parse_json_parameter(
        ctx.get_parameter("custom_attributes"), "custom_attributes"
    )
    return await ctx.request(
        "POST",
        _conversation_path(ctx, "/custom_attributes"),
        body={"custom_attributes": custom_attributes},
    )


async def set_priority(ctx: OperationContext) -> dict[str, Any]:
    """Set priority; the literal "null" clears it."""
    priority = ctx.get_parameter("priority")
    if priority == "null":
        priority = None
    return await ctx.request(
        "POST", _conversation_path(ctx, "/toggle_priority"), body={"priority": priority}
    )


OPERATIONS = {
    "create": create_conversation,
    "get": get_conversation,
    "list": list_conversations,
    "toggleStatus": toggle_status,
    "assignAgent": assign_agent,
    "assignTeam": assign_team,
    "listLabels": list_conversation_labels,
    "addLabels": add_conversation_labels,
    "updateLabels": update_conversation_labels,
    "removeLabels": remove_conversation_labels,
    "setCustomAttributes": set_custom_attributes,
    "setPriority": set_priority,
}
