"""Kanban step (column) operations."""

from typing import Any

from ..context import OperationContext
from ..utils import random_color

RESOURCE = "kanbanStep"


def _steps_path(ctx: OperationContext, suffix: str = "") -> str:
    board_id = ctx.resource_id("kanban_board_id")
    return ctx.account_path(f"/kanban/boards/{board_id}/steps{suffix}")


async def create_step(ctx: OperationContext) -> dict[str, Any]:
    additional_fields = ctx.get_parameter("additional_fields", {})
    step = {
        "name": ctx.get_parameter("name"),
        "description": additional_fields.get("description", ""),
        "color": additional_fields.get("color") or random_color(),
        "cancelled": additional_fields.get("cancelled", False),
    }
    return await ctx.request("POST", _steps_path(ctx), body={"step": step})


async def list_steps(ctx: OperationContext) -> Any:
    return await ctx.request("GET", _steps_path(ctx))


async def update_step(ctx: OperationContext) -> dict[str, Any]:
    """Send only the fields that were set."""
    step_id = ctx.resource_id("kanban_step_id")
    update_fields = ctx.get_parameter("update_fields", {})

    step: dict[str, Any] = {}
    for field in ("name", "description", "color"):
        if update_fields.get(field):
            step[field] = update_fields[field]
    if update_fields.get("cancelled") is not None:
        step["cancelled"] = update_fields["cancelled"]

    return await ctx.request("PUT", _steps_path(ctx, f"/{step_id}"), body={"step": step})


async def delete_step(ctx: OperationContext) -> dict[str, Any]:
    step_id = ctx.resource_id("kanban_step_id")
    return await ctx.request("DELETE", _steps_path(ctx, f"/{step_id}"))


OPERATIONS = {
    "create": create_step,
    "delete": delete_step,
    "list": list_steps,
    "update": update_step,
}
