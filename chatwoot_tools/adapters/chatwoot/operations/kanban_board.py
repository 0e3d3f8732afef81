"""Kanban board operations."""

from typing import Any

from ..context import OperationContext

RESOURCE = "kanbanBoard"


def _board_body(ctx: OperationContext) -> dict[str, Any]:
    body = {
        "name": ctx.get_parameter("name"),
        "description": ctx.get_parameter("description", ""),
    }
    automations = ctx.get_parameter("automations", {})
    if automations.get("settings"):
        body["settings"] = automations["settings"]
    return body


async def create_board(ctx: OperationContext) -> dict[str, Any]:
    return await ctx.request("POST", ctx.account_path("/kanban/boards"), body=_board_body(ctx))


async def get_board(ctx: OperationContext) -> dict[str, Any]:
    board_id = ctx.resource_id("kanban_board_id")
    return await ctx.request("GET", ctx.account_path(f"/kanban/boards/{board_id}"))


async def list_boards(ctx: OperationContext) -> Any:
    query = {
        "sort": ctx.get_parameter("sort", None),
        "order": ctx.get_parameter("order", None),
    }
    return await ctx.request(
        "GET",
        ctx.account_path("/kanban/boards"),
        query={key: value for key, value in query.items() if value},
    )


async def update_board(ctx: OperationContext) -> dict[str, Any]:
    board_id = ctx.resource_id("kanban_board_id")
    return await ctx.request(
        "PUT", ctx.account_path(f"/kanban/boards/{board_id}"), body=_board_body(ctx)
    )


async def delete_board(ctx: OperationContext) -> dict[str, Any]:
    board_id = ctx.resource_id("kanban_board_id")
    return await ctx.request("DELETE", ctx.account_path(f"/kanban/boards/{board_id}"))


async def update_board_agents(ctx: OperationContext) -> dict[str, Any]:
    board_id = ctx.resource_id("kanban_board_id")
    return await ctx.request(
        "POST",
        ctx.account_path(f"/kanban/boards/{board_id}/update_agents"),
        body={"agent_ids": ctx.get_parameter("agent_ids")},
    )


async def update_board_inboxes(ctx: OperationContext) -> dict[str, Any]:
    board_id = ctx.resource_id("kanban_board_id")
    return await ctx.request(
        "POST",
        ctx.account_path(f"/kanban/boards/{board_id}/update_inboxes"),
        body={"inbox_ids": ctx.get_parameter("inbox_ids")},
    )


OPERATIONS = {
    "create": create_board,
    "delete": delete_board,
    "get": get_board,
    "list": list_boards,
    "update": update_board,
    "updateAgents": update_board_agents,
    "updateInboxes": update_board_inboxes,
}
