"""Kanban task operations."""

from typing import Any

from ..context import OperationContext
from ..utils import extract_list

RESOURCE = "kanbanTask"


async def create_task(ctx: OperationContext) -> dict[str, Any]:
    task = {
        "title": ctx.get_parameter("title"),
        "board_id": ctx.resource_id("kanban_board_id"),
        "board_step_id": ctx.resource_id("kanban_step_id"),
        **ctx.get_parameter("additional_fields", {}),
    }
    return await ctx.request("POST", ctx.account_path("/kanban/tasks"), body={"task": task})


async def get_task(ctx: OperationContext) -> dict[str, Any]:
    task_id = ctx.resource_id("kanban_task_id")
    return await ctx.request("GET", ctx.account_path(f"/kanban/tasks/{task_id}"))


async def list_tasks(ctx: OperationContext) -> list[dict[str, Any]]:
    """List a board's tasks, one record per task."""
    query = {
        "board_id": ctx.resource_id("kanban_board_id"),
        **ctx.get_parameter("task_filters", {}),
    }
    response = await ctx.request("GET", ctx.account_path("/kanban/tasks"), query=query)
    return extract_list(response, "tasks", "payload")


async def update_task(ctx: OperationContext) -> dict[str, Any]:
    task_id = ctx.resource_id("kanban_task_id")
    task = {
        "title": ctx.get_parameter("title"),
        **ctx.get_parameter("additional_fields", {}),
    }
    return await ctx.request("PUT", ctx.account_path(f"/kanban/tasks/{task_id}"), body={"task": task})


async def move_task(ctx: OperationContext) -> dict[str, Any]:
    """Move a task to another step (appended at the end)."""
    task_id = ctx.resource_id("kanban_task_id")
    return await ctx.request(
        "POST",
        ctx.account_path(f"/kanban/tasks/{task_id}/move"),
        body={
            "board_step_id": ctx.resource_id("kanban_step_id"),
            "insert_before_task_id": None,
        },
    )


async def delete_task(ctx: OperationContext) -> dict[str, Any]:
    task_id = ctx.resource_id("kanban_task_id")
    return await ctx.request("DELETE", ctx.account_path(f"/kanban/tasks/{task_id}"))


OPERATIONS = {
    "create": create_task,
    "delete": delete_task,
    "get": get_task,
    "list": list_tasks,
    "move": move_task,
    "update": update_task,
}
