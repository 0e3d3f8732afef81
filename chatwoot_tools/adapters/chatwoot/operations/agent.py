"""Agent operations."""

from typing import Any

from ..context import OperationContext
from ..utils import extract_list

RESOURCE = "agent"


async def create_agent(ctx: OperationContext) -> dict[str, Any]:
    """Invite an agent to the account."""
    body = {
        "name": ctx.get_parameter("name"),
        "email": ctx.get_parameter("email"),
        "role": ctx.get_parameter("role"),
        **ctx.get_parameter("additional_fields", {}),
    }
    return await ctx.request("POST", ctx.account_path("/agents"), body=body)


async def delete_agent(ctx: OperationContext) -> dict[str, Any]:
    """Remove an agent from the account."""
    agent_id = ctx.resource_id("agent_id")
    await ctx.request("DELETE", ctx.account_path(f"/agents/{agent_id}"))
    return {}


async def list_agents(ctx: OperationContext) -> list[dict[str, Any]]:
    """List account agents, one record per agent."""
    response = await ctx.request("GET", ctx.account_path("/agents"))
    return extract_list(response, "payload")


async def update_agent(ctx: OperationContext) -> dict[str, Any]:
    """Change an agent's role or availability."""
    agent_id = ctx.resource_id("agent_id")
    body = {
        "role": ctx.get_parameter("role"),
        **ctx.get_parameter("additional_fields", {}),
    }
    return await ctx.request("PATCH", ctx.account_path(f"/agents/{agent_id}"), body=body)


OPERATIONS = {
    "create": create_agent,
    "delete": delete_agent,
    "list": list_agents,
    "update": update_agent,
}
