"""Team operations."""

from typing import Any

from ..context import OperationContext

RESOURCE = "team"


async def create_team(ctx: OperationContext) -> dict[str, Any]:
    body = {
        "name": ctx.get_parameter("name"),
        **ctx.get_parameter("additional_fields", {}),
    }
    return await ctx.request("POST", ctx.account_path("/teams"), body=body)


async def delete_team(ctx: OperationContext) -> dict[str, Any]:
    team_id = ctx.resource_id("team_id")
    return await ctx.request("DELETE", ctx.account_path(f"/teams/{team_id}"))


async def list_teams(ctx: OperationContext) -> Any:
    return await ctx.request("GET", ctx.account_path("/teams"))


async def get_team_members(ctx: OperationContext) -> Any:
    team_id = ctx.resource_id("team_id")
    return await ctx.request("GET", ctx.account_path(f"/teams/{team_id}/team_members"))


async def assign_agent(ctx: OperationContext) -> Any:
    """Add one agent to a team."""
    team_id = ctx.resource_id("team_id")
    agent_id = ctx.resource_id("agent_id")
    return await ctx.request(
        "POST",
        ctx.account_path(f"/teams/{team_id}/team_members"),
        body={"user_ids": [agent_id]},
    )


async def unassign_agent(ctx: OperationContext) -> Any:
    """Remove one member by rewriting the member list without them.

    Read-modify-write: a concurrent membership change can be lost.
    """
    team_id = ctx.resource_id("team_id")
    member_id = ctx.resource_id("team_member_id")
    path = ctx.account_path(f"/teams/{team_id}/team_members")

    current_members = await ctx.request("GET", path)
    remaining_ids = [
        member["id"] for member in current_members or [] if str(member["id"]) != member_id
    ]

    return await ctx.request("PATCH", path, body={"user_ids": remaining_ids})


OPERATIONS = {
    "create": create_team,
    "delete": delete_team,
    "list": list_teams,
    "getTeamMembers": get_team_members,
    "assignAgent": assign_agent,
    "unassignAgent": unassign_agent,
}
