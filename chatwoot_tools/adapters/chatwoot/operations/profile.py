"""Profile operations."""

from typing import Any

from ..context import OperationContext

RESOURCE = "profile"

MASKED_TOKEN = "********"


async def get_profile(ctx: OperationContext) -> dict[str, Any]:
    """Get the authenticated user's profile (access token masked by default)."""
    show_access_token = ctx.get_parameter("show_access_token", False)

    result = await ctx.request("GET", "/api/v1/profile")

    if not show_access_token and result.get("access_token"):
        result["access_token"] = MASKED_TOKEN

    return result


OPERATIONS = {
    "get": get_profile,
}
