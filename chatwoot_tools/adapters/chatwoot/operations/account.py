"""Account operations."""

from typing import Any

from ..context import OperationContext

RESOURCE = "account"


async def get_account(ctx: OperationContext) -> dict[str, Any]:
    """Get account details."""
    return await ctx.request("GET", ctx.account_path())


OPERATIONS = {
    "get": get_account,
}
