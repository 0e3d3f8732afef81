"""Account label operations.

Applying labels to contacts and conversations lives with those resources;
this module manages the label definitions themselves.
"""

from typing import Any

from ..context import OperationContext
from ..utils import compact, extract_list, random_color, slugify_label

RESOURCE = "label"


async def create_label(ctx: OperationContext) -> dict[str, Any]:
    """Create a label; the title is slugified and a colour picked when absent."""
    title = slugify_label(ctx.get_parameter("title"))
    additional_fields = ctx.get_parameter("additional_fields", {})

    body = {
        "title": title,
        "description": additional_fields.get("description", ""),
        "show_on_sidebar": additional_fields.get("show_on_sidebar", True),
        "color": additional_fields.get("color") or random_color(),
    }
    return await ctx.request("POST", ctx.account_path("/labels"), body=body)


async def list_labels(ctx: OperationContext) -> list[dict[str, Any]]:
    response = await ctx.request("GET", ctx.account_path("/labels"))
    return extract_list(response, "payload")


async def update_label(ctx: OperationContext) -> dict[str, Any]:
    label_id = ctx.resource_id("label_id")
    body = compact(ctx.get_parameter("additional_fields", {}))
    return await ctx.request("PATCH", ctx.account_path(f"/labels/{label_id}"), body=body)


async def delete_label(ctx: OperationContext) -> dict[str, Any]:
    label_id = ctx.resource_id("label_id")
    return await ctx.request("DELETE", ctx.account_path(f"/labels/{label_id}"))


OPERATIONS = {
    "create": create_label,
    "list": list_labels,
    "update": update_label,
    "delete": delete_label,
}
