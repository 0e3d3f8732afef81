"""Label set manipulation shared by contacts and conversations.

Chatwoot only exposes "replace all labels", so add and remove read the
current set first and POST the result. Not atomic.
"""

from typing import Any

from ..context import OperationContext
from ..utils import extract_list


def _requested_labels(ctx: OperationContext) -> list[str]:
    labels = ctx.get_parameter("labels")
    if isinstance(labels, str):
        labels = [label.strip() for label in labels.split(",")]
    return [label for label in labels if label]


async def list_labels(ctx: OperationContext, path: str) -> Any:
    return await ctx.request("GET", path)


async def current_labels(ctx: OperationContext, path: str) -> list[str]:
    return extract_list(await ctx.request("GET", path), "payload")


async def replace_labels(ctx: OperationContext, path: str) -> Any:
    return await ctx.request("POST", path, body={"labels": _requested_labels(ctx)})


async def add_labels(ctx: OperationContext, path: str) -> Any:
    """Union of existing and requested labels, existing order first."""
    merged = list(dict.fromkeys([*await current_labels(ctx, path), *_requested_labels(ctx)]))
    return await ctx.request("POST", path, body={"labels": merged})


async def remove_labels(ctx: OperationContext, path: str) -> Any:
    to_remove = set(_requested_labels(ctx))
    remaining = [label for label in await current_labels(ctx, path) if label not in to_remove]
    return await ctx.request("POST", path, body={"labels": remaining})
