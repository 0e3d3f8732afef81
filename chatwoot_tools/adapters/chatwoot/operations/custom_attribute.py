"""Custom attribute definition operations."""

from typing import Any

from ..context import OperationContext
from ..utils import attribute_key_from_name, extract_list

RESOURCE = "customAttribute"

# Chatwoot's attribute_model enum
CONVERSATION_ATTRIBUTE = 0
CONTACT_ATTRIBUTE = 1


async def create_custom_attribute(ctx: OperationContext) -> dict[str, Any]:
    """Define a custom attribute; the key is derived from the display name."""
    attribute_model = ctx.get_parameter("attribute_model")
    display_name = ctx.get_parameter("attribute_display_name")
    attribute_type = ctx.get_parameter("attribute_type")
    additional_fields = ctx.get_parameter("additional_fields", {})

    body: dict[str, Any] = {
        "attribute_display_name": display_name,
        "attribute_key": attribute_key_from_name(display_name),
        "attribute_display_type": attribute_type,
        "attribute_model": (
            CONVERSATION_ATTRIBUTE
            if attribute_model == "conversation_attribute"
            else CONTACT_ATTRIBUTE
        ),
    }

    if attribute_type == "list":
        values = ctx.get_parameter("attribute_values", [])
        if not isinstance(values, list):
            values = [values]
        values = [value for value in values if value != ""]
        if values:
            body["attribute_values"] = values

    if additional_fields.get("attribute_description"):
        body["attribute_description"] = additional_fields["attribute_description"]

    return await ctx.request("POST", ctx.account_path("/custom_attribute_definitions"), body=body)


async def list_custom_attributes(ctx: OperationContext) -> list[dict[str, Any]]:
    response = await ctx.request(
        "GET",
        ctx.account_path("/custom_attribute_definitions"),
        query={"attribute_model": ctx.get_parameter("attribute_model")},
    )
    return extract_list(response, "payload")


async def remove_custom_attribute(ctx: OperationContext) -> dict[str, Any]:
    attribute_key = ctx.get_parameter("attribute_key_to_delete")
    return await ctx.request(
        "DELETE",
        ctx.account_path(f"/custom_attribute_definitions/{attribute_key}"),
    )


OPERATIONS = {
    "create": create_custom_attribute,
    "list": list_custom_attributes,
    "remove": remove_custom_attribute,
}
