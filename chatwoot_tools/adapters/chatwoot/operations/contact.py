"""Contact operations.

Phone numbers and emails are validated locally before anything is sent, so
a malformed value never reaches Chatwoot.
"""

import re
from typing import Any

from ..context import OperationContext
from ..exceptions import ChatwootValidationError
from ..utils import build_custom_attributes, compact
from . import _labels

RESOURCE = "contact"

E164_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MISSING_IDENTITY_HINT = (
    "Contact created without phone number, email, or identifier. The contact will "
    "not appear in search results until at least one of these fields is set."
)


def _contact_path(ctx: OperationContext, suffix: str = "") -> str:
    contact_id = ctx.resource_id("contact_id")
    return ctx.account_path(f"/contacts/{contact_id}{suffix}")


def _validate_identity(ctx: OperationContext, phone_number: Any, email: Any) -> None:
    if phone_number and not E164_PATTERN.match(str(phone_number)):
        raise ChatwootValidationError(
            "Invalid phone number format. Expected E.164 format "
            f"(e.g., +5511999999999), got: {phone_number}",
            item_index=ctx.item_index,
        )
    if email and not EMAIL_PATTERN.match(str(email)):
        raise ChatwootValidationError(
            f"Invalid email address format: {email}",
            item_index=ctx.item_index,
        )


def _contact_body(ctx: OperationContext, name: Any, phone_number: Any, email: Any) -> dict[str, Any]:
    """Assemble a create/update body from the flat parameters.

    Unrecognised additional fields become additional_attributes, alongside
    social profiles and free-form key/value attributes.
    """
    additional_fields = dict(ctx.get_parameter("additional_fields", {}))
    identifier = additional_fields.pop("identifier", None)
    avatar_url = additional_fields.pop("avatar_url", None)
    blocked = additional_fields.pop("blocked", None)
    social_profiles = additional_fields.pop("social_profiles", None)
    extra_attributes = additional_fields.pop("extra_additional_attributes", None) or []

    additional_attributes = None
    if additional_fields or social_profiles or extra_attributes:
        additional_attributes = dict(additional_fields)
        if social_profiles:
            additional_attributes["social_profiles"] = social_profiles
        for entry in extra_attributes:
            if entry.get("key"):
                additional_attributes[entry["key"]] = entry.get("value")

    mode = ctx.get_parameter("custom_attributes_mode", "none")
    custom_attributes = None
    if mode != "none":
        custom_attributes = build_custom_attributes(mode, ctx.get_parameter("custom_attributes", None))

    body = compact(
        {
            "name": name,
            "phone_number": phone_number,
            "email": email,
            "identifier": identifier,
            "avatar_url": avatar_url,
        }
    )
    if additional_attributes is not None:
        body["additional_attributes"] = additional_attributes
    if blocked is not None:
        body["blocked"] = blocked
    if custom_attributes:
        body["custom_attributes"] = custom_attributes
    return body


async def create_contact(ctx: OperationContext) -> dict[str, Any]:
    """Create a contact; warns when it has no phone, email or identifier."""
    name = ctx.get_parameter("name", "")
    phone_number = ctx.get_parameter("phone_number", "")
    email = ctx.get_parameter("email", "")

    if not name:
        raise ChatwootValidationError("Contact name is required", item_index=ctx.item_index)
    _validate_identity(ctx, phone_number, email)

    body = _contact_body(ctx, name, phone_number, email)
    result = await ctx.request("POST", ctx.account_path("/contacts"), body=body)

    if not phone_number and not email and not body.get("identifier"):
        ctx.add_hint(MISSING_IDENTITY_HINT, type="warning")
    return result


async def update_contact(ctx: OperationContext) -> dict[str, Any]:
    phone_number = ctx.get_parameter("phone_number", "")
    email = ctx.get_parameter("email", "")
    _validate_identity(ctx, phone_number, email)

    body = _contact_body(ctx, ctx.get_parameter("name", ""), phone_number, email)
    return await ctx.request("PUT", _contact_path(ctx), body=body)


async def get_contact(ctx: OperationContext) -> dict[str, Any]:
    return await ctx.request("GET", _contact_path(ctx))


async def delete_contact(ctx: OperationContext) -> dict[str, Any]:
    return await ctx.request("DELETE", _contact_path(ctx))


async def list_contacts(ctx: OperationContext) -> dict[str, Any]:
    """One page of contacts; descending order is a `-` prefixed sort key."""
    sort = ctx.get_parameter("sort", "last_activity_at")
    if ctx.get_parameter("sort_order", "asc") == "desc":
        sort = f"-{sort}"

    query = {
        "page": ctx.get_parameter("page", 1),
        "sort": sort,
        "include_contact_inboxes": ctx.get_parameter("include_contact_inboxes", False),
    }
    return await ctx.request("GET", ctx.account_path("/contacts"), query=query)


async def search_contacts(ctx: OperationContext) -> dict[str, Any]:
    query = {
        "q": ctx.get_parameter("search_query"),
        "page": ctx.get_parameter("page", 1),
    }
    return await ctx.request("GET", ctx.account_path("/contacts/search"), query=query)


async def list_contact_conversations(ctx: OperationContext) -> dict[str, Any]:
    return await ctx.request("GET", _contact_path(ctx, "/conversations"))


async def merge_contacts(ctx: OperationContext) -> dict[str, Any]:
    """Merge the mergee contact into the base contact."""
    base_contact_id = ctx.resource_id("base_contact_id")
    mergee_contact_id = ctx.resource_id("mergee_contact_id")

    if base_contact_id == mergee_contact_id:
        raise ChatwootValidationError(
            "Base contact and mergee contact cannot be the same",
            item_index=ctx.item_index,
        )

    return await ctx.request(
        "POST",
        ctx.account_path("/actions/contact_merge"),
        body={
            "base_contact_id": int(base_contact_id),
            "mergee_contact_id": int(mergee_contact_id),
        },
    )


async def list_contact_labels(ctx: OperationContext) -> Any:
    return await _labels.list_labels(ctx, _contact_path(ctx, "/labels"))


async def add_contact_labels(ctx: OperationContext) -> Any:
    return await _labels.add_labels(ctx, _contact_path(ctx, "/labels"))


async def update_contact_labels(ctx: OperationContext) -> Any:
    return await _labels.replace_labels(ctx, _contact_path(ctx, "/labels"))


async def remove_contact_labels(ctx: OperationContext) -> Any:
    return await _labels.remove_labels(ctx, _contact_path(ctx, "/labels"))


async def set_custom_attributes(ctx: OperationContext) -> dict[str, Any]:
    custom_attributes = build_custom_attributes(
        ctx.get_parameter("custom_attributes_mode", "json"),
        ctx.get_parameter("custom_attributes"),
    )
    return await ctx.request(
        "PATCH", _contact_path(ctx), body={"custom_attributes": custom_attributes}
    )


async def destroy_custom_attributes(ctx: OperationContext) -> dict[str, Any]:
    return await ctx.request(
        "POST",
        _contact_path(ctx, "/destroy_custom_attributes"),
        body={"custom_attributes": ctx.get_parameter("custom_attributes_to_destroy")},
    )


OPERATIONS = {
    "create": create_contact,
    "get": get_contact,
    "update": update_contact,
    "delete": delete_contact,
    "list": list_contacts,
    "search": search_contacts,
    "listConversations": list_contact_conversations,
    "merge": merge_contacts,
    "listLabels": list_contact_labels,
    "addLabels": add_contact_labels,
    "updateLabels": update_contact_labels,
    "removeLabels": remove_contact_labels,
    "setCustomAttributes": set_custom_attributes,
    "destroyCustomAttributes": destroy_custom_attributes,
}
