"""Chatwoot operation handlers, one module per resource.

Each module exposes RESOURCE and an OPERATIONS mapping of operation name to
async handler.
"""

from chatwoot_tools.base import HandlerOperation

from . import (
    account,
    agent,
    contact,
    conversation,
    custom_attribute,
    inbox,
    kanban_board,
    kanban_step,
    kanban_task,
    label,
    message,
    profile,
    team,
    webhook,
)

RESOURCE_MODULES = [
    profile,
    account,
    agent,
    contact,
    conversation,
    custom_attribute,
    inbox,
    kanban_board,
    kanban_step,
    kanban_task,
    label,
    message,
    team,
    webhook,
]

# Pure reads, safe to repeat
IDEMPOTENT_OPERATIONS = {
    "get",
    "list",
    "getAll",
    "search",
    "listConversations",
    "listLabels",
    "listAgents",
    "getTeamMembers",
}


def build_operations() -> list[HandlerOperation]:
    """Wrap every handler of every resource module."""
    return [
        HandlerOperation(
            resource=module.RESOURCE,
            operation=name,
            handler=handler,
            idempotent=name in IDEMPOTENT_OPERATIONS,
        )
        for module in RESOURCE_MODULES
        for name, handler in module.OPERATIONS.items()
    ]


__all__ = ["RESOURCE_MODULES", "build_operations"]
