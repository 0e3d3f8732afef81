"""Operation Registry Tests."""

from chatwoot_tools.base import HandlerOperation
from chatwoot_tools.registry import OperationRegistry


async def _noop(ctx):
    return {}


def test_register_and_retrieve_operation():
    """Test operation registration and retrieval."""
    registry = OperationRegistry()
    registry.register(HandlerOperation("contact", "get", _noop, idempotent=True))

    retrieved = registry.get("contact", "get")

    assert retrieved is not None
    assert retrieved.name == "contact.get"
    assert retrieved.metadata.idempotent is True
    assert registry.get("contact", "delete") is None


def test_filter_by_capability():
    """Test capability-based filtering."""
    registry = OperationRegistry()
    registry.register(HandlerOperation("contact", "get", _noop))
    registry.register(HandlerOperation("team", "get", _noop))

    results = registry.filter_by_capability("chatwoot.team")
    assert len(results) == 1
    assert results[0].name == "team.get"


def test_every_resource_is_registered(registry):
    assert registry.resources() == sorted(
        [
            "account",
            "agent",
            "contact",
            "conversation",
            "customAttribute",
            "inbox",
            "kanbanBoard",
            "kanbanStep",
            "kanbanTask",
            "label",
            "message",
            "profile",
            "team",
            "webhook",
        ]
    )


def test_contact_operations(registry):
    assert registry.operations_for("contact") == sorted(
        [
            "create",
            "get",
            "update",
            "delete",
            "list",
            "search",
            "listConversations",
            "merge",
            "listLabels",
            "addLabels",
            "updateLabels",
            "removeLabels",
            "setCustomAttributes",
            "destroyCustomAttributes",
        ]
    )


def test_reads_are_idempotent(registry):
    assert registry.get("contact", "search").metadata.idempotent is True
    assert registry.get("contact", "create").metadata.idempotent is False
