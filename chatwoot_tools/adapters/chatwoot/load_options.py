"""Load-options providers for static dropdowns.

Entries read `#<id> - <name>`; label options carry the title as value since
Chatwoot applies labels by title.
"""

from typing import Any, Awaitable, Callable

from .client import ChatwootClient
from .locator import resolve_optional_resource_id
from .schemas import ListSearchOption
from .utils import extract_list

OptionsProvider = Callable[[ChatwootClient, dict[str, Any]], Awaitable[list[ListSearchOption]]]


def _account_path(parameters: dict[str, Any], suffix: str) -> str | None:
    account_id = resolve_optional_resource_id(parameters.get("account_id"))
    if not account_id:
        return None
    return f"/api/v1/accounts/{account_id}{suffix}"


def _person_option(person: dict[str, Any], fallback: str) -> ListSearchOption:
    return ListSearchOption(
        name=f"#{person['id']} - {person.get('name') or person.get('email') or fallback}",
        value=person["id"],
    )


async def load_agents(client: ChatwootClient, parameters: dict[str, Any]) -> list[ListSearchOption]:
    path = _account_path(parameters, "/agents")
    if not path:
        return []
    return [_person_option(agent, "Agent") for agent in extract_list(await client.request("GET", path))]


async def load_inboxes(client: ChatwootClient, parameters: dict[str, Any]) -> list[ListSearchOption]:
    path = _account_path(parameters, "/inboxes")
    if not path:
        return []
    inboxes = extract_list(await client.request("GET", path), "payload")
    return [ListSearchOption(name=f"#{inbox['id']} - {inbox['name']}", value=inbox["id"]) for inbox in inboxes]


async def load_teams(client: ChatwootClient, parameters: dict[str, Any]) -> list[ListSearchOption]:
    path = _account_path(parameters, "/teams")
    if not path:
        return []
    teams = extract_list(await client.request("GET", path))
    return [ListSearchOption(name=f"#{team['id']} - {team['name']}", value=team["id"]) for team in teams]


async def load_labels(client: ChatwootClient, parameters: dict[str, Any]) -> list[ListSearchOption]:
    path = _account_path(parameters, "/labels")
    if not path:
        return []
    labels = extract_list(await client.request("GET", path), "payload")
    return [ListSearchOption(name=f"#{label['id']} - {label['title']}", value=label["title"]) for label in labels]


async def load_team_members(client: ChatwootClient, parameters: dict[str, Any]) -> list[ListSearchOption]:
    team_id = resolve_optional_resource_id(parameters.get("team_id"))
    path = _account_path(parameters, f"/teams/{team_id}/team_members")
    if not path or not team_id:
        return []
    return [_person_option(member, "Agent") for member in extract_list(await client.request("GET", path))]


async def _attribute_definitions(
    client: ChatwootClient, parameters: dict[str, Any], attribute_model: str
) -> list[dict[str, Any]]:
    path = _account_path(parameters, "/custom_attribute_definitions")
    if not path:
        return []
    response = await client.request("GET", path, query={"attribute_model": attribute_model})
    return extract_list(response, "payload")


async def load_custom_attribute_definitions(
    client: ChatwootClient, parameters: dict[str, Any]
) -> list[ListSearchOption]:
    """Definitions for the model chosen in `attribute_model`, valued by ID."""
    definitions = await _attribute_definitions(
        client, parameters, parameters.get("attribute_model") or "contact_attribute"
    )
    return [
        ListSearchOption(name=f"#{definition['id']} - {definition['attribute_display_name']}", value=definition["id"])
        for definition in definitions
    ]


async def load_contact_custom_attribute_definitions(
    client: ChatwootClient, parameters: dict[str, Any]
) -> list[ListSearchOption]:
    """Contact attribute definitions, valued by attribute key."""
    definitions = await _attribute_definitions(client, parameters, "contact_attribute")
    return [
        ListSearchOption(
            name=f"{definition['attribute_display_name']} ({definition['attribute_key']})",
            value=definition["attribute_key"],
        )
        for definition in definitions
    ]


async def load_kanban_steps(client: ChatwootClient, parameters: dict[str, Any]) -> list[ListSearchOption]:
    board_id = resolve_optional_resource_id(parameters.get("kanban_board_id"))
    path = _account_path(parameters, f"/kanban/boards/{board_id}/steps")
    if not path or not board_id:
        return []
    steps = extract_list(await client.request("GET", path), "steps")
    return [
        ListSearchOption(name=f"Step {position} - {step['name']}", value=step["id"])
        for position, step in enumerate(steps, start=1)
    ]


LOAD_OPTIONS_METHODS: dict[str, OptionsProvider] = {
    "loadAgentsOptions": load_agents,
    "loadInboxesOptions": load_inboxes,
    "loadTeamsOptions": load_teams,
    "loadLabelsWithTitleValueOptions": load_labels,
    "loadTeamMembersOptions": load_team_members,
    "loadCustomAttributeDefinitionsOptions": load_custom_attribute_definitions,
    "loadContactCustomAttributeDefinitionsOptions": load_contact_custom_attribute_definitions,
    "loadKanbanStepsOptions": load_kanban_steps,
}
