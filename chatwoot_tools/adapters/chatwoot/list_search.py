"""List-search providers for resource pickers.

Every provider has the signature
`(client, parameters, filter=None, pagination_token=None) -> ListSearchResult`
and returns an empty result while a parent ID it depends on is unset.
"""

from typing import Any, Awaitable, Callable

from .client import ChatwootClient
from .locator import resolve_optional_resource_id
from .schemas import ListSearchOption, ListSearchResult
from .utils import extract_list

SearchProvider = Callable[..., Awaitable[ListSearchResult]]

WHATSAPP_SPECIAL_PROVIDERS = ("baileys", "zapi")


def _parent_id(parameters: dict[str, Any], name: str) -> str | None:
    return resolve_optional_resource_id(parameters.get(name))


def filter_options(options: list[ListSearchOption], filter: str | None) -> list[ListSearchOption]:
    """Case-insensitive match on the name, plain substring match on the value."""
    if not filter:
        return options
    needle = filter.lower()
    return [
        option
        for option in options
        if needle in option.name.lower() or filter in str(option.value)
    ]


def _options(records: list[dict[str, Any]], name: Callable[[dict[str, Any]], str]) -> list[ListSearchOption]:
    return [ListSearchOption(name=name(record), value=str(record["id"])) for record in records]


def _display_name(record: dict[str, Any], fallback: str) -> str:
    return record.get("name") or record.get("email") or f"{fallback} {record['id']}"


async def search_accounts(
    client: ChatwootClient,
    parameters: dict[str, Any],
    filter: str | None = None,
    pagination_token: str | None = None,
) -> ListSearchResult:
    profile = await client.request("GET", "/api/v1/profile")
    options = _options(profile.get("accounts") or [], lambda account: account["name"])
    return ListSearchResult(results=filter_options(options, filter))


async def _account_inboxes(client: ChatwootClient, account_id: str) -> list[dict[str, Any]]:
    response = await client.request("GET", f"/api/v1/accounts/{account_id}/inboxes")
    return extract_list(response, "payload")


async def search_inboxes(
    client: ChatwootClient,
    parameters: dict[str, Any],
    filter: str | None = None,
    pagination_token: str | None = None,
) -> ListSearchResult:
    account_id = _parent_id(parameters, "account_id")
    if not account_id:
        return ListSearchResult()

    options = _options(await _account_inboxes(client, account_id), lambda inbox: inbox["name"])
    return ListSearchResult(results=filter_options(options, filter))


async def search_whatsapp_special_provider_inboxes(
    client: ChatwootClient,
    parameters: dict[str, Any],
    filter: str | None = None,
    pagination_token: str | None = None,
) -> ListSearchResult:
    """WhatsApp inboxes backed by a pairing-based provider (Baileys, Z-API)."""
    account_id = _parent_id(parameters, "account_id")
    if not account_id:
        return ListSearchResult()

    inboxes = [
        inbox
        for inbox in await _account_inboxes(client, account_id)
        if inbox.get("channel_type") == "Channel::Whatsapp"
        and inbox.get("provider") in WHATSAPP_SPECIAL_PROVIDERS
    ]
    options = _options(inboxes, lambda inbox: inbox["name"])
    return ListSearchResult(results=filter_options(options, filter))


async def search_webhook_inboxes(
    client: ChatwootClient,
    parameters: dict[str, Any],
    filter: str | None = None,
    pagination_token: str | None = None,
) -> ListSearchResult:
    """Inboxes for a webhook filter, led by an "All Inboxes" entry."""
    result = await search_inboxes(client, parameters, filter, pagination_token)
    result.results.insert(0, ListSearchOption(name="All Inboxes", value="all"))
    return result


async def search_conversations(
    client: ChatwootClient,
    parameters: dict[str, Any],
    filter: str | None = None,
    pagination_token: str | None = None,
) -> ListSearchResult:
    account_id = _parent_id(parameters, "account_id")
    if not account_id:
        return ListSearchResult()

    query = {}
    inbox_id = _parent_id(parameters, "inbox_id")
    if inbox_id:
        query["inbox_id"] = inbox_id

    response = await client.request(
        "GET", f"/api/v1/accounts/{account_id}/conversations", query=query
    )
    conversations = extract_list(response, "data.payload", "payload")

    def conversation_name(conversation: dict[str, Any]) -> str:
        sender = (conversation.get("meta") or {}).get("sender") or {}
        return f"#{conversation['id']} - {sender.get('name') or 'Unknown'}"

    options = _options(conversations, conversation_name)
    return ListSearchResult(results=filter_options(options, filter))


async def search_contacts(
    client: ChatwootClient,
    parameters: dict[str, Any],
    filter: str | None = None,
    pagination_token: str | None = None,
) -> ListSearchResult:
    """Contacts; a filter is searched server-side, paged by page number."""
    account_id = _parent_id(parameters, "account_id")
    if not account_id:
        return ListSearchResult()

    def contact_name(contact: dict[str, Any]) -> str:
        return _display_name(contact, "Contact")

    if not filter:
        response = await client.request("GET", f"/api/v1/accounts/{account_id}/contacts")
        return ListSearchResult(results=_options(extract_list(response, "payload"), contact_name))

    page = int(pagination_token or 1)
    response = await client.request(
        "GET",
        f"/api/v1/accounts/{account_id}/contacts/search",
        query={"q": filter, "page": page},
    )
    contacts = extract_list(response, "payload")
    return ListSearchResult(
        results=_options(contacts, contact_name),
        pagination_token=str(page + 1) if contacts else None,
    )


async def search_agents(
    client: ChatwootClient,
    parameters: dict[str, Any],
    filter: str | None = None,
    pagination_token: str | None = None,
) -> ListSearchResult:
    account_id = _parent_id(parameters, "account_id")
    if not account_id:
        return ListSearchResult()

    agents = extract_list(await client.request("GET", f"/api/v1/accounts/{account_id}/agents"))
    options = _options(agents, lambda agent: _display_name(agent, "Agent"))
    return ListSearchResult(results=filter_options(options, filter))


async def search_teams(
    client: ChatwootClient,
    parameters: dict[str, Any],
    filter: str | None = None,
    pagination_token: str | None = None,
) -> ListSearchResult:
    account_id = _parent_id(parameters, "account_id")
    if not account_id:
        return ListSearchResult()

    teams = extract_list(await client.request("GET", f"/api/v1/accounts/{account_id}/teams"))
    options = _options(teams, lambda team: team["name"])
    return ListSearchResult(results=filter_options(options, filter))


async def search_team_members(
    client: ChatwootClient,
    parameters: dict[str, Any],
    filter: str | None = None,
    pagination_token: str | None = None,
) -> ListSearchResult:
    account_id = _parent_id(parameters, "account_id")
    team_id = _parent_id(parameters, "team_id")
    if not account_id or not team_id:
        return ListSearchResult()

    members = extract_list(
        await client.request("GET", f"/api/v1/accounts/{account_id}/teams/{team_id}/team_members")
    )
    options = _options(members, lambda member: _display_name(member, "Agent"))
    return ListSearchResult(results=filter_options(options, filter))


async def search_labels(
    client: ChatwootClient,
    parameters: dict[str, Any],
    filter: str | None = None,
    pagination_token: str | None = None,
) -> ListSearchResult:
    account_id = _parent_id(parameters, "account_id")
    if not account_id:
        return ListSearchResult()

    response = await client.request("GET", f"/api/v1/accounts/{account_id}/labels")
    options = _options(extract_list(response, "payload"), lambda label: label["title"])
    return ListSearchResult(results=filter_options(options, filter))


async def search_webhooks(
    client: ChatwootClient,
    parameters: dict[str, Any],
    filter: str | None = None,
    pagination_token: str | None = None,
) -> ListSearchResult:
    account_id = _parent_id(parameters, "account_id")
    if not account_id:
        return ListSearchResult()

    response = await client.request("GET", f"/api/v1/accounts/{account_id}/webhooks")
    webhooks = extract_list(response, "payload", "webhooks")
    options = _options(webhooks, lambda webhook: webhook["url"])
    return ListSearchResult(results=filter_options(options, filter))


async def search_kanban_boards(
    client: ChatwootClient,
    parameters: dict[str, Any],
    filter: str | None = None,
    pagination_token: str | None = None,
) -> ListSearchResult:
    account_id = _parent_id(parameters, "account_id")
    if not account_id:
        return ListSearchResult()

    response = await client.request("GET", f"/api/v1/accounts/{account_id}/kanban/boards")
    options = _options(extract_list(response, "boards"), lambda board: board["name"])
    return ListSearchResult(results=filter_options(options, filter))


def _step_name(step: dict[str, Any]) -> str:
    name = step["name"]
    if step.get("cancelled"):
        name = f"(Cancelled) {name}"
    if step.get("description"):
        name = f"{name}: {step['description']}"
    return name


async def search_kanban_steps(
    client: ChatwootClient,
    parameters: dict[str, Any],
    filter: str | None = None,
    pagination_token: str | None = None,
) -> ListSearchResult:
    account_id = _parent_id(parameters, "account_id")
    board_id = _parent_id(parameters, "kanban_board_id")
    if not account_id or not board_id:
        return ListSearchResult()

    response = await client.request(
        "GET", f"/api/v1/accounts/{account_id}/kanban/boards/{board_id}/steps"
    )
    options = _options(extract_list(response, "steps"), _step_name)
    return ListSearchResult(results=filter_options(options, filter))


async def search_kanban_tasks(
    client: ChatwootClient,
    parameters: dict[str, Any],
    filter: str | None = None,
    pagination_token: str | None = None,
) -> ListSearchResult:
    account_id = _parent_id(parameters, "account_id")
    board_id = _parent_id(parameters, "kanban_board_id")
    if not account_id or not board_id:
        return ListSearchResult()

    response = await client.request(
        "GET",
        f"/api/v1/accounts/{account_id}/kanban/tasks",
        query={"board_id": board_id},
    )
    options = _options(extract_list(response, "tasks"), lambda task: task["title"])
    return ListSearchResult(results=filter_options(options, filter))


LIST_SEARCH_METHODS: dict[str, SearchProvider] = {
    "searchAccounts": search_accounts,
    "searchInboxes": search_inboxes,
    "searchWhatsappSpecialProvidersInboxes": search_whatsapp_special_provider_inboxes,
    "searchWebhookInboxes": search_webhook_inboxes,
    "searchConversations": search_conversations,
    "searchContacts": search_contacts,
    "searchAgents": search_agents,
    "searchTeams": search_teams,
    "searchTeamMembers": search_team_members,
    "searchLabels": search_labels,
    "searchWebhooks": search_webhooks,
    "searchKanbanBoards": search_kanban_boards,
    "searchKanbanSteps": search_kanban_steps,
    "searchKanbanTasks": search_kanban_tasks,
}
