"""Webhook trigger lifecycle tests."""

import pytest

from chatwoot_tools.adapters.chatwoot.exceptions import ChatwootAPIError, ChatwootConfigurationError
from chatwoot_tools.adapters.chatwoot.storage import InMemoryWebhookStore
from chatwoot_tools.adapters.chatwoot.trigger import ChatwootTrigger

WEBHOOK_URL = "https://hooks.example.com/webhook"


@pytest.fixture
def store():
    return InMemoryWebhookStore()


@pytest.fixture
def trigger(chatwoot_client, store):
    return ChatwootTrigger(
        client=chatwoot_client,
        store=store,
        instance_key="instance-1",
        node_name="Support Events",
        webhook_url=WEBHOOK_URL,
        account_id="1",
        events=["message_created", "conversation_created"],
    )


def test_webhook_name_by_activation_mode(trigger):
    assert trigger.webhook_name == "[N8N] Support Events"
    trigger.activation_mode = "manual"
    assert trigger.webhook_name == "[N8N-TEST] Support Events"


@pytest.mark.asyncio
async def test_check_exists_adopts_matching_webhook(trigger, store, mock_request):
    mock_request.return_value = {
        "payload": [
            {"id": 3, "url": "https://other.example.com", "subscriptions": [], "name": "x"},
            {
                "id": 7,
                "url": WEBHOOK_URL,
                "subscriptions": ["conversation_created", "message_created"],
                "name": "[N8N] Support Events",
            },
        ]
    }

    assert await trigger.check_exists() is True
    assert await store.get("instance-1") == {"webhookId": 7}


@pytest.mark.asyncio
async def test_check_exists_deletes_mismatched_webhook(trigger, store, mock_request):
    mock_request.side_effect = [
        [{"id": 7, "url": WEBHOOK_URL, "subscriptions": ["message_created"], "name": "[N8N] Support Events"}],
        {},
    ]

    assert await trigger.check_exists() is False
    assert mock_request.call_args.args == ("DELETE", "/api/v1/accounts/1/webhooks/7")
    assert await store.get("instance-1") is None


@pytest.mark.asyncio
async def test_check_exists_false_when_absent(trigger, mock_request):
    mock_request.return_value = {"webhooks": []}

    assert await trigger.check_exists() is False


@pytest.mark.asyncio
async def test_fetch_failure_is_prefixed(trigger, mock_request):
    mock_request.side_effect = ChatwootAPIError("Invalid Access Token", status_code=401)

    with pytest.raises(ChatwootAPIError) as exc_info:
        await trigger.check_exists()

    assert exc_info.value.message == "Failed to fetch webhooks: Invalid Access Token"
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        {"payload": {"webhook": {"id": 21}}},
        {"payload": {"id": 21}},
        {"id": 21},
    ],
)
async def test_create_extracts_id_from_each_shape(trigger, store, mock_request, response):
    mock_request.return_value = response

    await trigger.create()

    body = mock_request.call_args.kwargs["body"]
    assert body == {
        "webhook": {
            "name": "[N8N] Support Events",
            "url": WEBHOOK_URL,
            "subscriptions": ["message_created", "conversation_created"],
        }
    }
    assert await store.get("instance-1") == {"webhookId": 21}


@pytest.mark.asyncio
async def test_create_without_id_fails(trigger, mock_request):
    mock_request.return_value = {"payload": {}}

    with pytest.raises(ChatwootAPIError) as exc_info:
        await trigger.create()

    assert exc_info.value.message.startswith("Failed to extract webhook ID")


@pytest.mark.asyncio
async def test_create_sends_inbox_filter(chatwoot_client, store, mock_request):
    trigger = ChatwootTrigger(
        chatwoot_client, store, "instance-2", "Sales", WEBHOOK_URL, "1", ["message_created"], inbox_id="4"
    )
    mock_request.return_value = {"id": 30}

    await trigger.create()

    assert mock_request.call_args.kwargs["body"]["webhook"]["inbox_id"] == "4"


@pytest.mark.asyncio
async def test_delete_removes_remote_and_local_state(trigger, store, mock_request):
    await store.set("instance-1", {"webhookId": 7})

    assert await trigger.delete() is True

    assert mock_request.call_args.args == ("DELETE", "/api/v1/accounts/1/webhooks/7")
    assert await store.get("instance-1") is None


@pytest.mark.asyncio
async def test_delete_without_state_is_noop(trigger, mock_request):
    assert await trigger.delete() is True
    mock_request.assert_not_called()


@pytest.mark.asyncio
async def test_activate_creates_when_missing(trigger, store, mock_request):
    mock_request.side_effect = [[], {"payload": {"webhook": {"id": 40}}}]

    await trigger.activate()

    assert await store.get("instance-1") == {"webhookId": 40}


def test_deliver_passes_body_through(trigger):
    body = {"event": "message_created", "content": "hi", "conversation": {"id": 3}}

    assert trigger.deliver(body) == [body]


@pytest.mark.parametrize("account_id", ["", None, "  "])
def test_missing_account_id_is_rejected_before_any_request(chatwoot_client, store, mock_request, account_id):
    with pytest.raises(ChatwootConfigurationError) as exc_info:
        ChatwootTrigger(chatwoot_client, store, "instance-3", "Sales", WEBHOOK_URL, account_id, ["message_created"])

    assert "account_id" in exc_info.value.message
    mock_request.assert_not_called()


def test_account_locator_is_resolved(chatwoot_client, store):
    trigger = ChatwootTrigger(
        chatwoot_client, store, "instance-4", "Sales", WEBHOOK_URL, {"mode": "id", "value": 7}, ["message_created"]
    )
    assert trigger.account_id == "7"
