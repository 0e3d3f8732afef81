"""Conversation and message operation tests."""

import pytest

from chatwoot_tools.adapters.chatwoot.operations import conversation, message


@pytest.mark.asyncio
async def test_create_conversation_parses_custom_attributes(make_ctx, mock_request):
    ctx = make_ctx(
        contact_id=3,
        inbox_id={"mode": "list", "value": "4"},
        additional_fields={"status": "pending", "custom_attributes": '{"order": 99}'},
    )

    await conversation.create_conversation(ctx)

    assert mock_request.call_args.kwargs["body"] == {
        "contact_id": "3",
        "inbox_id": "4",
        "status": "pending",
        "custom_attributes": {"order": 99},
    }


@pytest.mark.asyncio
async def test_list_conversations_filters(make_ctx, mock_request):
    await conversation.list_conversations(
        make_ctx(filters={"status": "open", "assignee_type": "", "page": 2}, inbox_id=4)
    )

    assert mock_request.call_args.kwargs["query"] == {"status": "open", "page": 2, "inbox_id": "4"}


@pytest.mark.asyncio
async def test_toggle_status_converts_snooze_to_epoch(make_ctx, mock_request):
    await conversation.toggle_status(
        make_ctx(conversation_id=8, status="snoozed", snooze_until="2024-01-01T00:00:00Z")
    )

    assert mock_request.call_args.kwargs["body"] == {"status": "snoozed", "snoozed_until": 1704067200}


@pytest.mark.asyncio
async def test_set_priority_null_clears(make_ctx, mock_request):
    await conversation.set_priority(make_ctx(conversation_id=8, priority="null"))

    mock_request.assert_called_once_with(
        "POST", "/api/v1/accounts/1/conversations/8/toggle_priority", body={"priority": None}, query=None
    )


@pytest.mark.asyncio
async def test_update_labels_replaces_set(make_ctx, mock_request):
    await conversation.update_conversation_labels(make_ctx(conversation_id=8, labels=["a", "b"]))

    mock_request.assert_called_once_with(
        "POST", "/api/v1/accounts/1/conversations/8/labels", body={"labels": ["a", "b"]}, query=None
    )


@pytest.mark.asyncio
async def test_send_message_raw_json(make_ctx, mock_request):
    await message.send_message(
        make_ctx(conversation_id=8, use_raw_json=True, json_body='{"content": "hi", "private": true}')
    )

    assert mock_request.call_args.kwargs["body"] == {"content": "hi", "private": True}


@pytest.mark.asyncio
async def test_send_message_fields(make_ctx, mock_request):
    await message.send_message(
        make_ctx(
            conversation_id=8,
            content="hello",
            message_type="outgoing",
            additional_fields={"content_type": "input_select", "content_attributes": '{"items": []}'},
        )
    )

    assert mock_request.call_args.kwargs["body"] == {
        "content": "hello",
        "message_type": "outgoing",
        "private": False,
        "content_type": "input_select",
        "content_attributes": {"items": []},
    }


@pytest.mark.asyncio
async def test_delete_message_reports_success(make_ctx, mock_request):
    result = await message.delete_message(make_ctx(conversation_id=8, message_id=12))

    assert result == {"success": True}
    mock_request.assert_called_once_with(
        "DELETE", "/api/v1/accounts/1/conversations/8/messages/12", body=None, query=None
    )
