"""Message history pagination tests."""

import pytest

from chatwoot_tools.adapters.chatwoot.operations import message


def page(start_id: int, size: int) -> dict:
    """A page of `size` messages with descending IDs starting at `start_id`."""
    return {"payload": [{"id": start_id - offset} for offset in range(size)]}


@pytest.mark.asyncio
async def test_single_request_without_minimum(make_ctx, mock_request):
    mock_request.return_value = page(100, 20)

    result = await message.get_all_messages(make_ctx(conversation_id=8, options={"after": 50}))

    assert len(result) == 20
    mock_request.assert_called_once_with(
        "GET", "/api/v1/accounts/1/conversations/8/messages", body=None, query={"after": 50}
    )


@pytest.mark.asyncio
async def test_pages_until_minimum_reached(make_ctx, mock_request):
    mock_request.side_effect = [page(100, 20), page(80, 20), page(60, 5), page(55, 0)]

    result = await message.get_all_messages(make_ctx(conversation_id=8, minimum_count=45))

    assert len(result) == 45
    assert mock_request.call_count == 3
    cursors = [call.kwargs["query"].get("before") for call in mock_request.call_args_list]
    assert cursors == [None, 81, 61]


@pytest.mark.asyncio
async def test_stops_once_minimum_met(make_ctx, mock_request):
    mock_request.side_effect = [page(100, 20), page(80, 20), page(60, 5)]

    result = await message.get_all_messages(make_ctx(conversation_id=8, minimum_count=40))

    assert len(result) == 40
    assert mock_request.call_count == 2


@pytest.mark.asyncio
async def test_empty_page_ends_pagination(make_ctx, mock_request):
    mock_request.side_effect = [page(10, 5), page(5, 0)]

    result = await message.get_all_messages(make_ctx(conversation_id=8, minimum_count=100))

    assert len(result) == 5
    assert mock_request.call_count == 2


@pytest.mark.asyncio
async def test_response_without_payload_is_returned_whole(make_ctx, mock_request):
    mock_request.return_value = {"meta": {"labels": []}, "data": []}

    result = await message.get_all_messages(make_ctx(conversation_id=8))

    assert result == {"meta": {"labels": []}, "data": []}


@pytest.mark.asyncio
async def test_empty_payload_is_not_replaced(make_ctx, mock_request):
    mock_request.return_value = {"payload": []}

    assert await message.get_all_messages(make_ctx(conversation_id=8)) == []
