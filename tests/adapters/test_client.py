"""Unit tests for the Chatwoot transport.

The underlying httpx client is mocked; responses are real httpx.Response
objects so status and body handling run unmodified.
"""

import httpx
import pytest
from unittest.mock import AsyncMock, patch

from chatwoot_tools.adapters.chatwoot.client import ChatwootClient
from chatwoot_tools.adapters.chatwoot.exceptions import (
    ChatwootAPIError,
    ChatwootAuthError,
    ChatwootNotFoundError,
    ChatwootRateLimitError,
)


def make_response(status_code: int, json=None, content: bytes | None = None) -> httpx.Response:
    request = httpx.Request("GET", "https://chat.example.com/api/v1/profile")
    if json is not None:
        return httpx.Response(status_code, json=json, request=request)
    return httpx.Response(status_code, content=content or b"", request=request)


@pytest.fixture
def transport_client():
    return ChatwootClient("https://chat.example.com///", "test-token")


def test_base_url_strips_trailing_slashes(transport_client):
    assert transport_client.base_url == "https://chat.example.com"


@pytest.mark.asyncio
async def test_request_sends_token_and_omits_empty_body(transport_client):
    """Token header is always sent; empty body and query are left out."""
    with patch.object(transport_client.client, "request", new_callable=AsyncMock) as mock_request:
        mock_request.return_value = make_response(200, json={"id": 7})

        result = await transport_client.request("get", "/api/v1/profile", body={}, query={})

    assert result == {"id": 7}
    args, kwargs = mock_request.call_args
    assert args == ("GET", "/api/v1/profile")
    assert kwargs["headers"]["Api-Access-Token"] == "test-token"
    assert "json" not in kwargs
    assert "params" not in kwargs


@pytest.mark.asyncio
async def test_request_passes_body_and_query(transport_client):
    with patch.object(transport_client.client, "request", new_callable=AsyncMock) as mock_request:
        mock_request.return_value = make_response(200, json={"ok": True})

        await transport_client.request(
            "POST", "/api/v1/accounts/1/contacts", body={"name": "Jane"}, query={"page": 2}
        )

    kwargs = mock_request.call_args.kwargs
    assert kwargs["json"] == {"name": "Jane"}
    assert kwargs["params"] == {"page": 2}


@pytest.mark.asyncio
async def test_empty_response_body_returns_empty_dict(transport_client):
    with patch.object(transport_client.client, "request", new_callable=AsyncMock) as mock_request:
        mock_request.return_value = make_response(204)

        result = await transport_client.request("DELETE", "/api/v1/accounts/1/labels/3")

    assert result == {}


@pytest.mark.asyncio
async def test_unsupported_method_rejected(transport_client):
    with pytest.raises(ValueError):
        await transport_client.request("TRACE", "/api/v1/profile")


@pytest.mark.asyncio
async def test_errors_list_is_joined(transport_client):
    """Chatwoot validation errors come back as a list."""
    with patch.object(transport_client.client, "request", new_callable=AsyncMock) as mock_request:
        mock_request.return_value = make_response(
            422, json={"errors": ["Email has already been taken", "Name is too short"]}
        )

        with pytest.raises(ChatwootAPIError) as exc_info:
            await transport_client.request("POST", "/api/v1/accounts/1/contacts", body={"name": "x"})

    assert exc_info.value.message == "Email has already been taken; Name is too short"
    assert exc_info.value.status_code == 422
    assert "HTTP 422" in exc_info.value.description


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code, body, error_class, message",
    [
        (401, {"error": "Invalid Access Token"}, ChatwootAuthError, "Invalid Access Token"),
        (404, {"error": "Resource could not be found"}, ChatwootNotFoundError, "Resource could not be found"),
        (429, {"message": "Too many requests"}, ChatwootRateLimitError, "Too many requests"),
        (500, {"message": "Internal error"}, ChatwootAPIError, "Internal error"),
    ],
)
async def test_status_mapping(transport_client, status_code, body, error_class, message):
    with patch.object(transport_client.client, "request", new_callable=AsyncMock) as mock_request:
        mock_request.return_value = make_response(status_code, json=body)

        with pytest.raises(error_class) as exc_info:
            await transport_client.request("GET", "/api/v1/profile")

    assert exc_info.value.message == message
    assert exc_info.value.status_code == status_code


@pytest.mark.asyncio
async def test_transport_failure_wrapped(transport_client):
    with patch.object(transport_client.client, "request", new_callable=AsyncMock) as mock_request:
        mock_request.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(ChatwootAPIError) as exc_info:
            await transport_client.request("GET", "/api/v1/profile")

    assert exc_info.value.message == "Request failed: connection refused"
    assert exc_info.value.status_code is None
