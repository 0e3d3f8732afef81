"""Chatwoot API client.

Single authenticated transport for every operation, list-search provider and
trigger lifecycle call. One attempt per call: no retries, no backoff.
"""

from typing import Any

import httpx

from chatwoot_obs.logging import get_logger

from .exceptions import (
    ChatwootAPIError,
    ChatwootAuthError,
    ChatwootNotFoundError,
    ChatwootRateLimitError,
)

logger = get_logger(__name__)

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


class ChatwootClient:
    """Chatwoot application API client.

    Provides:
    - Api-Access-Token authentication
    - Error extraction from Chatwoot's `errors` / `error` bodies
    - Exception mapping by status code
    """

    def __init__(self, base_url: str, access_token: str):
        """Initialize Chatwoot client.

        Args:
            base_url: Chatwoot instance URL (e.g. https://app.chatwoot.com)
            access_token: Personal access token
        """
        self._base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.client = httpx.AsyncClient(base_url=self._base_url)

    @property
    def base_url(self) -> str:
        """Base URL without trailing slash, for building external links."""
        return self._base_url

    def _get_headers(self) -> dict[str, str]:
        """Get request headers with authentication."""
        return {
            "Api-Access-Token": self.access_token,
            "Accept": "application/json",
        }

    def _handle_error(self, response: httpx.Response) -> None:
        """Map Chatwoot API errors to custom exceptions."""
        status = response.status_code
        description = f"HTTP {status}: {response.text}"

        message = None
        try:
            error_data = response.json()
        except ValueError:
            error_data = None

        if isinstance(error_data, dict):
            errors = error_data.get("errors")
            if isinstance(errors, list) and errors:
                message = "; ".join(str(error) for error in errors)
            elif isinstance(error_data.get("error"), str):
                message = error_data["error"]
            elif isinstance(error_data.get("message"), str):
                message = error_data["message"]

        if not message:
            message = response.text or response.reason_phrase or f"HTTP {status}"

        if status == 401:
            raise ChatwootAuthError(message, status_code=status, description=description)
        elif status == 404:
            raise ChatwootNotFoundError(message, status_code=status, description=description)
        elif status == 429:
            raise ChatwootRateLimitError(message, status_code=status, description=description)
        else:
            raise ChatwootAPIError(message, status_code=status, description=description)

    async def request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        query: dict[str, Any] | None = None,
    ) -> Any:
        """Make an authenticated request to the Chatwoot API.

        Args:
            method: GET, POST, PUT, PATCH or DELETE
            path: Endpoint path, e.g. /api/v1/profile
            body: JSON body (omitted when empty)
            query: Query string parameters (omitted when empty)

        Returns:
            Parsed JSON response ({} for an empty body)

        Raises:
            ChatwootAuthError: Invalid token
            ChatwootNotFoundError: Unknown resource
            ChatwootRateLimitError: Rate limit exceeded
            ChatwootAPIError: Other API errors and transport failures
        """
        method = method.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        kwargs: dict[str, Any] = {"headers": self._get_headers()}
        if body:
            kwargs["json"] = body
        if query:
            kwargs["params"] = query

        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error("chatwoot_request_failed", method=method, path=path, error=str(e))
            raise ChatwootAPIError(f"Request failed: {e}", description=str(e)) from e

        logger.debug(
            "chatwoot_request",
            method=method,
            path=path,
            status=response.status_code,
        )

        if not response.is_success:
            self._handle_error(response)

        if not response.content:
            return {}
        return response.json()

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
