"""Chatwoot adapter exceptions.

Custom exception hierarchy for configuration, validation, timeout and
remote API errors.
"""


class ChatwootError(Exception):
    """Base exception for Chatwoot adapter."""

    def __init__(self, message: str, item_index: int | None = None):
        self.message = message
        self.item_index = item_index
        self.node_name: str | None = None
        super().__init__(message)


class ChatwootConfigurationError(ChatwootError):
    """Missing or invalid parameter, raised before any network call."""

    pass


class ChatwootValidationError(ChatwootError):
    """Client-side format check failed (phone, email, JSON input)."""

    pass


class ChatwootTimeoutError(ChatwootError):
    """Polling exhausted its attempt budget."""

    pass


class ChatwootAPIError(ChatwootError):
    """Non-success response or transport failure."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        description: str | None = None,
        item_index: int | None = None,
    ):
        super().__init__(message, item_index=item_index)
        self.status_code = status_code
        self.description = description


class ChatwootAuthError(ChatwootAPIError):
    """Invalid access token or insufficient permissions."""

    pass


class ChatwootNotFoundError(ChatwootAPIError):
    """Resource not found."""

    pass


class ChatwootRateLimitError(ChatwootAPIError):
    """Rate limit exceeded."""

    pass
