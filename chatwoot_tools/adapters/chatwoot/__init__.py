"""Chatwoot adapter.

Provides every Chatwoot resource operation, the list-search and
load-options pickers, and the webhook trigger lifecycle.

Usage:
    from chatwoot_tools.adapters.chatwoot import register_chatwoot_operations
    from chatwoot_tools.registry import OperationRegistry

    registry = OperationRegistry()
    register_chatwoot_operations(registry)
"""

from .client import ChatwootClient
from .context import OperationContext
from .exceptions import (
    ChatwootAPIError,
    ChatwootAuthError,
    ChatwootConfigurationError,
    ChatwootError,
    ChatwootNotFoundError,
    ChatwootRateLimitError,
    ChatwootTimeoutError,
    ChatwootValidationError,
)
from .operations import build_operations
from .schemas import (
    ListSearchOption,
    ListSearchResult,
    ResourceLocator,
    ResponseFilters,
    WebhookRegistration,
)

__all__ = [
    # Client
    "ChatwootClient",
    "OperationContext",
    # Exceptions
    "ChatwootError",
    "ChatwootConfigurationError",
    "ChatwootValidationError",
    "ChatwootTimeoutError",
    "ChatwootAPIError",
    "ChatwootAuthError",
    "ChatwootNotFoundError",
    "ChatwootRateLimitError",
    # Schemas
    "ResourceLocator",
    "ListSearchOption",
    "ListSearchResult",
    "ResponseFilters",
    "WebhookRegistration",
]


def register_chatwoot_operations(registry) -> None:
    """Register every Chatwoot operation with the operation registry.

    Args:
        registry: OperationRegistry instance
    """
    for operation in build_operations():
        registry.register(operation)
