"""Per-item operation context.

Handlers read their declared parameters from the context and may add
execution hints; nothing else is shared between items.
"""

from typing import Any

from chatwoot_tools.base import ExecutionHint

from .client import ChatwootClient
from .exceptions import ChatwootConfigurationError
from .locator import resolve_optional_resource_id, resolve_resource_id

_MISSING = object()


class OperationContext:
    """Parameters, client and settings for one input item."""

    def __init__(
        self,
        client: ChatwootClient,
        parameters: dict[str, Any] | None = None,
        item_index: int = 0,
        node_name: str = "Chatwoot",
        settings: Any = None,
    ):
        self.client = client
        self.parameters = parameters or {}
        self.item_index = item_index
        self.node_name = node_name
        self.settings = settings
        self.hints: list[ExecutionHint] = []

    def get_parameter(self, name: str, default: Any = _MISSING) -> Any:
        """Read a parameter; dotted names walk nested collections.

        Raises:
            ChatwootConfigurationError: Parameter absent and no default given
        """
        value: Any = self.parameters
        for part in name.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
                continue
            if default is _MISSING:
                raise ChatwootConfigurationError(
                    f'The parameter "{name}" is required.',
                    item_index=self.item_index,
                )
            return default
        return value

    def resource_id(self, name: str) -> str:
        return resolve_resource_id(self.parameters.get(name), name, item_index=self.item_index)

    def optional_resource_id(self, name: str) -> str | None:
        return resolve_optional_resource_id(self.parameters.get(name))

    def add_hint(self, message: str, type: str = "info") -> None:
        self.hints.append(ExecutionHint(message=message, type=type))

    async def request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        query: dict[str, Any] | None = None,
    ) -> Any:
        """Shorthand for client.request."""
        return await self.client.request(method, path, body=body, query=query)

    def account_path(self, suffix: str = "") -> str:
        """`/api/v1/accounts/<account_id><suffix>` for the item's account."""
        return f"/api/v1/accounts/{self.resource_id('account_id')}{suffix}"
