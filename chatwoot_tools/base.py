"""Operation Interface, Output Records & Metadata.

An operation maps one (resource, operation) pair to zero or more HTTP calls
and returns output records.
"""

from typing import Any, Awaitable, Callable, Literal, Protocol

from pydantic import BaseModel, Field


class OperationMetadata(BaseModel):
    """Operation capability metadata."""

    resource: str
    operation: str
    idempotent: bool = False
    capabilities: list[str] = []


class BinaryData(BaseModel):
    """Binary payload attached to an output record (base64 encoded)."""

    data: str
    mime_type: str
    file_name: str


class ExecutionItem(BaseModel):
    """One output record."""

    data: dict[str, Any]
    binary: dict[str, BinaryData] | None = None
    paired_item: int = 0


class ExecutionHint(BaseModel):
    """Non-fatal notice surfaced next to the output."""

    message: str
    type: Literal["info", "warning", "danger"] = "info"
    location: str = "outputPane"


class ExecutionResult(BaseModel):
    """Records and hints produced by one run over a batch of items."""

    items: list[ExecutionItem] = Field(default_factory=list)
    hints: list[ExecutionHint] = Field(default_factory=list)


OperationOutput = dict[str, Any] | list[dict[str, Any]] | ExecutionItem

Handler = Callable[[Any], Awaitable[OperationOutput]]


class Operation(Protocol):
    """Operation interface."""

    name: str
    description: str
    metadata: OperationMetadata

    async def execute(self, ctx: Any) -> OperationOutput:
        """Execute operation."""
        ...


class HandlerOperation:
    """Operation backed by a plain async handler function."""

    def __init__(
        self,
        resource: str,
        operation: str,
        handler: Handler,
        description: str = "",
        idempotent: bool = False,
    ):
        self.handler = handler
        self.name = f"{resource}.{operation}"
        self.description = description or (handler.__doc__ or "").strip()
        self.metadata = OperationMetadata(
            resource=resource,
            operation=operation,
            idempotent=idempotent,
            capabilities=[f"chatwoot.{resource}"],
        )

    async def execute(self, ctx: Any) -> OperationOutput:
        return await self.handler(ctx)
