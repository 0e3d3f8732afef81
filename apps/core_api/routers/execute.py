"""
/execute Router - Operation Execution Endpoint.

Handles:
- POST /execute: Run one resource operation over a batch of items

Chatwoot errors propagate to the application's exception handler, which
maps them to HTTP statuses.
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from apps.core_api.deps import get_node, get_trace_id
from chatwoot_obs.logging import get_logger
from chatwoot_tools.base import ExecutionHint, ExecutionItem
from chatwoot_tools.node import ChatwootNode

router = APIRouter()
logger = get_logger(__name__)


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================


class ExecuteRequest(BaseModel):
    """Request schema for POST /execute."""

    resource: str = Field(..., description="Resource name, e.g. contact")
    operation: str = Field(..., description="Operation name, e.g. create")
    items: list[dict[str, Any]] = Field(
        default_factory=lambda: [{}], description="Parameters for each input item"
    )
    continue_on_fail: bool = Field(
        default=False, description="Emit error records for remote failures instead of aborting"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "resource": "contact",
                "operation": "create",
                "items": [
                    {
                        "account_id": 1,
                        "name": "Jane Doe",
                        "email": "jane@example.com",
                        "phone_number": "+5511999999999",
                    }
                ],
                "continue_on_fail": False,
            }
        }


class ExecuteResponse(BaseModel):
    """Response schema for POST /execute."""

    items: list[ExecutionItem]
    hints: list[ExecutionHint]
    trace_id: str


# ============================================================================
# ENDPOINTS
# ============================================================================


@router.post("/execute", response_model=ExecuteResponse)
async def execute(
    request: ExecuteRequest,
    node: ChatwootNode = Depends(get_node),
    trace_id: str = Depends(get_trace_id),
) -> ExecuteResponse:
    """Run `resource.operation` once per item, in order."""
    result = await node.execute(
        request.resource,
        request.operation,
        request.items,
        continue_on_fail=request.continue_on_fail,
    )
    logger.info(
        "execute_complete",
        resource=request.resource,
        operation=request.operation,
        items_in=len(request.items),
        items_out=len(result.items),
        trace_id=trace_id,
    )
    return ExecuteResponse(items=result.items, hints=result.hints, trace_id=trace_id)
