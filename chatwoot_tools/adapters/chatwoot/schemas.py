"""Chatwoot adapter Pydantic schemas.

Parameter shapes, picker results and the persisted trigger record.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# RESOURCE LOCATOR
# ============================================================================


class ResourceLocator(BaseModel):
    """A typed-in ID or a selection made from a searchable list."""

    mode: str = Field("id", description="list, id or url")
    value: str | int | None = Field(None, description="Selected or typed ID")


# ============================================================================
# LIST SEARCH
# ============================================================================


class ListSearchOption(BaseModel):
    """Single picker entry."""

    name: str
    value: str | int


class ListSearchResult(BaseModel):
    """One page of picker entries."""

    results: list[ListSearchOption] = Field(default_factory=list)
    pagination_token: str | None = None


# ============================================================================
# RESPONSE FILTERING
# ============================================================================


class ResponseFilters(BaseModel):
    """Top-level field selection applied to every output record."""

    mode: Literal["none", "select", "except"] = "none"
    fields: list[str] = Field(default_factory=list)


# ============================================================================
# WEBHOOK TRIGGER
# ============================================================================


class WebhookRegistration(BaseModel):
    """Persisted trigger state: the remote webhook this instance owns."""

    model_config = ConfigDict(populate_by_name=True)

    webhook_id: int | str = Field(..., alias="webhookId")

    def to_storage(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
