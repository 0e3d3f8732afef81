"""
Picker Endpoints.

- GET /search/{method}: Searchable resource lists
- GET /options/{method}: Dropdown options

Query parameters other than `filter` and `pagination_token` are passed to
the provider as parameters (e.g. account_id, team_id, kanban_board_id).
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from apps.core_api.deps import get_chatwoot_client
from chatwoot_tools.adapters.chatwoot.client import ChatwootClient
from chatwoot_tools.adapters.chatwoot.list_search import LIST_SEARCH_METHODS
from chatwoot_tools.adapters.chatwoot.load_options import LOAD_OPTIONS_METHODS
from chatwoot_tools.adapters.chatwoot.schemas import ListSearchOption, ListSearchResult

router = APIRouter()

RESERVED_QUERY_PARAMS = {"filter", "pagination_token"}


def _provider_parameters(request: Request) -> dict[str, str]:
    return {
        key: value
        for key, value in request.query_params.items()
        if key not in RESERVED_QUERY_PARAMS
    }


@router.get("/search/{method}", response_model=ListSearchResult)
async def list_search(
    method: str,
    request: Request,
    filter: str | None = None,
    pagination_token: str | None = None,
    client: ChatwootClient = Depends(get_chatwoot_client),
) -> ListSearchResult:
    provider = LIST_SEARCH_METHODS.get(method)
    if provider is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown search method: {method}")
    return await provider(client, _provider_parameters(request), filter, pagination_token)


@router.get("/options/{method}", response_model=list[ListSearchOption])
async def load_options(
    method: str,
    request: Request,
    client: ChatwootClient = Depends(get_chatwoot_client),
) -> list[ListSearchOption]:
    provider = LOAD_OPTIONS_METHODS.get(method)
    if provider is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown options method: {method}")
    return await provider(client, _provider_parameters(request))
