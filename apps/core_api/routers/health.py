"""
Health Check Endpoints.

- GET /healthz: Liveness probe (API running)
- GET /readyz: Readiness probe (Chatwoot reachable with the configured token)
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from apps.core_api.deps import get_chatwoot_client
from chatwoot_obs.logging import get_logger
from chatwoot_tools.adapters.chatwoot.client import ChatwootClient
from chatwoot_tools.adapters.chatwoot.exceptions import ChatwootError

router = APIRouter()
logger = get_logger(__name__)


@router.get("/healthz")
async def healthz():
    """
    Liveness probe - is the API process running?

    Returns 200 OK if server is alive.
    """
    return {"status": "healthy", "service": "chatwoot-service"}


@router.get("/readyz")
async def readyz(client: ChatwootClient = Depends(get_chatwoot_client)):
    """
    Readiness probe - can we reach Chatwoot?

    Fetches the token owner's profile.

    Returns:
        200 OK if the profile call succeeds
        503 Service Unavailable otherwise
    """
    try:
        await client.request("GET", "/api/v1/profile")
    except ChatwootError as e:
        logger.warning("readiness_check_failed", error=e.message)
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "checks": {"chatwoot": "failed"}, "error": e.message},
        )

    return {"status": "ready", "checks": {"chatwoot": "ok"}}
