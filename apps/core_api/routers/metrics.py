"""
Prometheus Metrics Endpoint.

Exposes /metrics for Prometheus scraping.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics", response_class=PlainTextResponse)
async def metrics():
    """
    Prometheus metrics endpoint.

    Example metrics:
    ```
    # HELP chatwoot_operation_executions_total Total operation executions
    # TYPE chatwoot_operation_executions_total counter
    chatwoot_operation_executions_total{resource="contact",operation="create",status="success"} 42

    # HELP chatwoot_webhook_events_total Inbound webhook deliveries
    # TYPE chatwoot_webhook_events_total counter
    chatwoot_webhook_events_total 7
    ```
    """
    return PlainTextResponse(generate_latest(), media_type=CONTENT_TYPE_LATEST)
