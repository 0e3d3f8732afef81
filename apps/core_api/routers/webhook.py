"""
Inbound Webhook Endpoints.

- POST /webhook: Chatwoot event delivery for the registered trigger
- GET /webhook/events: Drain queued trigger output

The queue is bounded; when it is full the oldest record is dropped to make
room for the new delivery.
"""

import asyncio
from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from apps.core_api.deps import get_trigger, get_trigger_events
from chatwoot_obs.logging import get_logger
from chatwoot_obs.metrics import webhook_events_dropped_total
from chatwoot_tools.adapters.chatwoot.trigger import ChatwootTrigger

router = APIRouter()
logger = get_logger(__name__)


def enqueue(events: asyncio.Queue, record: dict[str, Any]) -> None:
    """Put a record on the queue, evicting the oldest one when full."""
    if events.full():
        events.get_nowait()
        webhook_events_dropped_total.inc()
        logger.warning("webhook_event_dropped", queue_size=events.maxsize)
    events.put_nowait(record)


@router.post("/webhook")
async def receive_webhook(
    body: Any = Body(...),
    trigger: ChatwootTrigger = Depends(get_trigger),
    events: asyncio.Queue = Depends(get_trigger_events),
):
    """Queue the delivery body, unchanged, as trigger output."""
    records = trigger.deliver(body)
    for record in records:
        enqueue(events, record)

    logger.info(
        "webhook_received",
        event_type=records[0].get("event") if records else None,
        records=len(records),
    )
    return {"received": len(records)}


@router.get("/webhook/events")
async def drain_events(
    limit: int = Query(default=100, ge=1, le=1000),
    trigger: ChatwootTrigger = Depends(get_trigger),
    events: asyncio.Queue = Depends(get_trigger_events),
):
    """Remove and return up to `limit` queued records, oldest first."""
    records = []
    while len(records) < limit and not events.empty():
        records.append(events.get_nowait())
    return {"events": records, "remaining": events.qsize()}
