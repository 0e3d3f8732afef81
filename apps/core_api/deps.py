"""
FastAPI Dependency Injection.

Provides the long-lived objects built during application startup:
- Chatwoot client and operation executor
- Webhook trigger and its event queue
- Settings
"""

import asyncio

from fastapi import Depends, HTTPException, Request, status
from opentelemetry import trace

from chatwoot_config.settings import Settings
from chatwoot_tools.adapters.chatwoot.client import ChatwootClient
from chatwoot_tools.adapters.chatwoot.trigger import ChatwootTrigger
from chatwoot_tools.node import ChatwootNode


def get_settings(request: Request) -> Settings:
    """Dependency: Application settings."""
    return request.app.state.settings


def get_chatwoot_client(request: Request) -> ChatwootClient:
    """Dependency: Shared Chatwoot API client."""
    return request.app.state.chatwoot_client


def get_node(request: Request) -> ChatwootNode:
    """Dependency: Operation executor."""
    return request.app.state.node


def get_trigger(request: Request) -> ChatwootTrigger:
    """
    Dependency: Webhook trigger.

    Raises:
        HTTPException: 404 when the trigger is disabled
    """
    trigger = getattr(request.app.state, "trigger", None)
    if trigger is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Webhook trigger is not enabled")
    return trigger


def get_trigger_events(request: Request) -> asyncio.Queue:
    """Dependency: Queue receiving trigger output records."""
    return request.app.state.trigger_events


def get_tracer() -> trace.Tracer:
    """Dependency: OpenTelemetry tracer."""
    return trace.get_tracer(__name__)


async def get_trace_id(tracer: trace.Tracer = Depends(get_tracer)) -> str:
    """
    Dependency: Extract current trace ID from OpenTelemetry context.

    Returns:
        str: Trace ID (hex format)
    """
    span = trace.get_current_span()
    if span and span.get_span_context().is_valid:
        return format(span.get_span_context().trace_id, "032x")

    return "no_trace"
