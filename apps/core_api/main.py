"""
Chatwoot Service FastAPI Application Entry Point.

This module initializes the FastAPI application with:
- CORS middleware
- OpenTelemetry instrumentation
- Request ID injection and request logging
- Lifespan context management (Chatwoot client, trigger store, webhook)
- Router mounting
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from apps.core_api.middleware import RequestIDMiddleware, RequestLoggingMiddleware
from apps.core_api.routers import execute, health, metrics, search, webhook
from chatwoot_config.settings import Settings
from chatwoot_obs.logging import get_logger, setup_logging
from chatwoot_obs.tracing import setup_tracing
from chatwoot_tools.adapters.chatwoot import register_chatwoot_operations
from chatwoot_tools.adapters.chatwoot.client import ChatwootClient
from chatwoot_tools.adapters.chatwoot.exceptions import (
    ChatwootAPIError,
    ChatwootConfigurationError,
    ChatwootError,
    ChatwootTimeoutError,
    ChatwootValidationError,
)
from chatwoot_tools.adapters.chatwoot.storage import create_webhook_store
from chatwoot_tools.adapters.chatwoot.trigger import ChatwootTrigger
from chatwoot_tools.node import ChatwootNode
from chatwoot_tools.registry import OperationRegistry

# Initialize settings
settings = Settings()

# Setup logging
setup_logging(settings)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Handles:
    - Chatwoot client and operation registry initialization
    - Webhook trigger activation (when enabled) and deactivation
    - Graceful shutdown
    """
    logger.info(
        "startup",
        environment=settings.ENVIRONMENT,
        chatwoot_url=settings.CHATWOOT_URL,
        trigger_enabled=settings.TRIGGER_ENABLED,
    )

    client = ChatwootClient(settings.CHATWOOT_URL, settings.CHATWOOT_ACCESS_TOKEN)
    registry = OperationRegistry()
    register_chatwoot_operations(registry)

    app.state.settings = settings
    app.state.chatwoot_client = client
    app.state.registry = registry
    app.state.node = ChatwootNode(registry, client, settings=settings, node_name=settings.NODE_NAME)
    app.state.trigger_events = asyncio.Queue(maxsize=settings.TRIGGER_EVENT_QUEUE_SIZE)
    app.state.trigger = None

    store = None
    try:
        if settings.TRIGGER_ENABLED:
            store = await create_webhook_store(settings.REDIS_URL, settings.REDIS_KEY_PREFIX)
            trigger = ChatwootTrigger(
                client=client,
                store=store,
                instance_key=settings.TRIGGER_NODE_NAME,
                node_name=settings.TRIGGER_NODE_NAME,
                webhook_url=settings.trigger_webhook_url,
                account_id=settings.TRIGGER_ACCOUNT_ID,
                events=settings.trigger_events,
                inbox_id=settings.TRIGGER_INBOX_ID,
                activation_mode=settings.TRIGGER_ACTIVATION_MODE,
            )
            await trigger.activate()
            app.state.trigger = trigger

        logger.info("ready", operations=len(registry), resources=registry.resources())

        yield

        logger.info("shutdown")
        if app.state.trigger is not None:
            try:
                await app.state.trigger.deactivate()
            except ChatwootError as e:
                logger.error("trigger_deactivation_failed", error=e.message)
    finally:
        if store is not None and hasattr(store, "disconnect"):
            await store.disconnect()
        await client.close()


# Initialize FastAPI application
app = FastAPI(
    title="Chatwoot Service API",
    description="Chatwoot operations, resource pickers and webhook trigger",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Setup OpenTelemetry tracing
setup_tracing(settings, app)

# ============================================================================
# MIDDLEWARE
# ============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.API_CORS_ORIGINS.split(",") if settings.API_CORS_ORIGINS else ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

app.add_middleware(RequestLoggingMiddleware)

# Added last so it runs first and the logger sees the request ID
app.add_middleware(RequestIDMiddleware)

# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


def error_status(exc: ChatwootError) -> int:
    """HTTP status for a Chatwoot error surfaced by the API."""
    if isinstance(exc, (ChatwootConfigurationError, ChatwootValidationError)):
        return 400
    if isinstance(exc, ChatwootTimeoutError):
        return 504
    if isinstance(exc, ChatwootAPIError) and exc.status_code and exc.status_code >= 400:
        return exc.status_code
    return 502


@app.exception_handler(ChatwootError)
async def chatwoot_exception_handler(request: Request, exc: ChatwootError):
    return JSONResponse(
        status_code=error_status(exc),
        content={
            "error": type(exc).__name__,
            "message": exc.message,
            "description": getattr(exc, "description", None),
            "node": exc.node_name,
            "item_index": exc.item_index,
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled exceptions."""
    logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=exc)

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred.",
        },
    )


# ============================================================================
# ROUTERS
# ============================================================================

app.include_router(execute.router, prefix="", tags=["execution"])
app.include_router(search.router, prefix="", tags=["pickers"])
app.include_router(webhook.router, prefix="", tags=["trigger"])
app.include_router(health.router, prefix="", tags=["health"])
app.include_router(metrics.router, prefix="", tags=["metrics"])


@app.get("/", tags=["root"])
async def root():
    """
    Root endpoint - API information.

    Returns:
        API metadata and available endpoints
    """
    return {
        "name": "Chatwoot Service API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/healthz",
        "metrics": "/metrics",
        "endpoints": {
            "execution": "POST /execute",
            "search": "GET /search/{method}",
            "options": "GET /options/{method}",
            "webhook": "POST /webhook",
            "events": "GET /webhook/events",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "apps.core_api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )
