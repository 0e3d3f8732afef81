"""
Distributed Tracing (OpenTelemetry).

Spans come from the FastAPI and httpx instrumentations plus one span per
executed operation item. With OTEL_TRACES_ENABLED unset the global no-op
provider stays in place, so operation spans cost nothing.
"""

from contextlib import contextmanager
from typing import Iterator

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from chatwoot_config.settings import Settings
from chatwoot_obs.logging import get_logger

logger = get_logger(__name__)

tracer = trace.get_tracer("chatwoot_service")


def setup_tracing(settings: Settings, app: FastAPI | None = None) -> None:
    """Install the OTLP exporter and instrument httpx (and the app, if given)."""
    if not settings.OTEL_TRACES_ENABLED:
        return

    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": settings.OTEL_SERVICE_NAME,
                "deployment.environment": settings.ENVIRONMENT,
                "chatwoot.url": settings.CHATWOOT_URL,
            }
        )
    )
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.OTEL_EXPORTER_OTLP_ENDPOINT))
    )
    trace.set_tracer_provider(provider)

    HTTPXClientInstrumentor().instrument()
    if app is not None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls="healthz,readyz,metrics")

    logger.info("tracing_enabled", service=settings.OTEL_SERVICE_NAME)


@contextmanager
def operation_span(resource: str, operation: str, item_index: int) -> Iterator[trace.Span]:
    """Span around one item of an operation run."""
    with tracer.start_as_current_span(f"chatwoot.{resource}.{operation}") as span:
        span.set_attribute("chatwoot.resource", resource)
        span.set_attribute("chatwoot.operation", operation)
        span.set_attribute("chatwoot.item_index", item_index)
        yield span
