"""
Chatwoot Service FastAPI Application.

Main API server providing:
- /execute: Operation execution
- /search, /options: Resource pickers
- /webhook: Trigger deliveries
- /healthz, /readyz: Health checks
- /metrics: Prometheus metrics
"""

__all__ = ["app"]
