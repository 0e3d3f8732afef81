"""
FastAPI Routers.

Contains:
- execute: POST /execute
- search: GET /search/{method}, GET /options/{method}
- webhook: POST /webhook
- health: GET /healthz, /readyz
- metrics: GET /metrics
"""

__all__ = ["execute", "search", "webhook", "health", "metrics"]
