"""
Chatwoot Service Applications Package.

Contains:
- core_api: FastAPI application (main API server)
"""

__version__ = "0.1.0"
