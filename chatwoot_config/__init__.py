"""
Chatwoot Service Configuration Package.

Provides Pydantic Settings loaded from environment variables.
"""

from chatwoot_config.settings import Settings

__all__ = ["Settings"]
