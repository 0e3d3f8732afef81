"""Service adapters.

Available adapters:
- chatwoot: Chatwoot application API (operations, pickers, webhook trigger)
"""

__all__ = ["chatwoot"]
