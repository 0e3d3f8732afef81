"""Chatwoot Operation System.

Operation interface, registry and batch executor.
"""

from chatwoot_tools.base import ExecutionItem, ExecutionResult, HandlerOperation, OperationMetadata
from chatwoot_tools.registry import OperationRegistry

__all__ = [
    "ExecutionItem",
    "ExecutionResult",
    "HandlerOperation",
    "OperationMetadata",
    "OperationRegistry",
]
