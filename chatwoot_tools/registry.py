"""Operation Registry.

Maps (resource, operation) pairs to Operation objects.
"""

from typing import Any


class OperationRegistry:
    """Operation registry with (resource, operation) and capability lookup."""

    def __init__(self):
        self._operations: dict[tuple[str, str], Any] = {}

    def register(self, operation: Any) -> None:
        """Register an operation."""
        key = (operation.metadata.resource, operation.metadata.operation)
        self._operations[key] = operation

    def get(self, resource: str, operation: str) -> Any | None:
        """Get operation by resource and operation name."""
        return self._operations.get((resource, operation))

    def resources(self) -> list[str]:
        return sorted({resource for resource, _ in self._operations})

    def operations_for(self, resource: str) -> list[str]:
        return sorted(op for res, op in self._operations if res == resource)

    def filter_by_capability(self, capability: str) -> list[Any]:
        """Filter operations by capability tag."""
        return [o for o in self._operations.values() if capability in o.metadata.capabilities]

    def __len__(self) -> int:
        return len(self._operations)
