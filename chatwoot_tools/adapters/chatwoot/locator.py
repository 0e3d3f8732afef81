"""Resource ID resolution.

A parameter value may be a bare ID (string or number) or a resource locator
(`{"mode": "list" | "id", "value": ...}`). Every shape resolves to one
canonical string ID.
"""

from typing import Any

from .exceptions import ChatwootConfigurationError
from .schemas import ResourceLocator


def _locator_value(value: Any) -> Any:
    if isinstance(value, ResourceLocator):
        return value.value
    if isinstance(value, dict):
        return ResourceLocator.model_validate(value).value
    return value


def resolve_optional_resource_id(value: Any) -> str | None:
    """Resolve a parameter value to a string ID, or None when it is empty."""
    raw = _locator_value(value)

    # bool is an int subclass; never a valid ID
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return str(int(raw)) if raw else None

    text = str(raw).strip()
    return text or None


def resolve_resource_id(value: Any, parameter_name: str, item_index: int | None = None) -> str:
    """Resolve a parameter value to a string ID.

    Args:
        value: str, int, ResourceLocator or locator dict
        parameter_name: Parameter name used in the error message
        item_index: Input item the parameter belongs to

    Returns:
        Canonical string ID

    Raises:
        ChatwootConfigurationError: Value absent, empty or malformed
    """
    try:
        resolved = resolve_optional_resource_id(value)
    except ValueError:
        resolved = None

    if resolved is None:
        raise ChatwootConfigurationError(
            f'The parameter "{parameter_name}" is required and must be a valid ID.',
            item_index=item_index,
        )
    return resolved
