"""Helpers shared by Chatwoot operations."""

import json
import random
import re
import unicodedata
from typing import Any

from .exceptions import ChatwootValidationError


def compact(fields: dict[str, Any]) -> dict[str, Any]:
    """Drop None and empty-string values."""
    return {key: value for key, value in fields.items() if value is not None and value != ""}


def parse_json_parameter(value: Any, parameter_name: str) -> Any:
    """Accept an already-decoded value or a JSON string.

    Raises:
        ChatwootValidationError: String is not valid JSON
    """
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise ChatwootValidationError(f'The parameter "{parameter_name}" must be valid JSON: {e.msg}')


def random_color() -> str:
    return f"#{random.randint(0, 0xFFFFFF):06x}"


def slugify_label(title: str) -> str:
    """Chatwoot label titles are lowercase, dash-separated."""
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")


def attribute_key_from_name(display_name: str) -> str:
    """Custom attribute key: accents stripped, lowercase, underscore-separated."""
    normalized = unicodedata.normalize("NFD", str(display_name))
    ascii_only = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    return re.sub(r"[^a-z0-9]+", "_", ascii_only.lower()).strip("_")


def build_custom_attributes(mode: str, value: Any, parameter_name: str = "custom_attributes") -> dict[str, Any]:
    """Build a custom_attributes object from one of the input modes.

    Modes:
        definition: list of {"key": ..., "value": ...}
        keypair: list of {"name": ..., "value": ...}
        json: object or JSON string
    """
    if mode in ("definition", "keypair"):
        key_field = "key" if mode == "definition" else "name"
        attributes = {}
        for entry in value or []:
            if entry.get(key_field):
                attributes[entry[key_field]] = entry.get("value")
        return attributes

    if mode == "json":
        parsed = parse_json_parameter(value or "{}", parameter_name)
        if not isinstance(parsed, dict):
            raise ChatwootValidationError(f'The parameter "{parameter_name}" must be a JSON object')
        return parsed

    raise ChatwootValidationError(f"Unknown custom attribute mode: {mode}")


def filter_response_fields(
    data: dict[str, Any] | list[dict[str, Any]],
    select_fields: list[str] | None = None,
    except_fields: list[str] | None = None,
) -> dict[str, Any] | list[dict[str, Any]]:
    """Keep only (or drop) the given top-level keys of each record."""
    if isinstance(data, list):
        return [filter_response_fields(item, select_fields, except_fields) for item in data]
    if not isinstance(data, dict):
        return data

    if select_fields:
        return {key: value for key, value in data.items() if key in select_fields}
    if except_fields:
        return {key: value for key, value in data.items() if key not in except_fields}
    return data


def extract_list(response: Any, *keys: str) -> list[Any]:
    """Pull a list out of a response that may be bare or wrapped.

    Chatwoot wraps collections inconsistently (`payload`, `data.payload`,
    `webhooks`, `boards`...); the first matching key wins.
    """
    if isinstance(response, list):
        return response
    if not isinstance(response, dict):
        return []

    for key in keys:
        value: Any = response
        for part in key.split("."):
            value = value.get(part) if isinstance(value, dict) else None
        if isinstance(value, list):
            return value
    return []
