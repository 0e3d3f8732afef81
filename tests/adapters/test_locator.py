"""Resource ID resolution tests."""

import pytest

from chatwoot_tools.adapters.chatwoot.exceptions import ChatwootConfigurationError
from chatwoot_tools.adapters.chatwoot.locator import (
    resolve_optional_resource_id,
    resolve_resource_id,
)
from chatwoot_tools.adapters.chatwoot.schemas import ResourceLocator


@pytest.mark.parametrize(
    "value",
    [
        42,
        "42",
        " 42 ",
        {"mode": "list", "value": "42"},
        {"mode": "id", "value": 42},
        ResourceLocator(mode="list", value=42),
    ],
)
def test_every_shape_resolves_to_same_id(value):
    assert resolve_resource_id(value, "account_id") == "42"


@pytest.mark.parametrize("value", [None, "", "   ", {"mode": "list", "value": ""}, {"mode": "id"}, 0, True])
def test_empty_values_are_missing(value):
    assert resolve_optional_resource_id(value) is None


def test_missing_required_id_names_parameter():
    with pytest.raises(ChatwootConfigurationError) as exc_info:
        resolve_resource_id({"mode": "list", "value": ""}, "conversation_id", item_index=3)

    assert 'The parameter "conversation_id" is required' in exc_info.value.message
    assert exc_info.value.item_index == 3


def test_malformed_locator_is_configuration_error():
    with pytest.raises(ChatwootConfigurationError):
        resolve_resource_id({"mode": "list", "value": ["1", "2"]}, "inbox_id")
