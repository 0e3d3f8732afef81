"""Team, label, custom attribute and kanban operation tests."""

import re

import pytest

from chatwoot_tools.adapters.chatwoot.operations import (
    custom_attribute,
    kanban_step,
    kanban_task,
    label,
    team,
)


@pytest.mark.asyncio
async def test_unassign_agent_patches_remaining_members(make_ctx, mock_request):
    mock_request.side_effect = [[{"id": 1}, {"id": 2}, {"id": 3}], [{"id": 1}, {"id": 3}]]

    await team.unassign_agent(make_ctx(team_id=4, team_member_id=2))

    assert mock_request.call_args.args == ("PATCH", "/api/v1/accounts/1/teams/4/team_members")
    assert mock_request.call_args.kwargs["body"] == {"user_ids": [1, 3]}


@pytest.mark.asyncio
async def test_assign_agent_posts_single_id(make_ctx, mock_request):
    await team.assign_agent(make_ctx(team_id=4, agent_id={"mode": "list", "value": "6"}))

    assert mock_request.call_args.kwargs["body"] == {"user_ids": ["6"]}


@pytest.mark.asyncio
async def test_label_title_slugified_with_random_color(make_ctx, mock_request):
    await label.create_label(make_ctx(title="VIP Customer!"))

    body = mock_request.call_args.kwargs["body"]
    assert body["title"] == "vip-customer"
    assert body["show_on_sidebar"] is True
    assert re.fullmatch(r"#[0-9a-f]{6}", body["color"])


@pytest.mark.asyncio
async def test_label_update_sends_only_set_fields(make_ctx, mock_request):
    await label.update_label(make_ctx(label_id=3, additional_fields={"description": "", "color": "#ff0000"}))

    assert mock_request.call_args.kwargs["body"] == {"color": "#ff0000"}


@pytest.mark.asyncio
async def test_custom_attribute_key_and_model(make_ctx, mock_request):
    await custom_attribute.create_custom_attribute(
        make_ctx(
            attribute_model="conversation_attribute",
            attribute_display_name="Número do Pedido",
            attribute_type="list",
            attribute_values=["a", "", "b"],
        )
    )

    body = mock_request.call_args.kwargs["body"]
    assert body["attribute_key"] == "numero_do_pedido"
    assert body["attribute_model"] == 0
    assert body["attribute_values"] == ["a", "b"]


@pytest.mark.asyncio
async def test_custom_attribute_values_only_for_list_type(make_ctx, mock_request):
    await custom_attribute.create_custom_attribute(
        make_ctx(
            attribute_model="contact_attribute",
            attribute_display_name="Plan",
            attribute_type="text",
            attribute_values=["ignored"],
        )
    )

    body = mock_request.call_args.kwargs["body"]
    assert body["attribute_model"] == 1
    assert "attribute_values" not in body


@pytest.mark.asyncio
async def test_kanban_step_update_skips_unset_fields(make_ctx, mock_request):
    await kanban_step.update_step(
        make_ctx(kanban_board_id=2, kanban_step_id=5, update_fields={"name": "Done", "cancelled": False})
    )

    assert mock_request.call_args.args == ("PUT", "/api/v1/accounts/1/kanban/boards/2/steps/5")
    assert mock_request.call_args.kwargs["body"] == {"step": {"name": "Done", "cancelled": False}}


@pytest.mark.asyncio
async def test_kanban_task_move_appends(make_ctx, mock_request):
    await kanban_task.move_task(make_ctx(kanban_task_id=11, kanban_step_id=5))

    assert mock_request.call_args.kwargs["body"] == {"board_step_id": "5", "insert_before_task_id": None}
