"""Tests for the Pydantic interaction, reply and registration models."""

import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from pydantic import ValidationError

from core.permissions import Permission
from sdk.models import (
    ApplicationCommand,
    ApplicationCommandOption,
    ApplicationCommandOptionType,
    ApplicationCommandType,
    Embed,
    InteractionEvent,
    InteractionType,
    MessagePayload,
)


def _raw_slash(options: list | None = None) -> dict:
    return {
        "id": "1180000000000000001",
        "application_id": "1180000000000000002",
        "type": 2,
        "token": "tok",
        "guild_id": "1180000000000000003",
        "channel_id": "42",
        "member": {
            "user": {"id": "100", "username": "alice", "global_name": "Alice"},
            "roles": ["500", "501"],
            "permissions": str(int(Permission.KICK_MEMBERS | Permission.BAN_MEMBERS)),
        },
        "data": {"id": "9", "name": "settings", "type": 1, "options": options or []},
    }


# ── InteractionEvent ─────────────────────────────────────────────────────────


class TestInteractionEvent:
    """Validate parsing of raw INTERACTION_CREATE payloads."""

    def test_snowflakes_coerced_to_int(self) -> None:
        event = InteractionEvent.model_validate(_raw_slash())
        assert event.id == 1180000000000000001
        assert event.channel_id == 42
        assert event.member_role_ids == {500, 501}

    def test_enums_parsed(self) -> None:
        event = InteractionEvent.model_validate(_raw_slash())
        assert event.type is InteractionType.APPLICATION_COMMAND
        assert event.command_type is ApplicationCommandType.CHAT_INPUT

    def test_subcommand_and_nested_option(self) -> None:
        event = InteractionEvent.model_validate(_raw_slash([
            {"name": "reset", "type": 1, "options": [{"name": "confirm", "type": 5, "value": True}]},
        ]))
        assert event.command_name == "settings"
        assert event.subcommand_name == "reset"
        assert event.option("confirm") is True
        assert event.option("missing", "dflt") == "dflt"

    def test_top_level_option(self) -> None:
        event = InteractionEvent.model_validate(_raw_slash([{"name": "verbose", "type": 5, "value": False}]))
        assert event.subcommand_name is None
        assert event.option("verbose") is False

    def test_member_permissions(self) -> None:
        event = InteractionEvent.model_validate(_raw_slash())
        assert Permission.KICK_MEMBERS in event.member_permissions
        assert Permission.MANAGE_GUILD not in event.member_permissions

    def test_invoker_in_guild_and_dm(self) -> None:
        guild_event = InteractionEvent.model_validate(_raw_slash())
        assert guild_event.invoker_id == 100
        assert guild_event.invoker.display_name == "Alice"

        raw = _raw_slash()
        raw.pop("member")
        raw.pop("guild_id")
        raw["user"] = {"id": "200", "username": "bob"}
        dm_event = InteractionEvent.model_validate(raw)
        assert dm_event.invoker_id == 200
        assert dm_event.member_role_ids == set()
        assert dm_event.member_permissions == Permission.NONE

    def test_context_menu_target(self) -> None:
        raw = _raw_slash()
        raw["data"] = {
            "id": "9", "name": "User Info", "type": 2, "target_id": "300",
            "resolved": {"users": {"300": {"id": "300", "username": "carol"}}},
        }
        event = InteractionEvent.model_validate(raw)
        assert event.command_type is ApplicationCommandType.USER
        assert event.target_id == 300
        assert event.data.resolved.users[300].username == "carol"

    def test_log_context(self) -> None:
        event = InteractionEvent.model_validate(_raw_slash([{"name": "show", "type": 1}]))
        context = event.log_context()
        assert context["command"] == "settings"
        assert context["sub_command"] == "show"
        assert context["user_id"] == 100

    def test_missing_token_raises(self) -> None:
        raw = _raw_slash()
        raw.pop("token")
        with pytest.raises(ValidationError):
            InteractionEvent.model_validate(raw)


# ── Replies ──────────────────────────────────────────────────────────────────


class TestMessagePayload:
    """Validate reply rendering."""

    def test_text_reply(self) -> None:
        assert MessagePayload.text("hi").to_dict() == {"content": "hi"}

    def test_embed_reply(self) -> None:
        embed = Embed(title="t").add_field("k", "v", inline=True)
        rendered = MessagePayload(embeds=[embed]).to_dict()
        assert "content" not in rendered
        assert rendered["embeds"] == [{"title": "t", "fields": [{"name": "k", "value": "v", "inline": True}]}]


# ── Registration payloads ────────────────────────────────────────────────────


class TestApplicationCommand:
    """Validate registration JSON."""

    def test_slash_command_dict(self) -> None:
        command = ApplicationCommand(
            name="ping",
            description="Ping",
            options=[ApplicationCommandOption(type=ApplicationCommandOptionType.STRING, name="msg", description="m")],
        )
        assert command.to_dict() == {
            "name": "ping",
            "type": 1,
            "description": "Ping",
            "options": [{"type": 3, "name": "msg", "description": "m"}],
        }

    def test_context_menu_has_no_description(self) -> None:
        command = ApplicationCommand(name="Quote", type=ApplicationCommandType.MESSAGE)
        assert command.to_dict() == {"name": "Quote", "type": 3}
