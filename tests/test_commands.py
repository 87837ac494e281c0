"""Tests for building the command-registration payload."""

import sys
import os
from unittest.mock import AsyncMock

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sdk.models import ApplicationCommandOptionType, ApplicationCommandType
from bot.commands import build_command_data
from bot.interactions import (
    CommandOption,
    MessageContextCommand,
    SlashCommand,
    UserContextCommand,
)


class TestBuildCommandData:
    """Validate enumeration of every known command."""

    def test_slash_with_options(self) -> None:
        command = SlashCommand(
            name="about",
            description="About",
            handler=AsyncMock(),
            options=(
                CommandOption(
                    name="section",
                    description="Which section",
                    required=True,
                    choices=(("Uptime", "uptime"), ("Version", "version")),
                ),
            ),
        )
        [data] = build_command_data([command], [], [])

        rendered = data.to_dict()
        assert rendered["name"] == "about"
        assert rendered["type"] == 1
        assert rendered["options"] == [{
            "type": 3,
            "name": "section",
            "description": "Which section",
            "required": True,
            "choices": [{"name": "Uptime", "value": "uptime"}, {"name": "Version", "value": "version"}],
        }]

    def test_sub_commands_become_options(self) -> None:
        reset = SlashCommand(
            name="reset",
            description="Reset",
            handler=AsyncMock(),
            options=(CommandOption(name="confirm", description="Sure?", type=ApplicationCommandOptionType.BOOLEAN),),
        )
        show = SlashCommand(name="show", description="Show", handler=AsyncMock())
        group = SlashCommand(name="settings", description="Settings", sub_commands=(show, reset))

        [data] = build_command_data([group], [], [])

        assert [option.name for option in data.options] == ["show", "reset"]
        assert all(option.type is ApplicationCommandOptionType.SUB_COMMAND for option in data.options)
        assert data.options[0].options is None
        assert data.options[1].options[0].name == "confirm"

    def test_plain_command_has_no_options(self) -> None:
        [data] = build_command_data([SlashCommand(name="ping", description="Ping", handler=AsyncMock())], [], [])
        assert "options" not in data.to_dict()

    def test_context_menus(self) -> None:
        data = build_command_data(
            [],
            [MessageContextCommand(name="Quote", handler=AsyncMock())],
            [UserContextCommand(name="User Info", handler=AsyncMock())],
        )
        assert [(d.name, d.type) for d in data] == [
            ("Quote", ApplicationCommandType.MESSAGE),
            ("User Info", ApplicationCommandType.USER),
        ]
        assert all("description" not in d.to_dict() for d in data)

    def test_order_is_slash_message_user(self) -> None:
        data = build_command_data(
            [SlashCommand(name="ping", description="Ping", handler=AsyncMock())],
            [MessageContextCommand(name="Quote", handler=AsyncMock())],
            [UserContextCommand(name="User Info", handler=AsyncMock())],
        )
        assert [d.name for d in data] == ["ping", "Quote", "User Info"]
