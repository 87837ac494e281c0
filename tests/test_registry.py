"""Tests for the interaction model and the generic registry."""

import sys
import os
from unittest.mock import AsyncMock

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from core.exceptions import DuplicateNameError, HandlerMissingError, RegistrySealedError
from core.permissions import Permission
from sdk.models import Embed, InteractionEvent, MessagePayload
from bot.interactions import (
    Interaction,
    MessageContextCommand,
    SlashCommand,
    UserContextCommand,
    slash_command,
    user_command,
)
from bot.registry import InteractionRegistry


def _make_command(name: str) -> SlashCommand:
    return SlashCommand(name=name, description=f"{name} command", handler=AsyncMock(return_value="ok"))


def _make_event() -> InteractionEvent:
    return InteractionEvent.model_validate({
        "id": "1", "application_id": "2", "type": 2, "token": "tok",
        "data": {"id": "3", "name": "ping", "type": 1},
    })


# ── Registry ─────────────────────────────────────────────────────────────────


class TestRegistry:
    """Validate registration, lookup and sealing."""

    def test_distinct_names_register(self) -> None:
        registry: InteractionRegistry[SlashCommand] = InteractionRegistry("slash")
        registry.register(_make_command("ping"))
        registry.register(_make_command("pong"))
        assert len(registry) == 2
        assert registry.names() == ["ping", "pong"]

    def test_duplicate_name_raises(self) -> None:
        registry: InteractionRegistry[SlashCommand] = InteractionRegistry("slash")
        registry.register(_make_command("ping"))
        with pytest.raises(DuplicateNameError) as info:
            registry.register(_make_command("ping"))
        assert info.value.name == "ping"

    def test_duplicate_does_not_overwrite(self) -> None:
        registry: InteractionRegistry[SlashCommand] = InteractionRegistry("slash")
        first = registry.register(_make_command("ping"))
        with pytest.raises(DuplicateNameError):
            registry.register(_make_command("ping"))
        assert registry.get("ping") is first

    def test_lookup_returns_same_instance(self) -> None:
        registry: InteractionRegistry[SlashCommand] = InteractionRegistry()
        command = _make_command("ping")
        registry.register(command)
        assert registry.get("ping") is command
        assert registry.lookup("ping") is command

    def test_lookup_unknown_returns_none(self) -> None:
        registry: InteractionRegistry[SlashCommand] = InteractionRegistry()
        assert registry.get("missing") is None
        assert "missing" not in registry

    def test_sealed_registry_rejects_registration(self) -> None:
        registry: InteractionRegistry[SlashCommand] = InteractionRegistry()
        registry.register(_make_command("ping"))
        registry.seal()
        assert registry.sealed is True
        with pytest.raises(RegistrySealedError):
            registry.register(_make_command("pong"))
        assert registry.get("ping") is not None

    def test_entries_is_a_copy(self) -> None:
        registry: InteractionRegistry[SlashCommand] = InteractionRegistry()
        registry.register(_make_command("ping"))
        entries = registry.entries()
        entries.clear()
        assert "ping" in registry

    def test_register_all_and_iterate(self) -> None:
        registry: InteractionRegistry[SlashCommand] = InteractionRegistry()
        commands = [_make_command("a"), _make_command("b")]
        registry.register_all(commands)
        assert list(registry) == commands

    def test_same_name_in_separate_registries(self) -> None:
        slash: InteractionRegistry[SlashCommand] = InteractionRegistry("slash")
        user: InteractionRegistry[UserContextCommand] = InteractionRegistry("user")
        slash.register(_make_command("info"))
        user.register(UserContextCommand(name="info", handler=AsyncMock()))
        assert isinstance(slash.get("info"), SlashCommand)
        assert isinstance(user.get("info"), UserContextCommand)


# ── Interaction model ────────────────────────────────────────────────────────


class TestInteractionModel:
    """Validate command construction and execution."""

    def test_variants_satisfy_protocol(self) -> None:
        handler = AsyncMock()
        assert isinstance(_make_command("a"), Interaction)
        assert isinstance(MessageContextCommand(name="b", handler=handler), Interaction)
        assert isinstance(UserContextCommand(name="c", handler=handler), Interaction)

    def test_gate_fields_are_normalised(self) -> None:
        command = SlashCommand(
            name="x",
            description="x",
            required_channels=[1, 1, 2],
            required_roles=[3],
            required_permissions=int(Permission.KICK_MEMBERS),
        )
        assert command.required_channels == frozenset({1, 2})
        assert command.required_roles == frozenset({3})
        assert command.required_permissions is Permission.KICK_MEMBERS

    def test_defaults_mean_unrestricted(self) -> None:
        command = _make_command("x")
        assert command.required_channels == frozenset()
        assert command.required_roles == frozenset()
        assert command.required_permissions == Permission.NONE
        assert command.ephemeral is False

    def test_nested_sub_commands_rejected(self) -> None:
        inner = SlashCommand(name="inner", description="i", sub_commands=(_make_command("leaf"),))
        with pytest.raises(ValueError):
            SlashCommand(name="outer", description="o", sub_commands=(inner,))

    def test_duplicate_sub_command_names_rejected(self) -> None:
        with pytest.raises(DuplicateNameError):
            SlashCommand(name="g", description="g", sub_commands=(_make_command("a"), _make_command("a")))

    def test_get_sub_command_exact_match(self) -> None:
        reset = _make_command("reset")
        group = SlashCommand(name="settings", description="s", sub_commands=(reset,))
        assert group.get_sub_command("reset") is reset
        assert group.get_sub_command("Reset") is None

    @pytest.mark.asyncio
    async def test_string_reply_wrapped(self) -> None:
        @slash_command("ping", description="p")
        async def ping(event):
            return "Pong!"

        payload = await ping.execute(_make_event())
        assert payload == MessagePayload(content="Pong!")

    @pytest.mark.asyncio
    async def test_embed_reply_wrapped(self) -> None:
        @user_command("Info")
        async def info(event):
            return Embed(title="hi")

        payload = await info.execute(_make_event())
        assert payload.embeds[0].title == "hi"

    @pytest.mark.asyncio
    async def test_group_without_handler_raises(self) -> None:
        group = SlashCommand(name="settings", description="s", sub_commands=(_make_command("reset"),))
        with pytest.raises(HandlerMissingError):
            await group.execute(_make_event())

    @pytest.mark.asyncio
    async def test_unsupported_reply_type_raises(self) -> None:
        command = SlashCommand(name="x", description="x", handler=AsyncMock(return_value=42))
        with pytest.raises(TypeError):
            await command.execute(_make_event())
