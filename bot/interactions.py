"""Interaction model — slash commands, message-context and user-context commands.

Every variant satisfies the :class:`Interaction` protocol: a ``name``, an
async ``execute(event)`` and the three gate lists consumed by
:func:`core.gates.authorize`.  The variants are independent frozen
dataclasses; none inherits from another.

Commands are normally built with the decorators at the bottom of this
module::

    @slash_command("ping", description="Check that the bot is alive")
    async def ping(event: InteractionEvent) -> str:
        return "Pong!"
"""

from __future__ import annotations

import dataclasses
from collections.abc import Awaitable, Callable, Iterable
from typing import Protocol, Union, runtime_checkable

from core.exceptions import DuplicateNameError, HandlerMissingError
from core.permissions import Permission
from sdk.models import (
    ApplicationCommandOptionType,
    ApplicationCommandType,
    Embed,
    InteractionEvent,
    MessagePayload,
)

HandlerResult = Union[MessagePayload, Embed, str]
HandlerFunc = Callable[[InteractionEvent], Awaitable[HandlerResult]]


# ── Protocol ─────────────────────────────────────────────────────────────────


@runtime_checkable
class Interaction(Protocol):
    """Anything the registry can store and the dispatcher can run."""

    name: str
    required_channels: frozenset[int]
    required_roles: frozenset[int]
    required_permissions: Permission
    ephemeral: bool

    async def execute(self, event: InteractionEvent) -> MessagePayload: ...  # noqa: E704


# ── Helpers ──────────────────────────────────────────────────────────────────


def _to_payload(result: HandlerResult) -> MessagePayload:
    if isinstance(result, MessagePayload):
        return result
    if isinstance(result, Embed):
        return MessagePayload(embeds=[result])
    if isinstance(result, str):
        return MessagePayload(content=result)
    raise TypeError(f"Handler returned unsupported reply type {type(result).__name__}")


def _normalise_gates(command: object) -> None:
    """Coerce gate fields on a frozen dataclass to their canonical types."""
    object.__setattr__(command, "required_channels", frozenset(command.required_channels))
    object.__setattr__(command, "required_roles", frozenset(command.required_roles))
    object.__setattr__(command, "required_permissions", Permission(command.required_permissions))


async def _run(name: str, handler: HandlerFunc | None, event: InteractionEvent) -> MessagePayload:
    if handler is None:
        raise HandlerMissingError(name)
    return _to_payload(await handler(event))


# ── Options ──────────────────────────────────────────────────────────────────


@dataclasses.dataclass(frozen=True, slots=True)
class CommandOption:
    """A typed parameter declared on a slash command."""

    name: str
    description: str
    type: ApplicationCommandOptionType = ApplicationCommandOptionType.STRING
    required: bool = False
    choices: tuple[tuple[str, str | int | float], ...] = ()


# ── Variants ─────────────────────────────────────────────────────────────────


@dataclasses.dataclass(frozen=True, slots=True)
class SlashCommand:
    """A ``/name`` command, optionally grouping one level of sub-commands.

    A group that only routes to sub-commands may leave ``handler`` unset.
    """

    name: str
    description: str
    handler: HandlerFunc | None = None
    options: tuple[CommandOption, ...] = ()
    sub_commands: tuple[SlashCommand, ...] = ()
    required_channels: frozenset[int] = frozenset()
    required_roles: frozenset[int] = frozenset()
    required_permissions: Permission = Permission.NONE
    ephemeral: bool = False

    command_type = ApplicationCommandType.CHAT_INPUT

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Slash command name must not be empty")
        object.__setattr__(self, "options", tuple(self.options))
        object.__setattr__(self, "sub_commands", tuple(self.sub_commands))
        _normalise_gates(self)

        seen: set[str] = set()
        for sub in self.sub_commands:
            if sub.sub_commands:
                raise ValueError(
                    f"Sub-command {sub.name!r} of {self.name!r} cannot declare sub-commands"
                )
            if sub.name in seen:
                raise DuplicateNameError(f"{self.name} {sub.name}")
            seen.add(sub.name)

    def get_sub_command(self, name: str) -> SlashCommand | None:
        """Return the declared sub-command called *name*, exact match only."""
        for sub in self.sub_commands:
            if sub.name == name:
                return sub
        return None

    async def execute(self, event: InteractionEvent) -> MessagePayload:
        return await _run(self.name, self.handler, event)


@dataclasses.dataclass(frozen=True, slots=True)
class MessageContextCommand:
    """A command shown in a message's right-click menu."""

    name: str
    handler: HandlerFunc
    required_channels: frozenset[int] = frozenset()
    required_roles: frozenset[int] = frozenset()
    required_permissions: Permission = Permission.NONE
    ephemeral: bool = False

    command_type = ApplicationCommandType.MESSAGE

    def __post_init__(self) -> None:
        _normalise_gates(self)

    async def execute(self, event: InteractionEvent) -> MessagePayload:
        return await _run(self.name, self.handler, event)


@dataclasses.dataclass(frozen=True, slots=True)
class UserContextCommand:
    """A command shown in a user's right-click menu."""

    name: str
    handler: HandlerFunc
    required_channels: frozenset[int] = frozenset()
    required_roles: frozenset[int] = frozenset()
    required_permissions: Permission = Permission.NONE
    ephemeral: bool = False

    command_type = ApplicationCommandType.USER

    def __post_init__(self) -> None:
        _normalise_gates(self)

    async def execute(self, event: InteractionEvent) -> MessagePayload:
        return await _run(self.name, self.handler, event)


# ── Decorators ───────────────────────────────────────────────────────────────


def slash_command(
    name: str,
    *,
    description: str,
    options: Iterable[CommandOption] = (),
    required_channels: Iterable[int] = (),
    required_roles: Iterable[int] = (),
    required_permissions: Permission = Permission.NONE,
    ephemeral: bool = False,
) -> Callable[[HandlerFunc], SlashCommand]:
    """Turn an async handler into a :class:`SlashCommand`.

    Groups with sub-commands are built by calling :class:`SlashCommand`
    directly with ``sub_commands=``.
    """
    def decorator(func: HandlerFunc) -> SlashCommand:
        return SlashCommand(
            name=name,
            description=description,
            handler=func,
            options=tuple(options),
            required_channels=frozenset(required_channels),
            required_roles=frozenset(required_roles),
            required_permissions=required_permissions,
            ephemeral=ephemeral,
        )
    return decorator


# A sub-command is a slash command without nesting; the name documents intent.
sub_command = slash_command


def message_command(
    name: str,
    *,
    required_channels: Iterable[int] = (),
    required_roles: Iterable[int] = (),
    required_permissions: Permission = Permission.NONE,
    ephemeral: bool = False,
) -> Callable[[HandlerFunc], MessageContextCommand]:
    """Turn an async handler into a :class:`MessageContextCommand`."""
    def decorator(func: HandlerFunc) -> MessageContextCommand:
        return MessageContextCommand(
            name=name,
            handler=func,
            required_channels=frozenset(required_channels),
            required_roles=frozenset(required_roles),
            required_permissions=required_permissions,
            ephemeral=ephemeral,
        )
    return decorator


def user_command(
    name: str,
    *,
    required_channels: Iterable[int] = (),
    required_roles: Iterable[int] = (),
    required_permissions: Permission = Permission.NONE,
    ephemeral: bool = False,
) -> Callable[[HandlerFunc], UserContextCommand]:
    """Turn an async handler into a :class:`UserContextCommand`."""
    def decorator(func: HandlerFunc) -> UserContextCommand:
        return UserContextCommand(
            name=name,
            handler=func,
            required_channels=frozenset(required_channels),
            required_roles=frozenset(required_roles),
            required_permissions=required_permissions,
            ephemeral=ephemeral,
        )
    return decorator
