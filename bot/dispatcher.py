"""Interaction dispatcher.

Routes each inbound :class:`sdk.models.InteractionEvent` to the interaction
registered for it, runs the authorization gates from :mod:`core.gates` and
invokes the handler.  Nothing that goes wrong inside a single dispatch
escapes :meth:`InteractionDispatcher.dispatch`: unknown names and gate
failures end in one ephemeral reply and a log line.  A handler exception ends
in the generic failure reply, which replaces the deferred message and so has
the command's own visibility.
"""

from __future__ import annotations

import dataclasses
from enum import Enum

from core.exceptions import (
    DispatchError,
    UnauthorizedError,
    UnknownCommandError,
    UnknownSubCommandError,
)
from core import gates
from core.logger import SwitchboardLogger
from sdk.models import ApplicationCommandType, InteractionEvent, InteractionType, MessagePayload
from bot.discord_api import defer_reply, send_followup
from bot.interactions import (
    Interaction,
    MessageContextCommand,
    SlashCommand,
    UserContextCommand,
)
from bot.registry import InteractionRegistry

logger = SwitchboardLogger.get_logger()

HANDLER_FAILURE_MESSAGE = "Something went wrong while running this command."


class DispatchStatus(str, Enum):
    EXECUTED = "executed"
    REJECTED = "rejected"
    UNKNOWN = "unknown"
    FAILED = "failed"
    IGNORED = "ignored"


@dataclasses.dataclass(frozen=True, slots=True)
class DispatchResult:
    """Outcome of one :meth:`InteractionDispatcher.dispatch` call."""

    status: DispatchStatus
    interaction: Interaction | None = None
    error: BaseException | None = None


class InteractionDispatcher:
    """Resolve, authorize and execute interactions from three registries."""

    def __init__(
        self,
        slash_commands: InteractionRegistry[SlashCommand],
        message_commands: InteractionRegistry[MessageContextCommand],
        user_commands: InteractionRegistry[UserContextCommand],
    ) -> None:
        self.slash_commands = slash_commands
        self.message_commands = message_commands
        self.user_commands = user_commands

    # ── resolution ───────────────────────────────────────────────────────

    def registry_for(self, event: InteractionEvent) -> InteractionRegistry | None:
        """Pick the registry matching the event variant, or ``None``."""
        if event.type is not InteractionType.APPLICATION_COMMAND or event.data is None:
            return None
        if event.command_type is ApplicationCommandType.CHAT_INPUT:
            return self.slash_commands
        if event.command_type is ApplicationCommandType.MESSAGE:
            return self.message_commands
        if event.command_type is ApplicationCommandType.USER:
            return self.user_commands
        return None

    def resolve(self, registry: InteractionRegistry, event: InteractionEvent) -> Interaction:
        """Return the effective target for *event*.

        When the event names a sub-command, that sub-command is the target
        and its own gates apply.  A name the command does not declare, or any
        sub-command name on a command that declares none, is malformed.

        Raises:
            UnknownCommandError: The command name is not registered.
            UnknownSubCommandError: The command declares no such sub-command.
        """
        name = event.command_name or ""
        interaction = registry.get(name)
        if interaction is None:
            raise UnknownCommandError(f"unknown {registry.kind} command {name!r}")

        sub_name = event.subcommand_name
        if sub_name is not None:
            sub_command = interaction.get_sub_command(sub_name) if isinstance(interaction, SlashCommand) else None
            if sub_command is None:
                raise UnknownSubCommandError(f"unknown sub-command {sub_name!r} of {name!r}")
            return sub_command

        return interaction

    @staticmethod
    def authorize(interaction: Interaction, event: InteractionEvent) -> None:
        """Run the gates for *interaction* against *event*; raises on failure."""
        gates.authorize(
            guild_id=event.guild.id if event.guild else None,
            channel_id=event.channel_id,
            member_present=event.member is not None,
            guild_role_ids=event.guild_role_ids,
            member_role_ids=event.member_role_ids,
            member_permissions=event.member_permissions,
            required_channels=interaction.required_channels,
            required_roles=interaction.required_roles,
            required_permissions=interaction.required_permissions,
        )

    # ── dispatch ─────────────────────────────────────────────────────────

    async def dispatch(self, event: InteractionEvent) -> DispatchResult:
        """Handle one interaction end to end."""
        context = event.log_context()

        registry = self.registry_for(event)
        if registry is None:
            logger.debug("Ignoring non-command interaction", extra={**context, "interaction_type": int(event.type)})
            return DispatchResult(DispatchStatus.IGNORED)

        try:
            interaction = self.resolve(registry, event)
        except (UnknownCommandError, UnknownSubCommandError) as exc:
            logger.warning("Unknown interaction", extra={**context, "reason": str(exc)})
            await self._reject(event, exc)
            return DispatchResult(DispatchStatus.UNKNOWN, error=exc)

        try:
            self.authorize(interaction, event)
        except UnauthorizedError as exc:
            logger.warning(
                "Interaction rejected by gate",
                extra={**context, "gate": type(exc).__name__, "reason": exc.detail},
            )
            await self._reject(event, exc)
            return DispatchResult(DispatchStatus.REJECTED, interaction, exc)

        await defer_reply(event, ephemeral=interaction.ephemeral)

        try:
            payload = await interaction.execute(event)
        except Exception as exc:
            logger.exception("Interaction handler failed", extra=context)
            # Replaces the deferred message, so it keeps the defer's visibility.
            await send_followup(event, MessagePayload.text(HANDLER_FAILURE_MESSAGE), ephemeral=interaction.ephemeral)
            return DispatchResult(DispatchStatus.FAILED, interaction, exc)

        await send_followup(event, payload, ephemeral=interaction.ephemeral)
        logger.info("Interaction executed", extra=context)
        return DispatchResult(DispatchStatus.EXECUTED, interaction)

    @staticmethod
    async def _reject(event: InteractionEvent, error: DispatchError) -> None:
        await defer_reply(event, ephemeral=True)
        await send_followup(event, MessagePayload.text(error.user_message), ephemeral=True)
