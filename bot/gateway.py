"""Gateway adapter — feeds ``discord.py`` interactions into the dispatcher.

``discord.py`` owns the websocket connection, heartbeats, reconnects and rate
limiting.  This module only converts each :class:`discord.Interaction` into an
:class:`sdk.models.InteractionEvent` and hands it to
:class:`bot.dispatcher.InteractionDispatcher`.  ``discord.py`` already runs
every listener in its own task; a semaphore bounds how many dispatches run at
once.

No ``CommandTree`` is attached, so ``discord.py`` never answers an
interaction on its own: the dispatcher replies through the interaction
handles via :mod:`bot.discord_api`.
"""

import asyncio
from collections.abc import Iterable

import discord

from core.logger import SwitchboardLogger
from sdk.models import Guild, InteractionEvent, Member, Role, User
from bot.dispatcher import InteractionDispatcher

logger = SwitchboardLogger.get_logger()


def build_intents(names: Iterable[str]) -> discord.Intents:
    """Build :class:`discord.Intents` from intent attribute names.

    Unknown names are logged and skipped.
    """
    intents = discord.Intents.none()
    for name in names:
        if name in discord.Intents.VALID_FLAGS:
            setattr(intents, name, True)
        else:
            logger.warning("Unknown gateway intent, skipping", extra={"intent": name})
    return intents


def _user(user: discord.abc.User) -> User:
    return User(id=user.id, username=user.name, global_name=user.global_name, bot=user.bot)


def to_event(interaction: discord.Interaction) -> InteractionEvent:
    """Convert a ``discord.py`` interaction into an :class:`InteractionEvent`.

    The returned event keeps a reference to *interaction* for replies.  The
    guild snapshot carries the guild's current roles from the gateway
    cache; the member's permissions are those resolved for the invocation
    channel.
    """
    invoker = interaction.user
    member = None
    if isinstance(invoker, discord.Member):
        member = Member(
            user=_user(invoker),
            nick=invoker.nick,
            roles=[role.id for role in invoker.roles if not role.is_default()],
            permissions=interaction.permissions.value,
        )

    guild = None
    if interaction.guild is not None:
        guild = Guild(
            id=interaction.guild.id,
            name=interaction.guild.name,
            roles=[
                Role(id=role.id, name=role.name, permissions=role.permissions.value, position=role.position)
                for role in interaction.guild.roles
            ],
        )

    return InteractionEvent(
        id=interaction.id,
        application_id=interaction.application_id,
        type=interaction.type.value,
        token=interaction.token,
        data=interaction.data,
        guild_id=interaction.guild_id,
        channel_id=interaction.channel_id,
        member=member,
        user=None if member else _user(invoker),
        locale=str(interaction.locale),
        guild=guild,
    ).bind_source(interaction)


class SwitchboardGateway(discord.Client):
    """``discord.Client`` that routes application-command interactions."""

    def __init__(
        self,
        dispatcher: InteractionDispatcher,
        *,
        intents: discord.Intents,
        max_concurrency: int,
    ) -> None:
        super().__init__(intents=intents)
        self.dispatcher = dispatcher
        self._semaphore = asyncio.Semaphore(max_concurrency)

    async def on_ready(self) -> None:
        user = self.user
        logger.info(
            "Logged into Discord",
            extra={"bot_user": user.name if user else None, "guild_count": len(self.guilds)},
        )

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        if interaction.type is not discord.InteractionType.application_command:
            return

        async with self._semaphore:
            try:
                event = to_event(interaction)
                await self.dispatcher.dispatch(event)
            except Exception:
                logger.exception(
                    "Unhandled error while dispatching interaction",
                    extra={"interaction_id": interaction.id, "interaction_type": interaction.type.value},
                )
