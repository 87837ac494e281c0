"""Startup wiring — registries, command sync and the gateway run loop.

Startup errors (:class:`core.exceptions.DuplicateNameError`,
:class:`core.exceptions.GuildNotFoundError`, a missing token) propagate out
of :func:`run` and terminate the process.
"""

from collections.abc import Sequence

from config import DISCORD_GUILD_ID, DISCORD_INTENTS, DISCORD_TOKEN, MAX_CONCURRENT_INTERACTIONS
from core.exceptions import GuildNotFoundError
from core.logger import SwitchboardLogger
from sdk.exceptions import APIException
from bot.commands import build_command_data
from bot.discord_api import get_application, get_guild, sync_guild_commands
from bot.dispatcher import InteractionDispatcher
from bot.gateway import SwitchboardGateway, build_intents
from bot.interactions import MessageContextCommand, SlashCommand, UserContextCommand
from bot.registry import InteractionRegistry

logger = SwitchboardLogger.get_logger()


def build_dispatcher(
    slash_commands: Sequence[SlashCommand],
    message_commands: Sequence[MessageContextCommand],
    user_commands: Sequence[UserContextCommand],
) -> InteractionDispatcher:
    """Register every command into its own sealed registry.

    Raises:
        DuplicateNameError: Two commands of the same variant share a name.
    """
    slash_registry: InteractionRegistry[SlashCommand] = InteractionRegistry("slash")
    message_registry: InteractionRegistry[MessageContextCommand] = InteractionRegistry("message")
    user_registry: InteractionRegistry[UserContextCommand] = InteractionRegistry("user")

    for registry, commands in (
        (slash_registry, slash_commands),
        (message_registry, message_commands),
        (user_registry, user_commands),
    ):
        registry.register_all(commands)
        registry.seal()

    logger.info(
        "Registries ready",
        extra={
            "slash_count": len(slash_registry),
            "message_count": len(message_registry),
            "user_count": len(user_registry),
        },
    )
    return InteractionDispatcher(slash_registry, message_registry, user_registry)


async def sync_commands(
    guild_id: int | None,
    slash_commands: Sequence[SlashCommand],
    message_commands: Sequence[MessageContextCommand],
    user_commands: Sequence[UserContextCommand],
) -> list[dict]:
    """Replace the guild's registered commands with the local definitions.

    Raises:
        GuildNotFoundError: No guild configured, or the bot cannot see it.
        APIException: Any other REST failure.
    """
    if guild_id is None:
        raise GuildNotFoundError(None)

    application = await get_application()
    application_id = int(application["id"])

    try:
        await get_guild(guild_id)
    except APIException as exc:
        if exc.status_code in (403, 404):
            raise GuildNotFoundError(guild_id) from exc
        raise

    commands = build_command_data(slash_commands, message_commands, user_commands)
    return await sync_guild_commands(application_id, guild_id, commands)


async def run(
    slash_commands: Sequence[SlashCommand],
    message_commands: Sequence[MessageContextCommand],
    user_commands: Sequence[UserContextCommand],
) -> None:
    """Build the dispatcher, sync commands and connect to the gateway.

    Raises:
        EnvironmentError: If ``DISCORD_TOKEN`` is not set.
    """
    if not DISCORD_TOKEN:
        raise EnvironmentError("DISCORD_TOKEN environment variable is not set or is empty.")

    dispatcher = build_dispatcher(slash_commands, message_commands, user_commands)
    await sync_commands(DISCORD_GUILD_ID, slash_commands, message_commands, user_commands)

    client = SwitchboardGateway(
        dispatcher,
        intents=build_intents(DISCORD_INTENTS),
        max_concurrency=MAX_CONCURRENT_INTERACTIONS,
    )
    logger.info("Switchboard is running. Connecting to the gateway...")
    async with client:
        await client.start(DISCORD_TOKEN)
