"""Built-in commands shipped with Switchboard.

Each handler receives the :class:`sdk.models.InteractionEvent` and returns
the reply; the dispatcher takes care of gates, deferral and delivery.  The
module-level ``SLASH_COMMANDS``, ``MESSAGE_COMMANDS`` and ``USER_COMMANDS``
lists are what :func:`bot.bootstrap.run` registers.
"""

import time

from config import ADMIN_ROLE_IDS
from core.logger import SwitchboardLogger
from core.permissions import Permission
from sdk.models import ApplicationCommandOptionType, Embed, InteractionEvent, MessagePayload
from bot.interactions import (
    CommandOption,
    SlashCommand,
    message_command,
    slash_command,
    sub_command,
    user_command,
)

logger = SwitchboardLogger.get_logger()

_STARTED_AT = time.monotonic()

BRAND_COLOR = 0x5865F2


@slash_command("ping", description="Check that the bot is alive", ephemeral=True)
async def ping(event: InteractionEvent) -> str:
    logger.info("User invoked /ping", extra={"user_id": event.invoker_id, "command": "ping"})
    return "Pong!"


@slash_command(
    "about",
    description="Show information about this bot",
    options=[
        CommandOption(
            name="verbose",
            description="Include uptime details",
            type=ApplicationCommandOptionType.BOOLEAN,
        ),
    ],
)
async def about(event: InteractionEvent) -> Embed:
    embed = Embed(
        title="Switchboard",
        description="Routes slash and context-menu commands to their handlers.",
        color=BRAND_COLOR,
    )
    if event.option("verbose", False):
        uptime = int(time.monotonic() - _STARTED_AT)
        embed.add_field("Uptime", f"{uptime // 3600}h {uptime % 3600 // 60}m {uptime % 60}s", inline=True)
    return embed


@sub_command("show", description="Show the settings for this server", ephemeral=True)
async def settings_show(event: InteractionEvent) -> Embed:
    embed = Embed(title="Server settings", color=BRAND_COLOR)
    embed.add_field("Guild", str(event.guild_id))
    embed.add_field("Admin roles", ", ".join(f"<@&{role_id}>" for role_id in ADMIN_ROLE_IDS) or "Any")
    return embed


@sub_command(
    "reset",
    description="Reset the settings for this server",
    required_roles=ADMIN_ROLE_IDS,
    required_permissions=Permission.MANAGE_GUILD,
    ephemeral=True,
)
async def settings_reset(event: InteractionEvent) -> str:
    logger.info(
        "Settings reset requested",
        extra={"user_id": event.invoker_id, "guild_id": event.guild_id, "command": "settings reset"},
    )
    return "Settings have been reset to their defaults."


settings = SlashCommand(
    name="settings",
    description="View or change server settings",
    sub_commands=(settings_show, settings_reset),
)


@user_command("User Info", ephemeral=True)
async def user_info(event: InteractionEvent) -> Embed:
    target_id = event.target_id
    resolved = event.data.resolved if event.data else None
    target = resolved.users.get(target_id) if resolved and target_id is not None else None

    embed = Embed(title="User info", color=BRAND_COLOR)
    embed.add_field("ID", str(target_id))
    if target is not None:
        embed.add_field("Name", target.display_name)
        embed.add_field("Bot", "yes" if target.bot else "no", inline=True)
    if resolved and target_id in resolved.members:
        roles = resolved.members[target_id].roles
        embed.add_field("Roles", ", ".join(f"<@&{role_id}>" for role_id in roles) or "None")
    return embed


@message_command("Quote")
async def quote(event: InteractionEvent) -> MessagePayload:
    target_id = event.target_id
    resolved = event.data.resolved if event.data else None
    message = resolved.messages.get(target_id) if resolved and target_id is not None else None
    if not message:
        return MessagePayload.text("Could not load that message.")

    author = message.get("author", {})
    content = message.get("content") or "*no text content*"
    return MessagePayload(embeds=[Embed(
        description=content,
        color=BRAND_COLOR,
    ).add_field("Author", f"<@{author.get('id')}>", inline=True)])


SLASH_COMMANDS: list[SlashCommand] = [ping, about, settings]
MESSAGE_COMMANDS = [quote]
USER_COMMANDS = [user_info]
