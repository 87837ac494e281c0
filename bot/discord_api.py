"""Discord I/O helpers.

Replies go through the ``discord.Interaction`` the gateway attached to each
event (``interaction.response`` for the defer, ``interaction.followup`` for the
reply), so they share ``discord.py``'s HTTP session and rate limiter.

The startup calls (application and guild lookup, guild command sync) run
before the gateway connects and use :class:`sdk.client.SwitchboardClient`,
offloaded via :func:`asyncio.to_thread`.

The reply helpers log and swallow delivery failures: a reply that cannot be
delivered must not crash the dispatch task.  The startup helpers let errors
propagate so a misconfigured bot fails fast.
"""

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

import discord

from config import DISCORD_API_BASE, DISCORD_TOKEN
from core.logger import SwitchboardLogger
from sdk.client import SwitchboardClient
from sdk.models import ApplicationCommand, InteractionEvent, MessagePayload

logger = SwitchboardLogger.get_logger()

T = TypeVar("T")

_client = SwitchboardClient(DISCORD_API_BASE, token=DISCORD_TOKEN)


async def make_request(func: Callable[..., T], *args: Any) -> T:
    """Run a blocking client call inside a thread to keep the event loop free."""
    return await asyncio.to_thread(func, *args)


def _to_discord_kwargs(payload: MessagePayload) -> dict[str, Any]:
    """Map a :class:`MessagePayload` onto ``Webhook.send`` keyword arguments."""
    data = payload.to_dict()
    kwargs: dict[str, Any] = {}
    if "content" in data:
        kwargs["content"] = data["content"]
    if "embeds" in data:
        kwargs["embeds"] = [discord.Embed.from_dict(embed) for embed in data["embeds"]]
    return kwargs


async def defer_reply(event: InteractionEvent, ephemeral: bool = False) -> bool:
    """Acknowledge *event*; returns ``False`` if the defer could not be sent."""
    interaction = event.source
    if interaction is None:
        logger.error("No gateway interaction bound to event, cannot defer", extra={"interaction_id": event.id})
        return False
    try:
        await interaction.response.defer(ephemeral=ephemeral)
    except discord.InteractionResponded:
        logger.warning("Interaction already acknowledged", extra={"interaction_id": event.id})
        return False
    except discord.HTTPException as exc:
        logger.error(
            "Defer rejected by Discord",
            extra={"interaction_id": event.id, "status_code": exc.status, "error": str(exc)},
        )
        return False
    logger.debug("Interaction deferred", extra={"interaction_id": event.id, "ephemeral": ephemeral})
    return True


async def send_followup(event: InteractionEvent, payload: MessagePayload, ephemeral: bool = False) -> bool:
    """Deliver *payload* as the reply to a deferred *event*.

    The first follow-up after a defer replaces the deferred "thinking"
    message, so its visibility is the one chosen at defer time.
    """
    interaction = event.source
    if interaction is None:
        logger.error("No gateway interaction bound to event, cannot reply", extra={"interaction_id": event.id})
        return False
    try:
        await interaction.followup.send(ephemeral=ephemeral, **_to_discord_kwargs(payload))
    except discord.HTTPException as exc:
        logger.error(
            "Follow-up rejected by Discord",
            extra={"interaction_id": event.id, "status_code": exc.status, "error": str(exc)},
        )
        return False
    logger.info("Reply sent", extra={"interaction_id": event.id, "ephemeral": ephemeral})
    return True


async def get_application() -> dict:
    """Return the current application object. Errors propagate."""
    return await make_request(_client.get_current_application)


async def get_guild(guild_id: int) -> dict:
    """Return the guild object. Errors propagate."""
    return await make_request(_client.get_guild, guild_id)


async def sync_guild_commands(
    application_id: int,
    guild_id: int,
    commands: list[ApplicationCommand],
) -> list[dict]:
    """Replace the guild's registered commands with *commands*. Errors propagate."""
    result = await make_request(_client.bulk_overwrite_guild_commands, application_id, guild_id, commands)
    logger.info(
        "Guild commands synced",
        extra={"guild_id": guild_id, "application_id": application_id, "count": len(commands)},
    )
    return result
