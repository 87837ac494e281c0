"""Discord application layer — interaction model, registries, dispatcher, gateway.

This package may import from ``core/``, ``sdk/`` and ``config`` only.
"""

from bot.bootstrap import build_dispatcher, run, sync_commands
from bot.dispatcher import DispatchResult, DispatchStatus, InteractionDispatcher
from bot.interactions import (
    CommandOption,
    Interaction,
    MessageContextCommand,
    SlashCommand,
    UserContextCommand,
    message_command,
    slash_command,
    sub_command,
    user_command,
)
from bot.registry import InteractionRegistry

__all__ = [
    # Bootstrap
    "run",
    "build_dispatcher",
    "sync_commands",
    # Dispatch
    "InteractionDispatcher",
    "DispatchResult",
    "DispatchStatus",
    # Interaction model
    "Interaction",
    "CommandOption",
    "SlashCommand",
    "MessageContextCommand",
    "UserContextCommand",
    "slash_command",
    "sub_command",
    "message_command",
    "user_command",
    # Registry
    "InteractionRegistry",
]
