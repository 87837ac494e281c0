"""Build the command-registration payload from the registered interactions.

Slash sub-commands are declared to Discord as ``SUB_COMMAND`` options of
their parent; context-menu commands carry only a name and a type.
"""

from collections.abc import Iterable

from core.logger import SwitchboardLogger
from sdk.models import (
    ApplicationCommand,
    ApplicationCommandOption,
    ApplicationCommandOptionChoice,
    ApplicationCommandOptionType,
    ApplicationCommandType,
)
from bot.interactions import (
    CommandOption,
    MessageContextCommand,
    SlashCommand,
    UserContextCommand,
)

logger = SwitchboardLogger.get_logger()


def _option_data(option: CommandOption) -> ApplicationCommandOption:
    choices = [
        ApplicationCommandOptionChoice(name=name, value=value)
        for name, value in option.choices
    ]
    return ApplicationCommandOption(
        type=option.type,
        name=option.name,
        description=option.description,
        required=option.required,
        choices=choices or None,
    )


def get_slash_command_data(slash_commands: Iterable[SlashCommand]) -> list[ApplicationCommand]:
    data: list[ApplicationCommand] = []

    for command in slash_commands:
        options = [_option_data(option) for option in command.options]

        for sub in command.sub_commands:
            options.append(ApplicationCommandOption(
                type=ApplicationCommandOptionType.SUB_COMMAND,
                name=sub.name,
                description=sub.description,
                options=[_option_data(option) for option in sub.options] or None,
            ))
            logger.info("Built sub-command data", extra={"command": command.name, "sub_command": sub.name})

        data.append(ApplicationCommand(
            name=command.name,
            type=ApplicationCommandType.CHAT_INPUT,
            description=command.description,
            options=options or None,
        ))
        logger.info("Built slash command data", extra={"command": command.name})

    return data


def get_message_command_data(message_commands: Iterable[MessageContextCommand]) -> list[ApplicationCommand]:
    data: list[ApplicationCommand] = []
    for command in message_commands:
        data.append(ApplicationCommand(name=command.name, type=ApplicationCommandType.MESSAGE))
        logger.info("Built message context command data", extra={"command": command.name})
    return data


def get_user_command_data(user_commands: Iterable[UserContextCommand]) -> list[ApplicationCommand]:
    data: list[ApplicationCommand] = []
    for command in user_commands:
        data.append(ApplicationCommand(name=command.name, type=ApplicationCommandType.USER))
        logger.info("Built user context command data", extra={"command": command.name})
    return data


def build_command_data(
    slash_commands: Iterable[SlashCommand],
    message_commands: Iterable[MessageContextCommand],
    user_commands: Iterable[UserContextCommand],
) -> list[ApplicationCommand]:
    """Enumerate every known command as a registration payload."""
    return [
        *get_slash_command_data(slash_commands),
        *get_message_command_data(message_commands),
        *get_user_command_data(user_commands),
    ]
