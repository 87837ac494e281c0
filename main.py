"""Process entry point: ``python main.py``."""

import asyncio

from core.logger import SwitchboardLogger
from bot.bootstrap import run
from bot.handlers import MESSAGE_COMMANDS, SLASH_COMMANDS, USER_COMMANDS

logger = SwitchboardLogger.get_logger()


def main() -> None:
    try:
        asyncio.run(run(SLASH_COMMANDS, MESSAGE_COMMANDS, USER_COMMANDS))
    except KeyboardInterrupt:
        logger.info("Shutdown requested, exiting")
    finally:
        SwitchboardLogger().cleanup()


if __name__ == "__main__":
    main()
