"""Application configuration — environment variables and derived constants.

Loads the Discord token, target guild, gateway intents and dispatch limits
from the environment via ``python-dotenv``.  All values are resolved at import
time so other modules can ``from config import …`` without repeated lookups.
"""

# ── stdlib ───────────────────────────────────────────────────────────────────
import os

# ── third-party ──────────────────────────────────────────────────────────────
from dotenv import load_dotenv

# ── core ─────────────────────────────────────────────────────────────────────
from core.logger import SwitchboardLogger

# ── Environment bootstrap ────────────────────────────────────────────────────
load_dotenv()

# ── Logger (used for startup diagnostics at the bottom of this module) ───────
logger = SwitchboardLogger.get_logger()


# ── Helper functions (private) ───────────────────────────────────────────────


def _parse_id_list(raw: str | None) -> list[int]:
    """Parse a comma-separated string of Discord snowflakes into a list of ints.

    Handles single IDs (e.g. ``"1180000000000000000"``) and comma-separated
    lists.  Invalid tokens are silently skipped.
    """
    if not raw:
        return []
    result: list[int] = []
    for token in raw.split(","):
        token = token.strip()
        if token:
            try:
                result.append(int(token))
            except ValueError:
                pass  # skip non-numeric tokens
    return result


def _parse_optional_int(raw: str | None) -> int | None:
    if not raw:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def _parse_intents(raw: str | None) -> list[str]:
    """Parse a comma-separated list of gateway intent names.

    Names are lower-cased to match the ``discord.Intents`` attribute names
    (``guilds``, ``members``, ``guild_messages``…).  Defaults to
    ``["guilds"]``, which keeps the guild role cache the role gate relies on.
    """
    if not raw:
        return ["guilds"]
    return [token.strip().lower() for token in raw.split(",") if token.strip()]


def _parse_positive_int(raw: str | None, default: int) -> int:
    value = _parse_optional_int(raw)
    if value is None or value < 1:
        return default
    return value


# ── Public constants ─────────────────────────────────────────────────────────

DISCORD_TOKEN: str | None = os.environ.get("DISCORD_TOKEN")
DISCORD_GUILD_ID: int | None = _parse_optional_int(os.environ.get("DISCORD_GUILD_ID"))
DISCORD_INTENTS: list[str] = _parse_intents(os.environ.get("DISCORD_INTENTS"))
DISCORD_API_BASE: str = os.environ.get("DISCORD_API_BASE", "https://discord.com/api/v10")
MAX_CONCURRENT_INTERACTIONS: int = _parse_positive_int(
    os.environ.get("MAX_CONCURRENT_INTERACTIONS"), os.cpu_count() or 1
)
ADMIN_ROLE_IDS: list[int] = _parse_id_list(os.environ.get("ADMIN_ROLE_IDS"))


# ── Startup diagnostics ─────────────────────────────────────────────────────

if DISCORD_TOKEN:
    logger.info("Config loaded — DISCORD_TOKEN is set")
else:
    logger.warning("Config loaded — DISCORD_TOKEN is NOT set")

if DISCORD_GUILD_ID is None:
    logger.warning("No DISCORD_GUILD_ID configured in environment")
else:
    logger.info("DISCORD_GUILD_ID loaded", extra={"guild_id": DISCORD_GUILD_ID})

logger.info(
    "Dispatch settings resolved",
    extra={
        "intents": DISCORD_INTENTS,
        "api_base": DISCORD_API_BASE,
        "max_concurrent_interactions": MAX_CONCURRENT_INTERACTIONS,
        "admin_role_ids": ADMIN_ROLE_IDS,
    },
)
