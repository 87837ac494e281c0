"""Authorization gates run before an interaction handler executes.

Each ``passes_*`` check is a pure function over ids and bitsets so it can be
reused outside the Discord layer.  :func:`authorize` runs them in their fixed
order (context → channel → role → permission) and raises the first failure.
The order decides which message a user sees for a multiply-invalid
invocation.
"""

from collections.abc import Collection, Iterable

from core.exceptions import (
    UnauthorizedChannelError,
    UnauthorizedContextError,
    UnauthorizedPermissionError,
    UnauthorizedRoleError,
)
from core.logger import SwitchboardLogger
from core.permissions import Permission

logger = SwitchboardLogger.get_logger()


def passes_context_check(guild_id: int | None, channel_id: int | None, member_present: bool) -> bool:
    """Return True if the invocation happened inside a guild channel by a member."""
    return guild_id is not None and channel_id is not None and member_present


def passes_channel_check(required_channels: Collection[int], channel_id: int | None) -> bool:
    """Return True if *required_channels* is empty or contains *channel_id*."""
    if not required_channels:
        return True
    return channel_id in required_channels


def passes_role_check(
    required_roles: Collection[int],
    guild_role_ids: Iterable[int],
    member_role_ids: Iterable[int],
) -> bool:
    """Return True if the member holds at least one of *required_roles*.

    Required ids that no longer exist in the guild are dropped before the
    comparison.  If every required role has vanished the check fails.
    """
    if not required_roles:
        return True

    existing = set(guild_role_ids)
    resolved = {role_id for role_id in required_roles if role_id in existing}
    if len(resolved) < len(required_roles):
        logger.debug(
            "Dropped required roles missing from guild",
            extra={"missing_roles": sorted(set(required_roles) - resolved)},
        )

    return not resolved.isdisjoint(member_role_ids)


def passes_permission_check(required: Permission | int, granted: Permission | int) -> bool:
    """Return True if *granted* holds every bit of *required*.

    ``ADMINISTRATOR`` implies every permission.
    """
    required = Permission(required)
    granted = Permission(granted)
    if not required:
        return True
    if Permission.ADMINISTRATOR in granted:
        return True
    return (granted & required) == required


def authorize(
    *,
    guild_id: int | None,
    channel_id: int | None,
    member_present: bool,
    guild_role_ids: Iterable[int],
    member_role_ids: Iterable[int],
    member_permissions: Permission | int,
    required_channels: Collection[int],
    required_roles: Collection[int],
    required_permissions: Permission | int,
) -> None:
    """Run every gate in order.

    Raises:
        UnauthorizedContextError: Not invoked by a member in a guild channel.
        UnauthorizedChannelError: Channel not in the allow-list.
        UnauthorizedRoleError: None of the required roles held.
        UnauthorizedPermissionError: A required permission is missing.
    """
    if not passes_context_check(guild_id, channel_id, member_present):
        raise UnauthorizedContextError("missing guild, channel or member")

    if not passes_channel_check(required_channels, channel_id):
        raise UnauthorizedChannelError(f"channel {channel_id} not allowed")

    if not passes_role_check(required_roles, guild_role_ids, member_role_ids):
        raise UnauthorizedRoleError("no required role held")

    if not passes_permission_check(required_permissions, member_permissions):
        missing = Permission(int(required_permissions) & ~int(member_permissions))
        raise UnauthorizedPermissionError(f"missing {', '.join(missing.names())}")
