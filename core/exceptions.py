"""Error taxonomy for command registration and interaction dispatch.

Startup errors (:class:`DuplicateNameError`, :class:`RegistrySealedError`,
:class:`GuildNotFoundError`) are meant to abort the process.  Everything
under :class:`DispatchError` is scoped to a single interaction: the
dispatcher catches it, replies with :attr:`DispatchError.user_message` and
moves on.
"""


class SwitchboardError(Exception):
    """Base class for every error raised by this project."""


# ── Startup errors ───────────────────────────────────────────────────────────


class DuplicateNameError(SwitchboardError):
    """Two interactions were registered under the same name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Interaction with name {name!r} already registered.")


class RegistrySealedError(SwitchboardError):
    """Registration was attempted after the registry was sealed."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Cannot register {name!r}: registry is sealed.")


class GuildNotFoundError(SwitchboardError):
    """The configured guild could not be resolved at startup."""

    def __init__(self, guild_id: int | None) -> None:
        self.guild_id = guild_id
        super().__init__(f"Guild with ID {guild_id} not found.")


class HandlerMissingError(SwitchboardError):
    """A command group with no handler of its own was executed directly."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Interaction {name!r} has no handler.")


# ── Per-event dispatch errors ────────────────────────────────────────────────


class DispatchError(SwitchboardError):
    """Base for errors that abort a single dispatch.

    Attributes:
        user_message: Text shown (ephemerally) to the invoking user.
    """

    user_message: str = "This command is not available."

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail or self.user_message)


class UnknownCommandError(DispatchError):
    """The event names a command that is not registered."""


class UnknownSubCommandError(DispatchError):
    """The event names a sub-command its parent does not declare."""


class UnauthorizedError(DispatchError):
    """Base for authorization gate failures."""


class UnauthorizedContextError(UnauthorizedError):
    user_message = "This command is not available in DMs."


class UnauthorizedChannelError(UnauthorizedError):
    user_message = "This command is not available in this channel."


class UnauthorizedRoleError(UnauthorizedError):
    user_message = "You do not have the required role to use this command."


class UnauthorizedPermissionError(UnauthorizedError):
    user_message = "You do not have permission to use this command."
