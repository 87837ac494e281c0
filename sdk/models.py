"""Pydantic data models for the Discord interaction payloads Switchboard touches.

Three groups of models live here:

* inbound — :class:`InteractionEvent` and friends, parsed from the raw
  ``INTERACTION_CREATE`` payload;
* outbound replies — :class:`MessagePayload` and :class:`Embed`;
* command registration — :class:`ApplicationCommand` and
  :class:`ApplicationCommandOption`.

Discord sends snowflakes as strings; they are coerced to ``int`` on parse.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, PrivateAttr

from core.permissions import Permission


# ── Enums ────────────────────────────────────────────────────────────────────


class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class ApplicationCommandType(IntEnum):
    CHAT_INPUT = 1
    USER = 2
    MESSAGE = 3


class ApplicationCommandOptionType(IntEnum):
    SUB_COMMAND = 1
    SUB_COMMAND_GROUP = 2
    STRING = 3
    INTEGER = 4
    BOOLEAN = 5
    USER = 6
    CHANNEL = 7
    ROLE = 8
    MENTIONABLE = 9
    NUMBER = 10
    ATTACHMENT = 11


# ── Inbound ──────────────────────────────────────────────────────────────────


class User(BaseModel):
    """A Discord user."""

    id: int
    username: str = ""
    global_name: Optional[str] = None
    bot: bool = False

    model_config = {"populate_by_name": True}

    @property
    def display_name(self) -> str:
        return self.global_name or self.username or str(self.id)


class Role(BaseModel):
    """A guild role."""

    id: int
    name: str = ""
    permissions: int = 0
    position: int = 0

    model_config = {"populate_by_name": True}


class Member(BaseModel):
    """The invoking guild member.

    ``permissions`` is the member's resolved permission set in the invocation
    channel, including overwrites, as computed by Discord.
    """

    user: Optional[User] = None
    nick: Optional[str] = None
    roles: List[int] = Field(default_factory=list)
    permissions: int = 0

    model_config = {"populate_by_name": True}


class Guild(BaseModel):
    """Snapshot of the guild an interaction was invoked in."""

    id: int
    name: Optional[str] = None
    roles: List[Role] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @property
    def role_ids(self) -> set[int]:
        return {role.id for role in self.roles}


class InteractionDataOption(BaseModel):
    """An option value supplied with a command invocation."""

    name: str
    type: ApplicationCommandOptionType
    value: Optional[Union[str, int, float, bool]] = None
    options: List["InteractionDataOption"] = Field(default_factory=list)
    focused: Optional[bool] = None

    model_config = {"populate_by_name": True}


class ResolvedData(BaseModel):
    """Users, members, roles and messages referenced by the invocation."""

    users: Dict[int, User] = Field(default_factory=dict)
    members: Dict[int, Member] = Field(default_factory=dict)
    roles: Dict[int, Role] = Field(default_factory=dict)
    messages: Dict[int, Dict[str, Any]] = Field(default_factory=dict)

    model_config = {"populate_by_name": True}


class InteractionData(BaseModel):
    """The ``data`` object of an application-command interaction."""

    id: int
    name: str
    type: ApplicationCommandType = ApplicationCommandType.CHAT_INPUT
    options: List[InteractionDataOption] = Field(default_factory=list)
    resolved: Optional[ResolvedData] = None
    target_id: Optional[int] = None
    guild_id: Optional[int] = None

    model_config = {"populate_by_name": True}


class InteractionEvent(BaseModel):
    """An inbound interaction, plus the guild snapshot attached by the gateway."""

    id: int
    application_id: int
    type: InteractionType
    token: str
    data: Optional[InteractionData] = None
    guild_id: Optional[int] = None
    channel_id: Optional[int] = None
    member: Optional[Member] = None
    user: Optional[User] = None
    locale: Optional[str] = None
    guild: Optional[Guild] = None

    _source: Any = PrivateAttr(default=None)

    model_config = {"populate_by_name": True}

    @property
    def source(self) -> Any:
        """The gateway interaction this event was converted from, if any.

        Replies are sent through it; events parsed from raw JSON have none.
        """
        return self._source

    def bind_source(self, source: Any) -> "InteractionEvent":
        self._source = source
        return self

    @property
    def command_name(self) -> Optional[str]:
        return self.data.name if self.data else None

    @property
    def command_type(self) -> Optional[ApplicationCommandType]:
        return self.data.type if self.data else None

    @property
    def subcommand_name(self) -> Optional[str]:
        """Name of the invoked sub-command, if the first option is one."""
        if not self.data:
            return None
        for option in self.data.options:
            if option.type is ApplicationCommandOptionType.SUB_COMMAND:
                return option.name
        return None

    @property
    def invoker(self) -> Optional[User]:
        """The user who invoked the interaction, in a guild or in DMs."""
        if self.member and self.member.user:
            return self.member.user
        return self.user

    @property
    def invoker_id(self) -> Optional[int]:
        invoker = self.invoker
        return invoker.id if invoker else None

    @property
    def target_id(self) -> Optional[int]:
        return self.data.target_id if self.data else None

    @property
    def member_role_ids(self) -> set[int]:
        return set(self.member.roles) if self.member else set()

    @property
    def member_permissions(self) -> Permission:
        return Permission.from_raw(self.member.permissions) if self.member else Permission.NONE

    @property
    def guild_role_ids(self) -> set[int]:
        return self.guild.role_ids if self.guild else set()

    def option(self, name: str, default: Any = None) -> Any:
        """Return the value of option *name*, looking inside a sub-command."""
        if not self.data:
            return default
        options = self.data.options
        if options and options[0].type is ApplicationCommandOptionType.SUB_COMMAND:
            options = options[0].options
        for option in options:
            if option.name == name:
                return option.value
        return default

    def log_context(self) -> Dict[str, Any]:
        """Return the fields attached to every dispatch log line."""
        return {
            "interaction_id": self.id,
            "command": self.command_name,
            "sub_command": self.subcommand_name,
            "user_id": self.invoker_id,
            "guild_id": self.guild_id,
            "channel_id": self.channel_id,
        }


# ── Outbound replies ─────────────────────────────────────────────────────────


class EmbedField(BaseModel):
    name: str
    value: str
    inline: bool = False


class EmbedFooter(BaseModel):
    text: str
    icon_url: Optional[str] = None


class Embed(BaseModel):
    """A rich embed attached to a reply."""

    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    color: Optional[int] = None
    fields: List[EmbedField] = Field(default_factory=list)
    footer: Optional[EmbedFooter] = None

    def add_field(self, name: str, value: str, inline: bool = False) -> "Embed":
        self.fields.append(EmbedField(name=name, value=value, inline=inline))
        return self


class MessagePayload(BaseModel):
    """A reply produced by an interaction handler."""

    content: Optional[str] = None
    embeds: List[Embed] = Field(default_factory=list)

    @classmethod
    def text(cls, content: str) -> "MessagePayload":
        return cls(content=content)

    def to_dict(self) -> Dict[str, Any]:
        """Render the Discord message JSON; empty embeds are dropped."""
        payload: Dict[str, Any] = self.model_dump(exclude_none=True)
        if not payload.get("embeds"):
            payload.pop("embeds", None)
        return payload


# ── Command registration ─────────────────────────────────────────────────────


class ApplicationCommandOptionChoice(BaseModel):
    name: str
    value: Union[str, int, float]


class ApplicationCommandOption(BaseModel):
    """A parameter (or sub-command) declared at registration time."""

    type: ApplicationCommandOptionType
    name: str
    description: str
    required: Optional[bool] = None
    choices: Optional[List[ApplicationCommandOptionChoice]] = None
    options: Optional[List["ApplicationCommandOption"]] = None


class ApplicationCommand(BaseModel):
    """The registration payload for one command."""

    name: str
    type: ApplicationCommandType = ApplicationCommandType.CHAT_INPUT
    description: str = ""
    options: Optional[List[ApplicationCommandOption]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Render the JSON sent to the bulk-overwrite endpoint."""
        payload = self.model_dump(mode="json", exclude_none=True)
        if self.type is not ApplicationCommandType.CHAT_INPUT:
            # Context-menu commands must not carry a description.
            payload.pop("description", None)
        return payload


InteractionDataOption.model_rebuild()
ApplicationCommandOption.model_rebuild()
