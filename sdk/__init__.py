"""Discord REST SDK — Pydantic models, service client, and exceptions.

The :class:`SwitchboardClient` class wraps the REST endpoints used for
interaction replies and command registration with synchronous methods.
The async wrappers used by the bot layer live in :mod:`bot.discord`.

Usage::

    from sdk import SwitchboardClient, APIException
    from sdk.models import InteractionEvent, MessagePayload
"""

from sdk.client import SwitchboardClient
from sdk.exceptions import APIException

__all__ = [
    "SwitchboardClient",
    "APIException",
]
