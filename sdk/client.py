"""Synchronous service layer over the Discord REST endpoints Switchboard uses.

Only the startup endpoints are wrapped: the application and guild lookups
and the guild command overwrite.  Interaction replies go through
``discord.py``, which owns the gateway connection and its rate limiter.
"""

from typing import Any, Dict, List, Optional

import requests

from sdk.exceptions import APIException
from sdk.models import ApplicationCommand


class SwitchboardClient:
    """Client-side service layer for the Discord REST API.

    Each public method corresponds to one REST endpoint.  Non-2xx responses
    raise :class:`APIException`; transport failures propagate as
    :class:`requests.RequestException`.
    """

    _DEFAULT_TIMEOUT: int = 10

    def __init__(self, base_url: str, token: str | None = None, timeout: int = _DEFAULT_TIMEOUT) -> None:
        """Create a new client bound to *base_url*.

        Args:
            base_url: REST base URL (e.g. ``https://discord.com/api/v10``).
            token: Bot token, sent as ``Authorization: Bot <token>``.
            timeout: Default request timeout in seconds.
        """
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout

    # ------------------------------------------------------------------
    #  Internal helpers
    # ------------------------------------------------------------------

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bot {self._token}"
        return headers

    def _request(self, method: str, endpoint: str, payload: Optional[Any] = None) -> Any:
        """Send a request and return the parsed JSON body (``{}`` for 204).

        Raises:
            APIException: If the response status code is not 2xx.
            requests.RequestException: On transport-level failures.
        """
        url = f"{self._base_url}/{endpoint.lstrip('/')}"
        response = requests.request(
            method,
            url,
            json=payload,
            headers=self._headers(),
            timeout=self._timeout,
        )
        try:
            body = response.json() if response.content else {}
        except ValueError:
            body = {}
        if not response.ok:
            raise APIException(response.status_code, body if isinstance(body, dict) else {})
        return body

    # ------------------------------------------------------------------
    #  Application commands
    # ------------------------------------------------------------------

    def bulk_overwrite_guild_commands(
        self,
        application_id: int,
        guild_id: int,
        commands: List[ApplicationCommand],
    ) -> List[Dict[str, Any]]:
        """Replace every command registered for *guild_id* with *commands*."""
        return self._request(
            "PUT",
            f"applications/{application_id}/guilds/{guild_id}/commands",
            [command.to_dict() for command in commands],
        )

    # ------------------------------------------------------------------
    #  Lookups
    # ------------------------------------------------------------------

    def get_current_application(self) -> Dict[str, Any]:
        """Return the application object the bot token belongs to."""
        return self._request("GET", "applications/@me")

    def get_guild(self, guild_id: int) -> Dict[str, Any]:
        """Return the guild object, roles included."""
        return self._request("GET", f"guilds/{guild_id}")
