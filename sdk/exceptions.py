"""Exception hierarchy for the Switchboard Discord REST layer."""

from typing import Any, Dict, Optional


class APIException(Exception):
    """Base exception for non-2xx responses from the Discord REST API.

    Attributes:
        status_code: HTTP status code returned by the API.
        response_body: Raw response body as a dict, when available.
    """

    def __init__(self, status_code: int, response_body: Optional[Dict[str, Any]] = None) -> None:
        self.status_code = status_code
        self.response_body = response_body or {}
        message = self.response_body.get("message", "Unknown error")
        super().__init__(f"API error {status_code}: {message}")
