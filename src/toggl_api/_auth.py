"""Authentication handler for the Toggl Track API."""

from __future__ import annotations

import base64

from .const import API_TOKEN_PASSWORD


class TogglAuth:
    """Holds the Basic-Auth header derived from an API token.

    Toggl authenticates every request with HTTP Basic auth, using the API
    token as the username and the literal ``api_token`` as the password.
    The header is computed once; the token itself is not kept around.
    """

    def __init__(self, api_token: str) -> None:
        credentials = f"{api_token}:{API_TOKEN_PASSWORD}".encode("utf-8")
        self._authorization = "Basic " + base64.b64encode(credentials).decode("ascii")

    def get_headers(self) -> dict[str, str]:
        """Build headers for an API request."""
        return {
            "Authorization": self._authorization,
            "Content-Type": "application/json",
        }

    def __repr__(self) -> str:
        return "TogglAuth(<redacted>)"
