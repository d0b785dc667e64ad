"""Client configuration for the Toggl Track API."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .const import (
    BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_API_TOKEN,
    ENV_DEBUG_API_ERRORS,
    ENV_WORKSPACE_ID,
)
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings shared by every request a client makes.

    Build it once with ``from_env()`` (or directly in tests) and pass it to
    ``TogglApiClient``. The token is excluded from ``repr()``.
    """

    api_token: str = field(repr=False)
    base_url: str = BASE_URL
    workspace_id: int | None = None
    debug_api_errors: bool = False
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(
        cls,
        api_token: str | None = None,
        workspace_id: int | str | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> ClientConfig:
        """Resolve configuration from explicit overrides, then the environment.

        Raises:
            ConfigurationError: If no API token is available or the workspace
                ID is not an integer.
        """
        env = os.environ if environ is None else environ

        token = api_token or env.get(ENV_API_TOKEN, "")
        if not token.strip():
            raise ConfigurationError(
                f"{ENV_API_TOKEN} environment variable is not set. "
                "Please set it in your .env file, export it, or use --api-token option."
            )

        return cls(
            api_token=token.strip(),
            workspace_id=_parse_workspace_id(workspace_id or env.get(ENV_WORKSPACE_ID)),
            debug_api_errors=env.get(ENV_DEBUG_API_ERRORS, "").lower() == "true",
        )

    def require_workspace(self, override: int | None = None) -> int:
        """Return the workspace to act on, preferring ``override``."""
        workspace_id = override if override is not None else self.workspace_id
        if workspace_id is None:
            raise ConfigurationError(
                f"No workspace given. Pass --workspace or set {ENV_WORKSPACE_ID}."
            )
        return workspace_id


def _parse_workspace_id(value: int | str | None) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, int):
        return value
    if not value.strip().isdigit() or int(value) <= 0:
        raise ConfigurationError("Workspace ID must be a positive integer")
    return int(value)
