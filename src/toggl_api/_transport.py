"""Single-attempt HTTP transport for the Toggl Track API."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from ._auth import TogglAuth
from ._serialization import encode_params
from .config import ClientConfig
from .const import NO_RESPONSE_STATUS

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to issue one API call.

    ``path`` is relative to the configured base URL. ``params`` keeps the
    caller's ordering.
    """

    method: str
    path: str
    params: tuple[tuple[str, Any], ...] = ()
    body: Any = None


@dataclass(frozen=True)
class RawResponse:
    """A 2xx response with its body decoded but not yet validated."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None


@dataclass(frozen=True)
class TransportFailure:
    """A non-2xx response, or no response at all.

    Attributes:
        status: HTTP status, or 500 when the request never got an answer.
        headers: Response headers with lower-cased names.
        body: Decoded error body (JSON, else text), or ``None``.
        method: Method of the failed request.
        path: Path of the failed request.
        cause: The aiohttp/timeout exception when no response was received.
    """

    status: int
    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None
    cause: BaseException | None = None


class Transport:
    """Performs exactly one HTTP attempt and normalizes the outcome.

    Transport errors (DNS, refused connections, timeouts) are reported as a
    ``TransportFailure`` rather than raised. Anything else propagates.
    """

    def __init__(self, session: aiohttp.ClientSession, config: ClientConfig) -> None:
        self._session = session
        self._base_url = config.base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=config.timeout)
        self._auth = TogglAuth(config.api_token)
        self._debug = config.debug_api_errors

    def url_for(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    async def send(self, request: RequestDescriptor) -> RawResponse | TransportFailure:
        """Issue ``request`` once."""
        kwargs: dict[str, Any] = {
            "headers": self._auth.get_headers(),
            "timeout": self._timeout,
        }
        if request.params:
            kwargs["params"] = encode_params(request.params)
        if request.body is not None:
            kwargs["json"] = request.body

        try:
            async with self._session.request(
                request.method, self.url_for(request.path), **kwargs
            ) as resp:
                headers = {k.lower(): v for k, v in resp.headers.items()}
                body = _decode(await resp.read())
                status = resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            failure = TransportFailure(
                status=NO_RESPONSE_STATUS,
                method=request.method,
                path=request.path,
                cause=err,
            )
        else:
            if 200 <= status < 300:
                return RawResponse(status=status, headers=headers, body=body)
            failure = TransportFailure(
                status=status,
                method=request.method,
                path=request.path,
                headers=headers,
                body=body,
            )

        if self._debug:
            self._log_failure(request, failure)
        return failure

    def _log_failure(self, request: RequestDescriptor, failure: TransportFailure) -> None:
        details = {
            "status": failure.status,
            "url": self.url_for(request.path),
            "method": request.method,
            "data": failure.body,
            "requestBody": request.body,
        }
        try:
            rendered = json.dumps(details, indent=2, default=str)
        except (TypeError, ValueError):
            rendered = repr(details)
        _LOGGER.error("API Error Details: %s", rendered)


def _decode(raw: bytes) -> Any:
    """Decode a response body: JSON when possible, else text, else ``None``."""
    if not raw:
        return None
    text = raw.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except ValueError:
        return text
