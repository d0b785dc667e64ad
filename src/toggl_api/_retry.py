"""Bounded rate-limit retry and error translation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from ._transport import RequestDescriptor, Transport, TransportFailure
from .const import DEFAULT_RETRY_AFTER_SECONDS, MAX_RATE_LIMIT_RETRIES
from .exceptions import ApiError, ErrorKind, error_from_response

_LOGGER = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


def parse_retry_after(headers: Mapping[str, str]) -> int:
    """Read the ``retry-after`` header as whole seconds.

    Falls back to one second when the header is missing, not an integer,
    or negative.
    """
    value = headers.get("retry-after")
    if value is None:
        return DEFAULT_RETRY_AFTER_SECONDS
    try:
        seconds = int(value.strip())
    except ValueError:
        return DEFAULT_RETRY_AFTER_SECONDS
    return seconds if seconds >= 0 else DEFAULT_RETRY_AFTER_SECONDS


class RetryPipeline:
    """Runs a request through the transport, retrying on HTTP 429.

    Each ``execute()`` call keeps its own retry counter, so concurrent calls
    never share state and a backoff only suspends the call that was limited.
    Retries resend the identical descriptor; write requests passed here must
    be safe to repeat.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        max_retries: int = MAX_RATE_LIMIT_RETRIES,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._transport = transport
        self._max_retries = max_retries
        self._sleep = sleep

    async def execute(self, request: RequestDescriptor) -> Any:
        """Return the decoded body of a successful response.

        Raises:
            ApiError: On any terminal failure, including rate limiting that
                persists after ``max_retries`` retries.
        """
        retries = 0
        while True:
            outcome = await self._transport.send(request)
            if not isinstance(outcome, TransportFailure):
                return outcome.body

            if outcome.status != 429:
                raise error_from_response(outcome.status, outcome.body) from outcome.cause

            retry_after = parse_retry_after(outcome.headers)
            if retries >= self._max_retries:
                raise ApiError(ErrorKind.RATE_LIMIT, retry_after=retry_after)

            retries += 1
            _LOGGER.debug(
                "Rate limited on %s %s, retrying in %ss (retry %d/%d)",
                request.method,
                request.path,
                retry_after,
                retries,
                self._max_retries,
            )
            await self._sleep(retry_after)

