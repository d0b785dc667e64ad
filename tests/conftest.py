"""Conftest: fake aiohttp session and shared payloads.

The client only needs ``session.request(...)`` used as an async context
manager whose response offers ``status``, ``headers`` and ``read()``, so a
small scripted stand-in replaces the network entirely.
"""

from __future__ import annotations

import asyncio
import json
from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import Any

import pytest

from toggl_api import ClientConfig, TogglApiClient


# --------------------------------------------------------------------------- #
#  Fake aiohttp session
# --------------------------------------------------------------------------- #


@dataclass
class FakeResponse:
    """Scripted response. ``body`` is JSON-encoded unless it is bytes/str."""

    status: int = 200
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    async def read(self) -> bytes:
        if self.body is None:
            return b""
        if isinstance(self.body, bytes):
            return self.body
        if isinstance(self.body, str):
            return self.body.encode()
        return json.dumps(self.body).encode()

    async def __aenter__(self) -> FakeResponse:
        return self

    async def __aexit__(self, *_: Any) -> None:
        return None


@dataclass
class RecordedCall:
    method: str
    url: str
    kwargs: dict[str, Any]


class FakeSession:
    """Stand-in for ``aiohttp.ClientSession``.

    Outcomes are queued per path suffix with ``add()``; an outcome that is an
    exception is raised from ``request()`` like a connection failure.
    """

    def __init__(self) -> None:
        self.calls: list[RecordedCall] = []
        self.closed = False
        self._routes: dict[str, deque[FakeResponse | BaseException]] = defaultdict(deque)

    def add(self, path: str, *outcomes: FakeResponse | BaseException) -> FakeSession:
        self._routes[path].extend(outcomes)
        return self

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append(RecordedCall(method, url, kwargs))
        for path, queue in self._routes.items():
            if url.endswith(path) and queue:
                outcome = queue.popleft()
                if isinstance(outcome, BaseException):
                    raise outcome
                return outcome
        raise AssertionError(f"Unexpected request: {method} {url}")

    async def close(self) -> None:
        self.closed = True


class RecordingSleep:
    """Injectable replacement for ``asyncio.sleep`` that records delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


# --------------------------------------------------------------------------- #
#  Helpers
# --------------------------------------------------------------------------- #


def make_config(**overrides: Any) -> ClientConfig:
    values: dict[str, Any] = {"api_token": "test-token", "workspace_id": 42}
    values.update(overrides)
    return ClientConfig(**values)


def run(coro: Any) -> Any:
    return asyncio.run(coro)


def user_payload(**overrides: Any) -> dict[str, Any]:
    data = {
        "id": 1,
        "email": "ada@example.com",
        "fullname": "Ada Lovelace",
        "timezone": "Europe/London",
        "default_workspace_id": 42,
        "beginning_of_week": 1,
        "image_url": None,
        "created_at": "2024-01-01T00:00:00Z",
        "api_token": "should-be-ignored",
    }
    data.update(overrides)
    return data


def time_entry_payload(**overrides: Any) -> dict[str, Any]:
    data = {
        "id": 1001,
        "workspace_id": 42,
        "project_id": None,
        "billable": False,
        "start": "2024-03-01T09:00:00+00:00",
        "stop": None,
        "duration": -1709283600,
        "description": "Writing tests",
        "at": "2024-03-01T09:00:00+00:00",
        "user_id": 1,
        "tags": ["dev"],
    }
    data.update(overrides)
    return data


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def client(session: FakeSession, sleep: RecordingSleep) -> TogglApiClient:
    return TogglApiClient(make_config(), session, sleep=sleep)  # type: ignore[arg-type]
