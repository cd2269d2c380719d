# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures: a fake aiohttp session recording outgoing requests."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pytest

from nativ import Nativ

BASE_URL = "https://api.test"


@dataclass
class RecordedCall:
    """A request captured by FakeSession."""

    method: str
    url: str
    kwargs: dict[str, Any]

    @property
    def path(self) -> str:
        return self.url[len(BASE_URL):]

    @property
    def json(self) -> Any:
        return json.loads(self.kwargs["data"])

    @property
    def params(self) -> dict[str, str]:
        return self.kwargs.get("params") or {}

    @property
    def headers(self) -> dict[str, str]:
        return self.kwargs["headers"]


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse."""

    def __init__(self, status: int = 200, body: Any = None, delay: float = 0.0) -> None:
        self.status = status
        self.delay = delay
        if isinstance(body, str):
            self._raw = body
        else:
            self._raw = json.dumps({} if body is None else body)

    async def text(self, errors: str = "strict") -> str:
        return self._raw


class _RequestContext:
    def __init__(self, session: FakeSession, response: FakeResponse) -> None:
        self._session = session
        self._response = response

    async def __aenter__(self) -> FakeResponse:
        self._session.in_flight += 1
        self._session.max_in_flight = max(
            self._session.max_in_flight, self._session.in_flight
        )
        await asyncio.sleep(self._response.delay)
        return self._response

    async def __aexit__(self, *args: Any) -> None:
        self._session.in_flight -= 1


Handler = Callable[[RecordedCall], FakeResponse]


class FakeSession:
    """Records requests and answers them with FakeResponse objects.

    Args:
        responder: A single response used for every call, or a callable
            computing the response from the recorded call.
    """

    def __init__(self, responder: FakeResponse | Handler | None = None) -> None:
        self._responder = responder or FakeResponse()
        self.calls: list[RecordedCall] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    def request(self, method: str, url: str, **kwargs: Any) -> _RequestContext:
        call = RecordedCall(method, url, kwargs)
        self.calls.append(call)
        if callable(self._responder):
            response = self._responder(call)
        else:
            response = self._responder
        return _RequestContext(self, response)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real credentials out of unit tests."""
    monkeypatch.delenv("NATIV_API_KEY", raising=False)
    monkeypatch.delenv("NATIV_API_URL", raising=False)


@pytest.fixture
def make_client() -> Callable[..., tuple[Nativ, FakeSession]]:
    """Build a client wired to a FakeSession."""

    def _make(responder: FakeResponse | Handler | None = None) -> tuple[Nativ, FakeSession]:
        session = FakeSession(responder)
        client = Nativ(api_key="test-key", base_url=BASE_URL, session=session)  # type: ignore[arg-type]
        return client, session

    return _make
