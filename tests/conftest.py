"""Test configuration and fixtures.

The clients are exercised against :class:`FakeTransport`, an in-memory
stand-in for the ZeroMQ session that records each request document and
replays scripted reply frames. No terminal is required.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Any

import orjson
import pytest

from mt4client.client import MT4Client, MT5Client
from mt4client.exceptions import MT4ConnectionError
from tests.constants import TestConstants as tc

if TYPE_CHECKING:
    from collections.abc import Generator


class FakeTransport:
    """Scripted request/reply session.

    Queue replies with :meth:`reply` (a response value), :meth:`reply_raw`
    (a raw frame, or None for a receive timeout) or :meth:`fail`.
    """

    def __init__(self) -> None:
        self.sent: list[str] = []
        self.closed = False
        self.close_calls = 0
        self._replies: deque[str | None | Exception] = deque()

    @property
    def send_count(self) -> int:
        return len(self.sent)

    @property
    def requests(self) -> list[dict[str, Any]]:
        """Decoded request documents, oldest first."""
        return [orjson.loads(raw) for raw in self.sent]

    @property
    def last_request(self) -> dict[str, Any]:
        return orjson.loads(self.sent[-1])

    def reply(self, response: object = None, **envelope: object) -> None:
        """Queue an envelope carrying ``response`` plus any extra fields."""
        document: dict[str, object] = {"response": response}
        document.update(envelope)
        self._replies.append(orjson.dumps(document).decode())

    def reply_raw(self, raw: str | None) -> None:
        self._replies.append(raw)

    def fail(self, error: Exception) -> None:
        self._replies.append(error)

    def send(self, request: str) -> str | None:
        if self.closed:
            msg = "Transport is closed"
            raise MT4ConnectionError(msg)
        self.sent.append(request)
        reply = self._replies.popleft()
        if isinstance(reply, Exception):
            raise reply
        return reply

    def close(self) -> None:
        self.close_calls += 1
        self.closed = True


@pytest.fixture
def transport() -> FakeTransport:
    """Fresh scripted transport."""
    return FakeTransport()


@pytest.fixture
def client(transport: FakeTransport) -> Generator[MT4Client]:
    """32-bit ticket client wired to the scripted transport."""
    with MT4Client(
        tc.Connection.ADDRESS,
        indicator_timeout_ms=tc.Connection.INDICATOR_TIMEOUT_MS,
        transport=transport,
    ) as mt4:
        yield mt4


@pytest.fixture
def mt5_client(transport: FakeTransport) -> Generator[MT5Client]:
    """64-bit ticket client wired to the scripted transport."""
    with MT5Client(tc.Connection.ADDRESS, transport=transport) as mt5:
        yield mt5
