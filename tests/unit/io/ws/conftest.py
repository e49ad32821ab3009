"""Shared fixtures for streaming tests."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from websockets.exceptions import ConnectionClosed


class FakeTransport:
    """In-memory stand-in for a websockets connection.

    Frames fed with ``feed()`` are returned by ``recv()`` in order; an
    exception fed with ``fail()`` is raised by the ``recv()`` that reaches it.
    """

    def __init__(self) -> None:
        self.sent: list[str] = []
        self.closed = False
        self._frames: asyncio.Queue[Any] = asyncio.Queue()

    def feed(self, *frames: str | bytes) -> None:
        for frame in frames:
            self._frames.put_nowait(frame)

    def fail(self, exc: BaseException | None = None) -> None:
        self._frames.put_nowait(exc or ConnectionClosed(None, None))

    async def recv(self) -> str | bytes:
        item = await self._frames.get()
        if isinstance(item, BaseException):
            raise item
        return item

    async def send(self, data: str) -> None:
        if self.closed:
            raise ConnectionClosed(None, None)
        self.sent.append(data)

    async def close(self) -> None:
        self.closed = True


async def wait_for_condition(predicate, timeout: float = 1.0) -> None:
    """Wait until predicate returns True or timeout."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while True:
        if predicate():
            return
        if loop.time() >= deadline:
            raise AssertionError("Condition not met within timeout")
        await asyncio.sleep(0.01)


@pytest.fixture
def transport_factory():
    """Return the FakeTransport class."""
    return FakeTransport


@pytest.fixture
def wait_until():
    """Return the wait_for_condition helper."""
    return wait_for_condition


PRICE_FRAME = (
    '{"type":"PRICE_DATA","data":{"o":1.0,"h":1.2,"l":0.9,"c":1.1,'
    '"unixTime":1000,"address":"X"}}'
)


@pytest.fixture
def price_frame() -> str:
    return PRICE_FRAME
