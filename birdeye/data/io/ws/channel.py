"""Bounded consumer handle for one data category."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Any

from ...core import ChannelClosed, WsDataType


class Channel:
    """Buffered queue that receives every event of one category.

    Consumers read with ``get()`` or ``async for``. After ``close()`` the
    events still buffered remain readable; iteration then stops and ``get()``
    raises ``ChannelClosed``.
    """

    def __init__(self, category: WsDataType, maxsize: int = 100) -> None:
        self.category = category
        self.maxsize = maxsize
        self._queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=maxsize)
        self._closed = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def qsize(self) -> int:
        return self._queue.qsize()

    def empty(self) -> bool:
        return self._queue.empty()

    def _closed_error(self) -> ChannelClosed:
        return ChannelClosed(f"{self.category.value} channel is closed")

    async def put(self, event: Any) -> None:
        """Wait for buffer space and enqueue ``event``.

        Raises:
            ChannelClosed: The channel was closed before or while waiting.
        """
        if self.closed:
            raise self._closed_error()
        putter = asyncio.ensure_future(self._queue.put(event))
        closing = asyncio.ensure_future(self._closed.wait())
        try:
            await asyncio.wait({putter, closing}, return_when=asyncio.FIRST_COMPLETED)
            delivered = putter.done()
        finally:
            closing.cancel()
            if not putter.done():
                putter.cancel()
        if not delivered:
            raise self._closed_error()

    def put_nowait(self, event: Any) -> None:
        """Enqueue without waiting; raises ``asyncio.QueueFull`` when full."""
        if self.closed:
            raise self._closed_error()
        self._queue.put_nowait(event)

    async def get(self) -> Any:
        """Next event; raises ``ChannelClosed`` once closed and drained."""
        while True:
            if not self._queue.empty():
                return self._queue.get_nowait()
            if self.closed:
                raise self._closed_error()
            getter = asyncio.ensure_future(self._queue.get())
            closing = asyncio.ensure_future(self._closed.wait())
            try:
                await asyncio.wait({getter, closing}, return_when=asyncio.FIRST_COMPLETED)
            finally:
                closing.cancel()
                if not getter.done():
                    getter.cancel()
            if getter.done() and not getter.cancelled():
                return getter.result()

    def get_nowait(self) -> Any:
        """Next buffered event; raises ``asyncio.QueueEmpty`` if none is ready."""
        if self._queue.empty() and self.closed:
            raise self._closed_error()
        return self._queue.get_nowait()

    def close(self) -> None:
        """Stop accepting events and wake pending producers and consumers."""
        self._closed.set()

    def __aiter__(self) -> AsyncIterator[Any]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[Any]:
        while True:
            try:
                yield await self.get()
            except ChannelClosed:
                return

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<Channel {self.category.value} {state} {self.qsize()}/{self.maxsize}>"
