"""Inbound frame dispatcher.

The read loop hands every frame to ``Dispatcher.handle_frame``. Text frames
are decoded in their own task so a slow or malformed payload never holds up
the next read; decoded events are fanned out to every channel registered for
their category, one task per channel, each bounded by the delivery timeout.
Failures at any stage are logged and the frame or delivery is dropped.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from ...core import ChannelClosed, MessageDecodeError
from .channel import Channel
from .messages import EventPayload, ServerError, Unrecognized, Welcome, decode_frame
from .registry import SubscriptionRegistry

logger = logging.getLogger(__name__)


class Dispatcher:
    """Decode frames and fan events out through a registry."""

    def __init__(self, registry: SubscriptionRegistry, delivery_timeout: float = 10.0) -> None:
        self._registry = registry
        self._delivery_timeout = delivery_timeout
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        """Decode and delivery tasks still running."""
        return len(self._tasks)

    def _spawn(self, coro: Any) -> asyncio.Task[None]:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def handle_frame(self, frame: str | bytes) -> asyncio.Task[None] | None:
        """Classify one frame; schedule decoding for text frames.

        Returns the scheduled task, or None when the frame was discarded.
        """
        if isinstance(frame, str):
            return self._spawn(self.handle_text(frame))
        logger.debug(f"Ignoring binary frame ({len(frame)} bytes)")
        return None

    async def handle_text(self, text: str) -> None:
        """Decode one text frame and deliver its event."""
        try:
            message = decode_frame(text)
        except MessageDecodeError as e:
            logger.error(f"Failed to decode message: {e} | raw={e.raw!r}")
            return

        if isinstance(message, Welcome):
            logger.info(f"Welcome message: {message.data!r}")
            return
        if isinstance(message, ServerError):
            logger.error(f"Server error message: {message.data!r}")
            return
        if isinstance(message, Unrecognized):
            logger.error(f"Unknown message type {message.type!r}: {message.data!r}")
            return

        self.publish(message)

    def publish(self, event: EventPayload) -> list[asyncio.Task[None]]:
        """Fan ``event`` out to a snapshot of its category's channels."""
        channels = self._registry.snapshot(event.data_type)
        return [self._spawn(self._deliver(channel, event)) for channel in channels]

    async def _deliver(self, channel: Channel, event: EventPayload) -> None:
        try:
            await asyncio.wait_for(channel.put(event), timeout=self._delivery_timeout)
        except asyncio.TimeoutError:
            logger.error(
                f"Dropped {event.data_type.value} event: consumer did not accept it "
                f"within {self._delivery_timeout:g}s"
            )
        except ChannelClosed:
            logger.debug(f"Dropped {event.data_type.value} event for closed channel")

    async def aclose(self) -> None:
        """Cancel outstanding decode and delivery tasks."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
