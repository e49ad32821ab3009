"""Outbound subscription publisher."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from ...core import NotConnectedError
from ...models import SubscriptionRequest

logger = logging.getLogger(__name__)


class Publisher:
    """Serialize and send control messages over the current transport.

    Writes are serialized by a lock because the transport allows one reader
    and one writer but not concurrent writers. Sending is fire-and-forget:
    success means the frame was handed to the transport.

    The publisher also remembers which subscriptions are active so they can
    be replayed on a fresh transport after a reconnection.
    """

    def __init__(self, transport: Callable[[], Any]) -> None:
        self._transport = transport
        self._lock = asyncio.Lock()
        self._active: dict[tuple[Any, str], SubscriptionRequest] = {}

    @property
    def active_subscriptions(self) -> list[SubscriptionRequest]:
        """Subscribe requests sent and not yet unsubscribed, oldest first."""
        return list(self._active.values())

    async def send(self, request: SubscriptionRequest) -> None:
        """Send one request.

        Raises:
            NotConnectedError: No live transport.
            Exception: Whatever the transport raises on write.
        """
        await self._write(request)
        key = request.tracking_key
        if request.is_subscribe:
            self._active[key] = request
        else:
            self._active.pop(key, None)

    async def replay(self) -> int:
        """Resend every active subscription; returns how many were sent."""
        sent = 0
        for request in self.active_subscriptions:
            await self._write(request)
            sent += 1
        if sent:
            logger.info(f"Replayed {sent} subscription(s)")
        return sent

    def forget(self) -> None:
        self._active.clear()

    async def _write(self, request: SubscriptionRequest) -> None:
        ws = self._transport()
        if ws is None:
            raise NotConnectedError("WebSocket is not connected")
        payload = request.to_wire()
        async with self._lock:
            await ws.send(payload)
        logger.debug(f"Sent {request.type.value}: {payload}")
