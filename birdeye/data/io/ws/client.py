"""Streaming client: connection lifecycle, reconnection and read loop.

Architecture:
    ``WsClient`` owns the single live transport. ``connect()`` performs the
    handshake and starts one background read loop. A read failure hands
    control to ``_reconnect()``, which retries the handshake at a flat
    interval until it succeeds; the read loop then resumes on the new
    transport. Frames go to the ``Dispatcher``; outbound requests go through
    the ``Publisher``; channels live in the ``SubscriptionRegistry``.

State machine:
    DISCONNECTED -> CONNECTING -> CONNECTED -> RECONNECTING -> CONNECTED ...
    ``close()`` moves to CLOSED from any state and suppresses reconnection.

Design Decisions:
    - At most one reconnection sequence runs at a time; extra triggers while
      one is in flight return immediately
    - Background faults are only logged; ``connect`` and ``send`` raise
    - Active subscriptions are replayed after a reconnect unless disabled in
      ``WsConfig``
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import websockets

from ...config import WS_ORIGIN, WS_SUBPROTOCOL, WsConfig, build_ws_url, chain_segment, ws_headers
from ...core import (
    Chain,
    ConnectionState,
    StreamConnectionError,
    ValidationError,
    WsDataType,
)
from ...models import SubscriptionFilter, SubscriptionRequest
from .channel import Channel
from .dispatcher import Dispatcher
from .publisher import Publisher
from .registry import SubscriptionRegistry

logger = logging.getLogger(__name__)


def _status_code(exc: BaseException) -> int | None:
    """HTTP status of a rejected handshake, if the server answered."""
    response = getattr(exc, "response", None)
    if response is not None:
        return getattr(response, "status_code", None)
    return getattr(exc, "status_code", None)


class WsClient:
    """Birdeye streaming client for one chain and credential."""

    def __init__(
        self,
        chain: Chain | str,
        api_key: str,
        *,
        config: WsConfig | None = None,
    ) -> None:
        if not api_key:
            raise ValidationError("api key is required")
        self.chain = chain_segment(chain)
        self.config = config or WsConfig()
        self.url = build_ws_url(self.chain, api_key)

        self.registry = SubscriptionRegistry(channel_capacity=self.config.channel_capacity)
        self.dispatcher = Dispatcher(self.registry, delivery_timeout=self.config.delivery_timeout)
        self.publisher = Publisher(lambda: self._ws)

        self._ws: Any = None
        self._state = ConnectionState.DISCONNECTED
        self._read_task: asyncio.Task[None] | None = None
        self._connected = asyncio.Event()
        self._closing = False
        self._reconnecting = False
        self.reconnect_attempts = 0

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state == ConnectionState.CONNECTED and self._ws is not None

    @property
    def is_reconnecting(self) -> bool:
        return self._reconnecting

    @property
    def _safe_url(self) -> str:
        # Never log the credential
        return self.url.split("?", 1)[0]

    # ----------------------
    # Lifecycle
    # ----------------------
    async def connect(self) -> None:
        """Open the connection and start the read loop.

        Does not retry: a failed handshake raises immediately.

        Raises:
            StreamConnectionError: Handshake failed; ``status_code`` is set when
                the server rejected the upgrade.
        """
        if self._state in (
            ConnectionState.CONNECTING,
            ConnectionState.CONNECTED,
            ConnectionState.RECONNECTING,
        ):
            return
        self._closing = False
        self._state = ConnectionState.CONNECTING
        try:
            await self._open()
        except StreamConnectionError:
            self._state = ConnectionState.CLOSED if self._closing else ConnectionState.DISCONNECTED
            raise
        if self._closing:
            # close() ran during the handshake
            await self._discard_transport()
            self._state = ConnectionState.CLOSED
            return
        if self._read_task is None or self._read_task.done():
            self._read_task = asyncio.create_task(self._read_loop())

    async def _open(self) -> None:
        """Perform one handshake and install the new transport."""
        try:
            ws = await websockets.connect(
                self.url,
                origin=WS_ORIGIN,
                subprotocols=[WS_SUBPROTOCOL],
                additional_headers=ws_headers(),
                **self.config.connect_kwargs(),
            )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            status = _status_code(e)
            message = f"Failed to connect to websocket {self._safe_url}: {e}"
            if status is not None:
                message += f", http status code: {status}"
            raise StreamConnectionError(message, status_code=status) from e

        self._ws = ws
        self._state = ConnectionState.CONNECTED
        self._connected.set()
        logger.info(f"Connected to {self._safe_url}")

    async def close(self) -> None:
        """Close the connection and end the session.

        Stops the read loop, cancels pending deliveries, closes the transport
        and every registered channel, and forgets tracked subscriptions. No
        reconnection follows; a later ``connect()`` starts a fresh session.
        """
        self._closing = True
        self._connected.clear()

        task, self._read_task = self._read_task, None
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

        await self.dispatcher.aclose()

        ws, self._ws = self._ws, None
        if ws is not None:
            try:
                await ws.close()
            except Exception as e:
                logger.warning(f"Error closing websocket: {e}")

        self.registry.close_all()
        self.publisher.forget()
        self._state = ConnectionState.CLOSED
        logger.info("WebSocket client closed")

    # ----------------------
    # Read loop & reconnection
    # ----------------------
    async def _read_loop(self) -> None:
        """Read frames until closed; read errors trigger reconnection."""
        while not self._closing:
            await self._connected.wait()
            ws = self._ws
            if ws is None:
                # Transport swapped out between wake-up and read
                await asyncio.sleep(0)
                continue
            try:
                frame = await ws.recv()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                if self._closing:
                    break
                logger.error(f"WebSocket read error: {e!r}")
                await self._reconnect()
                continue
            self.dispatcher.handle_frame(frame)

    async def _reconnect(self) -> bool:
        """Re-establish the transport, retrying at a flat interval.

        Returns True if this call ran the sequence and reconnected, False if
        another sequence was already in flight or the client is closing.
        """
        if self._reconnecting or self._closing:
            return False
        self._reconnecting = True
        self._connected.clear()
        self._state = ConnectionState.RECONNECTING

        stale, self._ws = self._ws, None
        if stale is not None:
            try:
                await stale.close()
            except Exception as e:
                logger.debug(f"Error closing stale websocket: {e}")

        try:
            attempt = 0
            while not self._closing:
                attempt += 1
                self.reconnect_attempts += 1
                logger.info(f"Retrying to connect to websocket (attempt {attempt})...")
                try:
                    await self._open()
                except StreamConnectionError as e:
                    logger.error(
                        f"Reconnect attempt {attempt} failed: {e}; "
                        f"retrying in {self.config.reconnect_delay:g}s"
                    )
                    self._state = ConnectionState.RECONNECTING
                    await asyncio.sleep(self.config.reconnect_delay)
                    continue

                if self._closing:
                    await self._discard_transport()
                    return False
                logger.info(f"Reconnected to websocket after {attempt} attempt(s)")
                if self.config.resubscribe_on_reconnect:
                    try:
                        await self.publisher.replay()
                    except Exception as e:
                        logger.error(f"Failed to replay subscriptions: {e}")
                return True
            return False
        finally:
            self._reconnecting = False

    async def _discard_transport(self) -> None:
        ws, self._ws = self._ws, None
        self._connected.clear()
        if ws is not None:
            try:
                await ws.close()
            except Exception as e:
                logger.debug(f"Error closing websocket: {e}")

    # ----------------------
    # Subscriptions & channels
    # ----------------------
    async def send(self, request: SubscriptionRequest) -> None:
        """Send a subscribe/unsubscribe request (fire-and-forget).

        Raises:
            NotConnectedError: No live transport (never connected, closed, or
                reconnecting).
        """
        await self.publisher.send(request)

    async def subscribe(self, data: SubscriptionFilter) -> SubscriptionRequest:
        """Send the subscribe request for a filter and return it."""
        request = SubscriptionRequest.subscribe(data)
        await self.send(request)
        return request

    async def unsubscribe(self, data: SubscriptionFilter) -> SubscriptionRequest:
        request = SubscriptionRequest.unsubscribe(data)
        await self.send(request)
        return request

    def new_channel(self, category: WsDataType | str) -> Channel:
        """Register a new channel receiving every event of ``category``."""
        return self.registry.new_channel(category)

    def remove_channel(self, channel: Channel) -> bool:
        """Unregister and close a channel; False if it was not registered."""
        return self.registry.remove_channel(channel)

    async def __aenter__(self) -> WsClient:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
