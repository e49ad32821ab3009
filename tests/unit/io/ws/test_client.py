"""Precise unit tests for WsClient.

Tests focus on connection management, reconnection, and read-loop handling.
"""

from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from birdeye.data.config import WS_ORIGIN, WS_SUBPROTOCOL, WsConfig
from birdeye.data.core import (
    Chain,
    ChartType,
    ConnectionState,
    NotConnectedError,
    StreamConnectionError,
    ValidationError,
    WsDataType,
)
from birdeye.data.io.ws.client import WsClient
from birdeye.data.models import PriceData, PriceSubscription


def make_client(**config) -> WsClient:
    return WsClient(Chain.SOLANA, "secret-key", config=WsConfig(**config))


class TestWsClientInitialization:
    """Test WsClient initialization."""

    def test_init(self):
        client = make_client()

        assert client.url == "wss://public-api.birdeye.so/socket/solana?x-api-key=secret-key"
        assert client.chain == "solana"
        assert client.state == ConnectionState.DISCONNECTED
        assert not client.is_connected

    def test_init_defaults(self):
        client = WsClient("ethereum", "k")

        assert client.config.reconnect_delay == 5.0
        assert client.config.delivery_timeout == 10.0
        assert client.config.channel_capacity == 100
        assert client.new_channel(WsDataType.PRICE_DATA).maxsize == 100

    def test_missing_api_key_rejected(self):
        with pytest.raises(ValidationError):
            WsClient(Chain.SOLANA, "")


class TestWsClientConnection:
    """Test WsClient connection management."""

    @pytest.mark.asyncio
    async def test_connect_success(self, transport_factory):
        client = make_client()
        transport = transport_factory()

        with patch("websockets.connect", new_callable=AsyncMock, return_value=transport) as connect:
            await client.connect()

        assert client.state == ConnectionState.CONNECTED
        assert client.is_connected
        assert client._ws is transport
        args, kwargs = connect.call_args
        assert args[0] == client.url
        assert kwargs["origin"] == WS_ORIGIN
        assert kwargs["subprotocols"] == [WS_SUBPROTOCOL]
        assert kwargs["additional_headers"]["Sec-WebSocket-Origin"] == WS_ORIGIN
        assert kwargs["ping_interval"] == 30
        await client.close()

    @pytest.mark.asyncio
    async def test_connect_when_connected_is_noop(self, transport_factory):
        client = make_client()

        with patch(
            "websockets.connect", new_callable=AsyncMock, return_value=transport_factory()
        ) as connect:
            await client.connect()
            await client.connect()

        assert connect.call_count == 1
        await client.close()

    @pytest.mark.asyncio
    async def test_connect_failure_raises(self):
        client = make_client()

        with patch("websockets.connect", new_callable=AsyncMock, side_effect=OSError("refused")):
            with pytest.raises(StreamConnectionError, match="Failed to connect") as exc_info:
                await client.connect()

        assert exc_info.value.status_code is None
        assert "secret-key" not in str(exc_info.value)
        assert client.state == ConnectionState.DISCONNECTED
        assert client._read_task is None

    @pytest.mark.asyncio
    async def test_connect_failure_reports_http_status(self):
        class Rejected(Exception):
            def __init__(self) -> None:
                super().__init__("server rejected WebSocket connection: HTTP 401")
                self.response = SimpleNamespace(status_code=401)

        client = make_client()

        with patch("websockets.connect", new_callable=AsyncMock, side_effect=Rejected()):
            with pytest.raises(StreamConnectionError, match="http status code: 401") as exc_info:
                await client.connect()

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_close(self, transport_factory):
        client = make_client()
        transport = transport_factory()
        channel = client.new_channel(WsDataType.PRICE_DATA)

        with patch("websockets.connect", new_callable=AsyncMock, return_value=transport):
            await client.connect()
        read_task = client._read_task

        await client.close()

        assert client.state == ConnectionState.CLOSED
        assert transport.closed
        assert read_task.done()
        assert channel.closed
        assert not client.is_connected

    @pytest.mark.asyncio
    async def test_close_when_not_connected(self):
        client = make_client()

        await client.close()  # Should not raise

        assert client.state == ConnectionState.CLOSED

    @pytest.mark.asyncio
    async def test_context_manager(self, transport_factory):
        with patch("websockets.connect", new_callable=AsyncMock, return_value=transport_factory()):
            async with make_client() as client:
                assert client.is_connected

        assert client.state == ConnectionState.CLOSED


class TestWsClientStreaming:
    """Test frames flowing from the transport to channels."""

    @pytest.mark.asyncio
    async def test_read_loop_delivers_decoded_events(self, transport_factory, price_frame):
        client = make_client()
        transport = transport_factory()
        channel = client.new_channel(WsDataType.PRICE_DATA)

        with patch("websockets.connect", new_callable=AsyncMock, return_value=transport):
            await client.connect()

        transport.feed('{"type":"WELCOME","data":null}', b"binary", "garbage", price_frame)
        event = await asyncio.wait_for(channel.get(), timeout=1)

        assert isinstance(event, PriceData)
        assert event.address == "X"
        assert channel.empty()
        await client.close()

    @pytest.mark.asyncio
    async def test_subscribe_sends_request(self, transport_factory):
        client = make_client()
        transport = transport_factory()

        with patch("websockets.connect", new_callable=AsyncMock, return_value=transport):
            await client.connect()

        request = await client.subscribe(PriceSubscription(chart_type=ChartType.M5, address="X"))
        await client.unsubscribe(PriceSubscription(chart_type=ChartType.M5, address="X"))

        assert request.type.value == "SUBSCRIBE_PRICE"
        assert [json.loads(s)["type"] for s in transport.sent] == [
            "SUBSCRIBE_PRICE",
            "UNSUBSCRIBE_PRICE",
        ]
        assert client.publisher.active_subscriptions == []
        await client.close()

    @pytest.mark.asyncio
    async def test_send_when_not_connected_raises(self):
        client = make_client()

        with pytest.raises(NotConnectedError):
            await client.subscribe(PriceSubscription(chart_type=ChartType.M1, address="X"))

    @pytest.mark.asyncio
    async def test_remove_channel(self):
        client = make_client()
        channel = client.new_channel(WsDataType.NEW_PAIR_DATA)

        assert client.remove_channel(channel) is True
        assert client.remove_channel(channel) is False
        assert channel.closed


class TestWsClientReconnection:
    """Test WsClient reconnection logic."""

    @pytest.mark.asyncio
    async def test_read_error_reconnects_after_failed_attempts(
        self, transport_factory, price_frame, wait_until
    ):
        """Two failed handshakes then success: three attempts, spaced by the delay."""
        delay = 0.05
        client = make_client(reconnect_delay=delay)
        first = transport_factory()
        second = transport_factory()
        channel = client.new_channel(WsDataType.PRICE_DATA)

        with patch("websockets.connect", new_callable=AsyncMock, return_value=first):
            await client.connect()
        await client.subscribe(PriceSubscription(chart_type=ChartType.M1, address="X"))

        loop = asyncio.get_running_loop()
        attempts: list[float] = []
        outcomes: list[object] = [OSError("down"), OSError("still down"), second]

        async def fake_connect(*args, **kwargs):
            attempts.append(loop.time())
            outcome = outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        with patch("websockets.connect", new=fake_connect):
            first.fail()
            await wait_until(lambda: client.is_connected and client._ws is second, timeout=2)

        assert len(attempts) == 3
        assert attempts[1] - attempts[0] >= delay * 0.8
        assert attempts[2] - attempts[1] >= delay * 0.8
        assert client.reconnect_attempts == 3
        assert first.closed

        # Subscription replayed on the new transport
        assert [json.loads(s)["type"] for s in second.sent] == ["SUBSCRIBE_PRICE"]

        # Read loop resumed on the new transport
        second.feed(price_frame)
        event = await asyncio.wait_for(channel.get(), timeout=1)
        assert event.address == "X"
        await client.close()

    @pytest.mark.asyncio
    async def test_no_replay_when_disabled(self, transport_factory, wait_until):
        client = make_client(reconnect_delay=0.01, resubscribe_on_reconnect=False)
        first, second = transport_factory(), transport_factory()

        with patch("websockets.connect", new_callable=AsyncMock, return_value=first):
            await client.connect()
        await client.subscribe(PriceSubscription(chart_type=ChartType.M1, address="X"))

        with patch("websockets.connect", new_callable=AsyncMock, return_value=second):
            first.fail()
            await wait_until(lambda: client._ws is second)

        assert second.sent == []
        await client.close()

    @pytest.mark.asyncio
    async def test_single_reconnection_in_flight(self, transport_factory):
        """Concurrent triggers while a sequence runs are absorbed."""
        client = make_client(reconnect_delay=0.01)
        gate = asyncio.Event()
        calls = 0

        async def fake_connect(*args, **kwargs):
            nonlocal calls
            calls += 1
            await gate.wait()
            return transport_factory()

        with patch("websockets.connect", new=fake_connect):
            tasks = [asyncio.create_task(client._reconnect()) for _ in range(5)]
            await asyncio.sleep(0.02)

            assert calls == 1
            assert client.is_reconnecting
            assert client.state == ConnectionState.RECONNECTING

            gate.set()
            results = await asyncio.gather(*tasks)

        assert results.count(True) == 1
        assert calls == 1
        assert client.is_connected
        assert not client.is_reconnecting
        await client.close()

    @pytest.mark.asyncio
    async def test_close_suppresses_reconnection(self, transport_factory):
        client = make_client(reconnect_delay=0.01)
        transport = transport_factory()

        with patch("websockets.connect", new_callable=AsyncMock, return_value=transport) as connect:
            await client.connect()
            await client.close()
            transport.fail()
            await asyncio.sleep(0.05)

        assert connect.call_count == 1
        assert client.state == ConnectionState.CLOSED
        assert await client._reconnect() is False

    @pytest.mark.asyncio
    async def test_close_during_reconnect_stops_retrying(self, transport_factory, wait_until):
        client = make_client(reconnect_delay=0.01)
        transport = transport_factory()

        with patch("websockets.connect", new_callable=AsyncMock, return_value=transport):
            await client.connect()

        failing = AsyncMock(side_effect=OSError("down"))
        with patch("websockets.connect", new=failing):
            transport.fail()
            await wait_until(lambda: failing.call_count >= 2)
            await client.close()
            calls = failing.call_count
            await asyncio.sleep(0.05)

        assert failing.call_count == calls
        assert client.state == ConnectionState.CLOSED
        assert not client.is_reconnecting


class TestWsClientSessions:
    """Test close() boundaries between sessions."""

    @pytest.mark.asyncio
    async def test_close_forgets_subscriptions(self, transport_factory, wait_until):
        """A reconnect after close() and connect() replays only the new session."""
        client = make_client(reconnect_delay=0.01)
        first, second, third = transport_factory(), transport_factory(), transport_factory()

        with patch("websockets.connect", new_callable=AsyncMock, return_value=first):
            await client.connect()
        await client.subscribe(PriceSubscription(chart_type=ChartType.M1, address="OLD"))
        await client.close()

        assert client.publisher.active_subscriptions == []

        with patch("websockets.connect", new_callable=AsyncMock, return_value=second):
            await client.connect()

        with patch("websockets.connect", new_callable=AsyncMock, return_value=third):
            second.fail()
            await wait_until(lambda: client._ws is third and client.is_connected)

        assert third.sent == []
        await client.close()

    @pytest.mark.asyncio
    async def test_close_during_handshake_wins(self, transport_factory):
        """close() while connect() is mid-handshake leaves the client closed."""
        client = make_client()
        transport = transport_factory()
        gate = asyncio.Event()

        async def slow_connect(*args, **kwargs):
            await gate.wait()
            return transport

        with patch("websockets.connect", new=slow_connect):
            connecting = asyncio.create_task(client.connect())
            await asyncio.sleep(0.01)
            assert client.state == ConnectionState.CONNECTING

            await client.close()
            gate.set()
            await connecting

        assert client.state == ConnectionState.CLOSED
        assert client._ws is None
        assert transport.closed
        assert client._read_task is None
        assert not client.is_connected

    @pytest.mark.asyncio
    async def test_handshake_failure_after_close_stays_closed(self):
        client = make_client()
        gate = asyncio.Event()

        async def failing_connect(*args, **kwargs):
            await gate.wait()
            raise OSError("refused")

        with patch("websockets.connect", new=failing_connect):
            connecting = asyncio.create_task(client.connect())
            await asyncio.sleep(0.01)
            await client.close()
            gate.set()
            with pytest.raises(StreamConnectionError):
                await connecting

        assert client.state == ConnectionState.CLOSED
