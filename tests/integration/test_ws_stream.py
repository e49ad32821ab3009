"""Live streaming smoke tests against the Birdeye socket."""

import asyncio
import json

import pytest

from birdeye.data import (
    Chain,
    ChartType,
    Currency,
    LargeTradeSubscription,
    LargeTradeTxsData,
    NewPairSubscription,
    PriceData,
    PriceSubscription,
    WsClient,
    WsDataType,
)

SOL = "So11111111111111111111111111111111111111112"


@pytest.mark.asyncio
async def test_price_stream_delivers_price_data(api_key):
    async with WsClient(Chain.SOLANA, api_key) as client:
        channel = client.new_channel(WsDataType.PRICE_DATA)
        await client.subscribe(
            PriceSubscription(chart_type=ChartType.M1, address=SOL, currency=Currency.USD)
        )
        event = await asyncio.wait_for(channel.get(), timeout=120)

    assert isinstance(event, PriceData)
    assert event.address == SOL


@pytest.mark.asyncio
async def test_new_pair_subscription_is_accepted(api_key):
    async with WsClient(Chain.SOLANA, api_key) as client:
        await client.subscribe(NewPairSubscription(min_liquidity=100, max_liquidity=1000))
        await asyncio.sleep(1)
        assert client.is_connected


@pytest.mark.asyncio
async def test_large_trade_envelope_subscription_delivers(api_key):
    """Large-trade filters are sent as {"type", "data"}; the server must answer with trades."""
    async with WsClient(Chain.SOLANA, api_key) as client:
        channel = client.new_channel(WsDataType.TXS_LARGE_TRADE_DATA)
        request = await client.subscribe(LargeTradeSubscription(min_volume=1000))
        event = await asyncio.wait_for(channel.get(), timeout=180)

    assert json.loads(request.to_wire()) == {
        "type": "SUBSCRIBE_LARGE_TRADE_TXS",
        "data": {"min_volume": 1000.0},
    }
    assert isinstance(event, LargeTradeTxsData)
