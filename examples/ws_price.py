#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from birdeye.data import PriceSubscription, WsClient, api_key_from_env
from birdeye.data.core import Chain, ChartType, WsDataType


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Stream Birdeye price candles for a token")
    p.add_argument("address", nargs="?", default="So11111111111111111111111111111111111111112")
    p.add_argument("chart", nargs="?", default="1m")
    p.add_argument("chain", nargs="?", default="SOLANA", choices=[c.name for c in Chain])
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    client = WsClient(Chain[args.chain], api_key_from_env())
    channel = client.new_channel(WsDataType.PRICE_DATA)
    async with client:
        await client.subscribe(PriceSubscription(chart_type=ChartType(args.chart), address=args.address))
        async for candle in channel:
            print(
                f"{candle.timestamp.isoformat()} | {candle.symbol or candle.address} | "
                f"o={candle.open} h={candle.high} l={candle.low} c={candle.close} v={candle.volume}"
            )


if __name__ == "__main__":
    asyncio.run(main())
