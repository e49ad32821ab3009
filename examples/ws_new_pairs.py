#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from birdeye.data import (
    NewPairSubscription,
    TokenNewListingSubscription,
    WsClient,
    api_key_from_env,
)
from birdeye.data.core import Chain, WsDataType


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Stream new pairs and token listings")
    p.add_argument("--min-liquidity", type=float, default=100.0)
    p.add_argument("--meme", action="store_true", help="include meme platform listings")
    p.add_argument("chain", nargs="?", default="SOLANA", choices=[c.name for c in Chain])
    return p.parse_args()


async def print_pairs(channel) -> None:
    async for pair in channel:
        base = pair.base.symbol if pair.base else "?"
        quote = pair.quote.symbol if pair.quote else "?"
        print(f"NEW PAIR    | {pair.address} | {base}/{quote} | source={pair.source}")


async def print_listings(channel) -> None:
    async for token in channel:
        print(f"NEW LISTING | {token.address} | {token.symbol} | liquidity={token.liquidity}")


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO)

    async with WsClient(Chain[args.chain], api_key_from_env()) as client:
        pairs = client.new_channel(WsDataType.NEW_PAIR_DATA)
        listings = client.new_channel(WsDataType.TOKEN_NEW_LISTING_DATA)
        await client.subscribe(NewPairSubscription(min_liquidity=args.min_liquidity))
        await client.subscribe(
            TokenNewListingSubscription(
                meme_platform_enabled=args.meme or None,
                min_liquidity=args.min_liquidity,
            )
        )
        await asyncio.gather(print_pairs(pairs), print_listings(listings))


if __name__ == "__main__":
    asyncio.run(main())
