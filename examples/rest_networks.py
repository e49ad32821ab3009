#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from birdeye.data import RateLimiter, RESTTransport, api_key_from_env


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List networks served by the Birdeye API")
    p.add_argument("plan", nargs="?", default="standard")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    async with RESTTransport(api_key_from_env(), limiter=RateLimiter.for_plan(args.plan)) as rest:
        networks = await rest.supported_networks()
    print("=" * 40)
    for network in networks:
        print(network)
    print("=" * 40)


if __name__ == "__main__":
    asyncio.run(main())
