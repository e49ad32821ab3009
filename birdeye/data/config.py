"""Shared Birdeye endpoint constants and client configuration.

This module centralizes URLs, negotiation headers and tunables used by the
REST transport and the streaming client so both stay small and focused.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from .core import Chain, ValidationError

BASE_URL = "https://public-api.birdeye.so"

# Streaming endpoint: wss://<host>/socket/<chain>?x-api-key=<key>
WS_BASE_URL = "wss://public-api.birdeye.so/socket"
WS_ORIGIN = "ws://public-api.birdeye.so"
WS_SUBPROTOCOL = "echo-protocol"
WS_API_KEY_PARAM = "x-api-key"

REST_API_KEY_HEADER = "X-API-KEY"
REST_CHAIN_HEADER = "x-chain"

API_KEY_ENV = "BIRDEYE_API_KEY"

# Server-side filter floors documented for subscription requests
NEW_LISTING_MIN_LIQUIDITY_FLOOR = 10.0
LARGE_TRADE_MIN_VOLUME_FLOOR = 1000.0

# REST request budgets per plan: (capacity, period seconds)
RATE_LIMITS = {
    "standard": (1, 1.0),
    "starter": (15, 1.0),
    "premium": (1000, 60.0),
    "business": (1500, 60.0),
}


def chain_segment(chain: Chain | str) -> str:
    """Normalize a chain enum or raw string to its URL segment."""
    if isinstance(chain, Chain):
        return chain.value
    return str(chain).strip().lower()


def build_ws_url(chain: Chain | str, api_key: str) -> str:
    """Build the streaming URL for a chain and credential.

    Examples:
        >>> build_ws_url(Chain.SOLANA, "abc")
        'wss://public-api.birdeye.so/socket/solana?x-api-key=abc'
    """
    if not api_key:
        raise ValidationError("api key is required")
    return f"{WS_BASE_URL}/{chain_segment(chain)}?{WS_API_KEY_PARAM}={quote(api_key, safe='')}"


def ws_headers() -> dict[str, str]:
    """Extra negotiation headers sent with the upgrade request.

    ``Origin`` and the sub-protocol go through websockets' own ``origin`` and
    ``subprotocols`` arguments.
    """
    return {"Sec-WebSocket-Origin": WS_ORIGIN}


def api_key_from_env(var: str = API_KEY_ENV) -> str:
    """Read the API key from the environment; empty string when unset."""
    return os.environ.get(var, "").strip()


@dataclass
class WsConfig:
    """Tunables for the streaming client."""

    reconnect_delay: float = 5.0  # flat interval, no backoff growth
    delivery_timeout: float = 10.0
    channel_capacity: int = 100
    ping_interval: float | None = 30
    ping_timeout: float | None = 10
    close_timeout: float | None = 10
    open_timeout: float | None = 10
    max_size: int | None = None  # bytes; None = websockets default
    max_queue: int | None = 1024
    resubscribe_on_reconnect: bool = True

    def connect_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``websockets.connect``."""
        kwargs: dict[str, Any] = {
            "ping_interval": self.ping_interval,
            "ping_timeout": self.ping_timeout,
            "close_timeout": self.close_timeout,
            "open_timeout": self.open_timeout,
        }
        # Only include size/queue if not None to keep library defaults
        if self.max_size is not None:
            kwargs["max_size"] = self.max_size
        if self.max_queue is not None:
            kwargs["max_queue"] = self.max_queue
        return kwargs
