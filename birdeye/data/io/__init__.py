"""Transports: WebSocket streaming and REST."""

from .rest import HTTPClient, RateLimiter, RESTTransport
from .ws import Channel, Dispatcher, Publisher, SubscriptionRegistry, WsClient

__all__ = [
    "Channel",
    "Dispatcher",
    "HTTPClient",
    "Publisher",
    "RESTTransport",
    "RateLimiter",
    "SubscriptionRegistry",
    "WsClient",
]
