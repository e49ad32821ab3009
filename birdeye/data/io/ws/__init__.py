"""WebSocket streaming: connection manager, dispatcher, registry, publisher."""

from .channel import Channel
from .client import WsClient
from .dispatcher import Dispatcher
from .messages import (
    PAYLOAD_MODELS,
    EventPayload,
    InboundMessage,
    ServerError,
    Unrecognized,
    Welcome,
    decode_frame,
)
from .publisher import Publisher
from .registry import SubscriptionRegistry

__all__ = [
    "Channel",
    "Dispatcher",
    "EventPayload",
    "InboundMessage",
    "PAYLOAD_MODELS",
    "Publisher",
    "ServerError",
    "SubscriptionRegistry",
    "Unrecognized",
    "Welcome",
    "WsClient",
    "decode_frame",
]
