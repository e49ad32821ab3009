"""Core components."""

from .enums import (
    Chain,
    ChartType,
    ConnectionState,
    Currency,
    QueryType,
    WsDataType,
    WsSubType,
)
from .exceptions import (
    BadRequestError,
    BirdeyeError,
    ChannelClosed,
    ForbiddenError,
    InternalServerError,
    MessageDecodeError,
    NotConnectedError,
    ProviderError,
    RateLimitError,
    StreamConnectionError,
    UnauthorizedError,
    UnprocessableEntityError,
    ValidationError,
    error_for_status,
)

__all__ = [
    "Chain",
    "ChartType",
    "ConnectionState",
    "Currency",
    "QueryType",
    "WsDataType",
    "WsSubType",
    "BirdeyeError",
    "ProviderError",
    "StreamConnectionError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "UnprocessableEntityError",
    "RateLimitError",
    "InternalServerError",
    "NotConnectedError",
    "MessageDecodeError",
    "ChannelClosed",
    "ValidationError",
    "error_for_status",
]
