"""Birdeye Data - async streaming and REST client for Birdeye market data."""

from .config import WsConfig, api_key_from_env, build_ws_url
from .core import (
    BirdeyeError,
    Chain,
    ChannelClosed,
    ChartType,
    ConnectionState,
    Currency,
    MessageDecodeError,
    NotConnectedError,
    ProviderError,
    QueryType,
    RateLimitError,
    StreamConnectionError,
    ValidationError,
    WsDataType,
    WsSubType,
)
from .io import Channel, RateLimiter, RESTTransport, WsClient
from .models import (
    BaseQuotePriceData,
    BaseQuotePriceSubscription,
    ComplexSubscription,
    LargeTradeSubscription,
    LargeTradeTxsData,
    NewPairData,
    NewPairSubscription,
    PriceData,
    PriceSubscription,
    SubscriptionRequest,
    TokenNewListingData,
    TokenNewListingSubscription,
    TxsData,
    TxsSubscription,
    WalletTxsData,
    WalletTxsSubscription,
    join_query,
)

__version__ = "0.1.0"

__all__ = [
    # Clients
    "WsClient",
    "Channel",
    "RESTTransport",
    "RateLimiter",
    # Config
    "WsConfig",
    "api_key_from_env",
    "build_ws_url",
    # Enums
    "Chain",
    "ChartType",
    "ConnectionState",
    "Currency",
    "QueryType",
    "WsDataType",
    "WsSubType",
    # Events
    "PriceData",
    "BaseQuotePriceData",
    "TxsData",
    "LargeTradeTxsData",
    "WalletTxsData",
    "TokenNewListingData",
    "NewPairData",
    # Requests
    "SubscriptionRequest",
    "PriceSubscription",
    "TxsSubscription",
    "ComplexSubscription",
    "BaseQuotePriceSubscription",
    "TokenNewListingSubscription",
    "NewPairSubscription",
    "LargeTradeSubscription",
    "WalletTxsSubscription",
    "join_query",
    # Exceptions
    "BirdeyeError",
    "ProviderError",
    "StreamConnectionError",
    "RateLimitError",
    "NotConnectedError",
    "MessageDecodeError",
    "ChannelClosed",
    "ValidationError",
]
