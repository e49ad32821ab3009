"""Data models for streaming payloads and subscription requests.

Architecture:
    This module exports the Pydantic v2 models used throughout the library.
    Payload models are immutable (frozen=True), expose snake_case attributes
    and accept the wire's camelCase keys through aliases.

Model Categories:
    - Prices: PriceData, BaseQuotePriceData
    - Transactions: TxsData, LargeTradeTxsData, WalletTxsData
    - Listings: TokenNewListingData, NewPairData
    - Requests: SubscriptionRequest and per-category filters
"""

from .listings import NewPairData, NewPairTokenInfo, TokenNewListingData
from .price import BaseQuotePriceData, PriceData
from .subscriptions import (
    BaseQuotePriceSubscription,
    ComplexSubscription,
    LargeTradeSubscription,
    NewPairSubscription,
    PriceSubscription,
    SubscriptionFilter,
    SubscriptionRequest,
    TokenNewListingSubscription,
    TxsSubscription,
    WalletTxsSubscription,
    join_query,
)
from .transactions import (
    LargeTradeTokenInfo,
    LargeTradeTxsData,
    TxsData,
    TxTokenInfo,
    WalletTokenInfo,
    WalletTxsData,
)

__all__ = [
    "PriceData",
    "BaseQuotePriceData",
    "TxsData",
    "TxTokenInfo",
    "LargeTradeTxsData",
    "LargeTradeTokenInfo",
    "WalletTxsData",
    "WalletTokenInfo",
    "TokenNewListingData",
    "NewPairData",
    "NewPairTokenInfo",
    "SubscriptionRequest",
    "SubscriptionFilter",
    "PriceSubscription",
    "TxsSubscription",
    "ComplexSubscription",
    "BaseQuotePriceSubscription",
    "TokenNewListingSubscription",
    "NewPairSubscription",
    "LargeTradeSubscription",
    "WalletTxsSubscription",
    "join_query",
]
