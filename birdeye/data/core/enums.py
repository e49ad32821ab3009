"""Core enumerations for the Birdeye wire vocabulary.

Architecture:
    Every tag that travels over the wire (chains, chart intervals, subscription
    actions, inbound data types) is modelled as a string enum so values can be
    serialized directly and compared against raw JSON strings.

Key Types:
    - Chain: Network segment used in URLs and the ``x-chain`` header
    - ChartType: Candle interval for price subscriptions
    - WsSubType: Outbound subscribe/unsubscribe action tags
    - WsDataType: Inbound message type tags
    - ConnectionState: Lifecycle of the streaming connection
"""

from enum import Enum
from typing import Optional

_SECONDS_MAP = {
    "1m": 60,
    "3m": 180,
    "5m": 300,
    "15m": 900,
    "30m": 1800,
    "1H": 3600,
    "2H": 7200,
    "4H": 14400,
    "6H": 21600,
    "8H": 28800,
    "12H": 43200,
    "1D": 86400,
    "3D": 259200,
    "1W": 604800,
    "1M": 2592000,  # 30 days approximation
}


class Chain(str, Enum):
    """Networks served by the API."""

    SOLANA = "solana"
    ETHEREUM = "ethereum"
    ARBITRUM = "arbitrum"
    AVALANCHE = "avalanche"
    BSC = "bsc"
    OPTIMISM = "optimism"
    POLYGON = "polygon"
    BASE = "base"
    ZKSYNC = "zksync"
    SUI = "sui"


class ChartType(str, Enum):
    """Chart intervals. Hours and longer use upper-case units on the wire."""

    M1 = "1m"
    M3 = "3m"
    M5 = "5m"
    M15 = "15m"
    M30 = "30m"

    H1 = "1H"
    H2 = "2H"
    H4 = "4H"
    H6 = "6H"
    H8 = "8H"
    H12 = "12H"

    D1 = "1D"
    D3 = "3D"
    W1 = "1W"
    MO1 = "1M"

    @property
    def seconds(self) -> int:
        """Number of seconds in this interval."""
        return _SECONDS_MAP[self.value]

    @classmethod
    def from_str(cls, value: str) -> Optional["ChartType"]:
        """Get chart type from string value. Returns None if no match."""
        try:
            return cls(value)
        except ValueError:
            return None


class QueryType(str, Enum):
    """Subscription query mode."""

    SIMPLE = "simple"
    COMPLEX = "complex"


class Currency(str, Enum):
    """Quote currency for price subscriptions."""

    USD = "usd"
    PAIR = "pair"


class WsDataType(str, Enum):
    """Type tag of inbound stream messages.

    WELCOME and ERROR are control messages; every other member names a data
    category that subscribers can register channels for.
    """

    WELCOME = "WELCOME"
    ERROR = "ERROR"
    PRICE_DATA = "PRICE_DATA"
    TXS_DATA = "TXS_DATA"
    BASE_QUOTE_PRICE_DATA = "BASE_QUOTE_PRICE_DATA"
    TOKEN_NEW_LISTING_DATA = "TOKEN_NEW_LISTING_DATA"
    NEW_PAIR_DATA = "NEW_PAIR_DATA"
    TXS_LARGE_TRADE_DATA = "TXS_LARGE_TRADE_DATA"
    WALLET_TXS_DATA = "WALLET_TXS_DATA"

    @property
    def is_control(self) -> bool:
        """True for tags that never carry a deliverable payload."""
        return self in (WsDataType.WELCOME, WsDataType.ERROR)

    @classmethod
    def from_str(cls, value: str) -> Optional["WsDataType"]:
        """Get data type from a raw tag. Returns None if unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


class WsSubType(str, Enum):
    """Action tag of outbound subscription requests."""

    SUBSCRIBE_PRICE = "SUBSCRIBE_PRICE"
    SUBSCRIBE_TXS = "SUBSCRIBE_TXS"
    SUBSCRIBE_BASE_QUOTE_PRICE = "SUBSCRIBE_BASE_QUOTE_PRICE"
    SUBSCRIBE_TOKEN_NEW_LISTING = "SUBSCRIBE_TOKEN_NEW_LISTING"
    SUBSCRIBE_NEW_PAIR = "SUBSCRIBE_NEW_PAIR"
    SUBSCRIBE_LARGE_TRADE_TXS = "SUBSCRIBE_LARGE_TRADE_TXS"
    SUBSCRIBE_WALLET_TXS = "SUBSCRIBE_WALLET_TXS"

    UNSUBSCRIBE_PRICE = "UNSUBSCRIBE_PRICE"
    UNSUBSCRIBE_TXS = "UNSUBSCRIBE_TXS"
    UNSUBSCRIBE_BASE_QUOTE_PRICE = "UNSUBSCRIBE_BASE_QUOTE_PRICE"
    UNSUBSCRIBE_TOKEN_NEW_LISTING = "UNSUBSCRIBE_TOKEN_NEW_LISTING"
    UNSUBSCRIBE_NEW_PAIR = "UNSUBSCRIBE_NEW_PAIR"
    UNSUBSCRIBE_LARGE_TRADE_TXS = "UNSUBSCRIBE_LARGE_TRADE_TXS"
    UNSUBSCRIBE_WALLET_TXS = "UNSUBSCRIBE_WALLET_TXS"

    @property
    def is_subscribe(self) -> bool:
        return self.value.startswith("SUBSCRIBE_")

    @property
    def counterpart(self) -> "WsSubType":
        """The unsubscribe tag for a subscribe tag, and vice versa."""
        if self.is_subscribe:
            return WsSubType("UN" + self.value)
        return WsSubType(self.value[2:])

    @property
    def category(self) -> WsDataType:
        """Inbound data type delivered for this subscription."""
        key = self if self.is_subscribe else self.counterpart
        return _SUB_TO_DATA[key]


_SUB_TO_DATA = {
    WsSubType.SUBSCRIBE_PRICE: WsDataType.PRICE_DATA,
    WsSubType.SUBSCRIBE_TXS: WsDataType.TXS_DATA,
    WsSubType.SUBSCRIBE_BASE_QUOTE_PRICE: WsDataType.BASE_QUOTE_PRICE_DATA,
    WsSubType.SUBSCRIBE_TOKEN_NEW_LISTING: WsDataType.TOKEN_NEW_LISTING_DATA,
    WsSubType.SUBSCRIBE_NEW_PAIR: WsDataType.NEW_PAIR_DATA,
    WsSubType.SUBSCRIBE_LARGE_TRADE_TXS: WsDataType.TXS_LARGE_TRADE_DATA,
    WsSubType.SUBSCRIBE_WALLET_TXS: WsDataType.WALLET_TXS_DATA,
}


class ConnectionState(str, Enum):
    """Lifecycle of the streaming connection."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    RECONNECTING = "reconnecting"
    CLOSED = "closed"
