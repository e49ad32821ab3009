"""Outbound subscription request models.

Architecture:
    A request is an envelope ``{"type": <action tag>, "data": <filter>}``.
    Each filter model knows the subscribe tag it belongs to, so callers can
    build requests with ``SubscriptionRequest.subscribe(filter)`` instead of
    pairing tags by hand. Filter invariants documented by the API (mutually
    exclusive addresses, min/max ordering, volume floors) are checked at
    construction time and surface as pydantic ``ValidationError``.

Design Decisions:
    - Unset optional bounds are omitted from the wire, not sent as null/zero
    - Complex queries carry no implied category; their action tag is explicit
"""

from __future__ import annotations

from typing import ClassVar, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..config import LARGE_TRADE_MIN_VOLUME_FLOOR, NEW_LISTING_MIN_LIQUIDITY_FLOOR
from ..core import ChartType, Currency, QueryType, WsDataType, WsSubType


def join_query(*clauses: str) -> str:
    """Join simple query clauses into one complex query."""
    return " OR ".join(clauses)


class PriceSubscription(BaseModel):
    """Price updates for a token or pair address."""

    subscribe_type: ClassVar[WsSubType] = WsSubType.SUBSCRIBE_PRICE

    query_type: QueryType = Field(QueryType.SIMPLE, alias="queryType")
    chart_type: ChartType = Field(..., alias="chartType")
    address: str = Field(..., min_length=1)
    currency: Currency = Currency.USD

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def query(self) -> str:
        return (
            f"(address = {self.address} AND chartType = {self.chart_type.value}"
            f" AND currency = {self.currency.value})"
        )


class TxsSubscription(BaseModel):
    """Trades on a token (``address``) or a pair (``pair_address``), never both."""

    subscribe_type: ClassVar[WsSubType] = WsSubType.SUBSCRIBE_TXS

    query_type: QueryType = Field(QueryType.SIMPLE, alias="queryType")
    address: str | None = None
    pair_address: str | None = Field(None, alias="pairAddress")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="after")
    def _one_address(self) -> TxsSubscription:
        if self.address and self.pair_address:
            raise ValueError("address and pair_address are mutually exclusive")
        if not self.address and not self.pair_address:
            raise ValueError("one of address or pair_address is required")
        return self

    def query(self) -> str:
        if self.address:
            return f"address = {self.address}"
        return f"pairAddress = {self.pair_address}"


class ComplexSubscription(BaseModel):
    """Several simple filters joined into one query (price or txs feeds)."""

    query_type: QueryType = Field(QueryType.COMPLEX, alias="queryType")
    query: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class BaseQuotePriceSubscription(BaseModel):
    subscribe_type: ClassVar[WsSubType] = WsSubType.SUBSCRIBE_BASE_QUOTE_PRICE

    base_address: str = Field(..., alias="baseAddress", min_length=1)
    quote_address: str = Field(..., alias="quoteAddress", min_length=1)
    chart_type: ChartType = Field(..., alias="chartType")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


def _check_bounds(low: float | None, high: float | None, name: str) -> None:
    if low is not None and high is not None and high <= low:
        raise ValueError(f"max_{name} must be greater than min_{name}")


class TokenNewListingSubscription(BaseModel):
    """New token listings.

    Meme platform listings (e.g. pump.fun) are only delivered when
    ``meme_platform_enabled`` is set. ``min_liquidity`` must be above the
    server floor; ``max_liquidity`` must exceed ``min_liquidity``.
    """

    subscribe_type: ClassVar[WsSubType] = WsSubType.SUBSCRIBE_TOKEN_NEW_LISTING

    meme_platform_enabled: bool | None = None
    min_liquidity: float | None = None
    max_liquidity: float | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="after")
    def _bounds(self) -> TokenNewListingSubscription:
        if self.min_liquidity is not None and self.min_liquidity <= NEW_LISTING_MIN_LIQUIDITY_FLOOR:
            raise ValueError(
                f"min_liquidity must be greater than {NEW_LISTING_MIN_LIQUIDITY_FLOOR:g}"
            )
        _check_bounds(self.min_liquidity, self.max_liquidity, "liquidity")
        return self


class NewPairSubscription(BaseModel):
    subscribe_type: ClassVar[WsSubType] = WsSubType.SUBSCRIBE_NEW_PAIR

    min_liquidity: float | None = None
    max_liquidity: float | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="after")
    def _bounds(self) -> NewPairSubscription:
        _check_bounds(self.min_liquidity, self.max_liquidity, "liquidity")
        return self


class LargeTradeSubscription(BaseModel):
    """Trades across all tokens whose USD volume is within [min, max]."""

    subscribe_type: ClassVar[WsSubType] = WsSubType.SUBSCRIBE_LARGE_TRADE_TXS

    min_volume: float = Field(..., ge=LARGE_TRADE_MIN_VOLUME_FLOOR)
    max_volume: float | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="after")
    def _bounds(self) -> LargeTradeSubscription:
        _check_bounds(self.min_volume, self.max_volume, "volume")
        return self


class WalletTxsSubscription(BaseModel):
    subscribe_type: ClassVar[WsSubType] = WsSubType.SUBSCRIBE_WALLET_TXS

    address: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True, populate_by_name=True)


SubscriptionFilter = Union[
    PriceSubscription,
    TxsSubscription,
    BaseQuotePriceSubscription,
    TokenNewListingSubscription,
    NewPairSubscription,
    LargeTradeSubscription,
    WalletTxsSubscription,
    ComplexSubscription,
]

_COMPLEX_CATEGORIES = (WsDataType.PRICE_DATA, WsDataType.TXS_DATA)


class SubscriptionRequest(BaseModel):
    """Outbound control message."""

    type: WsSubType
    data: SubscriptionFilter

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _type_matches_filter(self) -> SubscriptionRequest:
        if isinstance(self.data, ComplexSubscription):
            if self.type.category not in _COMPLEX_CATEGORIES:
                raise ValueError(f"complex queries are not supported for {self.type.value}")
            return self
        if self.type.category != self.data.subscribe_type.category:
            raise ValueError(
                f"{type(self.data).__name__} cannot be sent as {self.type.value}"
            )
        return self

    @classmethod
    def subscribe(cls, data: SubscriptionFilter) -> SubscriptionRequest:
        """Subscribe request for a filter, tag inferred from its class."""
        return cls(type=_subscribe_type(data), data=data)

    @classmethod
    def unsubscribe(cls, data: SubscriptionFilter) -> SubscriptionRequest:
        return cls(type=_subscribe_type(data).counterpart, data=data)

    @property
    def category(self) -> WsDataType:
        """Inbound data type this request controls."""
        return self.type.category

    @property
    def is_subscribe(self) -> bool:
        return self.type.is_subscribe

    @property
    def tracking_key(self) -> tuple[WsSubType, str]:
        """Identity shared by a subscribe request and its matching unsubscribe."""
        sub_type = self.type if self.type.is_subscribe else self.type.counterpart
        return sub_type, self.data.model_dump_json(by_alias=True, exclude_none=True)

    def to_wire(self) -> str:
        """Serialize to the JSON text frame sent to the server."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


def _subscribe_type(data: SubscriptionFilter) -> WsSubType:
    sub_type = getattr(type(data), "subscribe_type", None)
    if sub_type is None:
        raise ValueError(
            f"{type(data).__name__} has no implied category; build SubscriptionRequest with an explicit type"
        )
    return sub_type
