"""Streaming price (OHLCV) payload models."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from ..core import WsDataType


class PriceData(BaseModel):
    """OHLCV update for a token or pair (``PRICE_DATA``)."""

    data_type: ClassVar[WsDataType] = WsDataType.PRICE_DATA

    open: Decimal = Field(..., alias="o")
    high: Decimal = Field(..., alias="h")
    low: Decimal = Field(..., alias="l")
    close: Decimal = Field(..., alias="c")
    volume: Decimal | None = Field(None, alias="v")
    event_type: str | None = Field(None, alias="eventType")  # e.g. "ohlcv"
    chart_type: str | None = Field(None, alias="type")  # e.g. "1m"
    unix_time: int = Field(..., alias="unixTime")  # seconds
    symbol: str | None = None  # "SOL" or "SOL-USDC"
    address: str | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def timestamp(self) -> datetime:
        """Candle time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.unix_time, tz=UTC)


class BaseQuotePriceData(BaseModel):
    """OHLC update for a base/quote token pairing (``BASE_QUOTE_PRICE_DATA``).

    Volume is always reported as zero by the server for this feed.
    """

    data_type: ClassVar[WsDataType] = WsDataType.BASE_QUOTE_PRICE_DATA

    open: Decimal = Field(..., alias="o")
    high: Decimal = Field(..., alias="h")
    low: Decimal = Field(..., alias="l")
    close: Decimal = Field(..., alias="c")
    volume: Decimal | None = Field(None, alias="v")
    event_type: str | None = Field(None, alias="eventType")
    chart_type: str | None = Field(None, alias="type")
    unix_time: int = Field(..., alias="unixTime")
    base_address: str | None = Field(None, alias="baseAddress")
    quote_address: str | None = Field(None, alias="quoteAddress")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def timestamp(self) -> datetime:
        return datetime.fromtimestamp(self.unix_time, tz=UTC)
