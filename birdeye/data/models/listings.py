"""New token listing and new pair payload models."""

from __future__ import annotations

from decimal import Decimal
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from ..core import WsDataType


class TokenNewListingData(BaseModel):
    """Token that just received liquidity."""

    data_type: ClassVar[WsDataType] = WsDataType.TOKEN_NEW_LISTING_DATA

    address: str
    decimals: int | None = None
    name: str | None = None
    symbol: str | None = None
    liquidity: Decimal | None = None  # USD
    liquidity_added_at: str | None = Field(None, alias="liquidityAddedAt")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class NewPairTokenInfo(BaseModel):
    address: str | None = None
    name: str | None = None
    symbol: str | None = None
    decimals: int | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class NewPairData(BaseModel):
    """Newly created liquidity pair."""

    data_type: ClassVar[WsDataType] = WsDataType.NEW_PAIR_DATA

    address: str
    name: str | None = None
    source: str | None = None
    base: NewPairTokenInfo | None = None
    quote: NewPairTokenInfo | None = None
    tx_hash: str | None = Field(None, alias="txHash")
    block_time: str | None = Field(None, alias="blockTime")

    model_config = ConfigDict(frozen=True, populate_by_name=True)
