"""Streaming transaction payload models.

Three feeds carry swap-like records with slightly different token legs:
``TXS_DATA`` (token/pair trades), ``TXS_LARGE_TRADE_DATA`` (volume-filtered
trades across all tokens) and ``WALLET_TXS_DATA`` (activity of one wallet).
"""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from ..core import WsDataType


class TxTokenInfo(BaseModel):
    """One side of a streamed trade."""

    symbol: str | None = None
    decimals: int | None = None
    address: str | None = None
    amount: Decimal | None = None  # raw integer amount, may exceed 64 bits
    type: str | None = None
    type_swap: str | None = Field(None, alias="typeSwap")  # "from" / "to"
    ui_amount: Decimal | None = Field(None, alias="uiAmount")
    price: Decimal | None = None
    nearest_price: Decimal | None = Field(None, alias="nearestPrice")
    change_amount: Decimal | None = Field(None, alias="changeAmount")
    ui_change_amount: Decimal | None = Field(None, alias="uiChangeAmount")
    icon: str | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class TxsData(BaseModel):
    """Trade on a subscribed token or pair."""

    data_type: ClassVar[WsDataType] = WsDataType.TXS_DATA

    block_unix_time: int | None = Field(None, alias="blockUnixTime")
    owner: str | None = None
    source: str | None = None
    tx_hash: str | None = Field(None, alias="txHash")
    alias: str | None = None
    is_trade_on_be: bool | None = Field(None, alias="isTradeOnBe")
    platform: str | None = None
    volume_usd: Decimal | None = Field(None, alias="volumeUSD")
    from_: TxTokenInfo | None = Field(None, alias="from")
    to: TxTokenInfo | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def block_time(self) -> datetime | None:
        if self.block_unix_time is None:
            return None
        return datetime.fromtimestamp(self.block_unix_time, tz=UTC)


class LargeTradeTokenInfo(BaseModel):
    """One side of a large trade."""

    address: str | None = None
    name: str | None = None
    symbol: str | None = None
    decimals: int | None = None
    ui_amount: Decimal | None = Field(None, alias="uiAmount")
    price: Decimal | None = None
    nearest_price: Decimal | None = Field(None, alias="nearestPrice")
    ui_change_amount: Decimal | None = Field(None, alias="uiChangeAmount")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class LargeTradeTxsData(BaseModel):
    """Trade whose USD volume falls inside the subscribed range."""

    data_type: ClassVar[WsDataType] = WsDataType.TXS_LARGE_TRADE_DATA

    block_unix_time: int | None = Field(None, alias="blockUnixTime")
    block_human_time: str | None = Field(None, alias="blockHumanTime")
    owner: str | None = None
    source: str | None = None
    pool_address: str | None = Field(None, alias="poolAddress")
    tx_hash: str | None = Field(None, alias="txHash")
    volume_usd: Decimal | None = Field(None, alias="volumeUSD")
    network: str | None = None
    from_: LargeTradeTokenInfo | None = Field(None, alias="from")
    to: LargeTradeTokenInfo | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class WalletTokenInfo(BaseModel):
    symbol: str | None = None
    decimals: int | None = None
    address: str | None = None
    ui_amount: Decimal | None = Field(None, alias="uiAmount")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class WalletTxsData(BaseModel):
    """Transaction made by a watched wallet."""

    data_type: ClassVar[WsDataType] = WsDataType.WALLET_TXS_DATA

    tx_type: str | None = Field(None, alias="type")
    block_unix_time: int | None = Field(None, alias="blockUnixTime")
    block_human_time: str | None = Field(None, alias="blockHumanTime")
    owner: str | None = None
    source: str | None = None
    tx_hash: str | None = Field(None, alias="txHash")
    volume_usd: Decimal | None = Field(None, alias="volumeUSD")
    network: str | None = None
    base: WalletTokenInfo | None = None
    quote: WalletTokenInfo | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)
