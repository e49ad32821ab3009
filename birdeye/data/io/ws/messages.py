"""Decoding of inbound stream frames into typed messages.

Every text frame is an envelope ``{"type": <tag>, "data": <payload>}``. The
tag selects exactly one variant of ``InboundMessage``: a payload model for a
data category, ``Welcome``/``ServerError`` for control messages, or
``Unrecognized`` for tags this client does not know.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ...core import MessageDecodeError, WsDataType
from ...models import (
    BaseQuotePriceData,
    LargeTradeTxsData,
    NewPairData,
    PriceData,
    TokenNewListingData,
    TxsData,
    WalletTxsData,
)

EventPayload = Union[
    PriceData,
    TxsData,
    BaseQuotePriceData,
    TokenNewListingData,
    NewPairData,
    LargeTradeTxsData,
    WalletTxsData,
]

PAYLOAD_MODELS: dict[WsDataType, type[BaseModel]] = {
    WsDataType.PRICE_DATA: PriceData,
    WsDataType.TXS_DATA: TxsData,
    WsDataType.BASE_QUOTE_PRICE_DATA: BaseQuotePriceData,
    WsDataType.TOKEN_NEW_LISTING_DATA: TokenNewListingData,
    WsDataType.NEW_PAIR_DATA: NewPairData,
    WsDataType.TXS_LARGE_TRADE_DATA: LargeTradeTxsData,
    WsDataType.WALLET_TXS_DATA: WalletTxsData,
}


@dataclass(frozen=True)
class Welcome:
    """Connection acknowledged by the server."""

    data: Any = None


@dataclass(frozen=True)
class ServerError:
    """Error reported in-band by the server."""

    data: Any = None


@dataclass(frozen=True)
class Unrecognized:
    """Envelope with a tag outside the known set."""

    type: str
    data: Any = None


InboundMessage = Union[EventPayload, Welcome, ServerError, Unrecognized]


def decode_frame(raw: str | bytes) -> InboundMessage:
    """Decode one text frame.

    Raises:
        MessageDecodeError: Frame is not a JSON object, its type tag is not a
            string, or its payload does not fit the tag's model.
    """
    try:
        envelope = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MessageDecodeError(f"invalid JSON frame: {e}", raw=_as_text(raw)) from e

    if not isinstance(envelope, dict):
        raise MessageDecodeError("frame is not a JSON object", raw=_as_text(raw))

    tag = envelope.get("type")
    if not isinstance(tag, str):
        raise MessageDecodeError("message type is not a string", raw=_as_text(raw))

    payload = envelope.get("data")
    data_type = WsDataType.from_str(tag)
    if data_type is None:
        return Unrecognized(type=tag, data=payload)
    if data_type is WsDataType.WELCOME:
        return Welcome(data=payload)
    if data_type is WsDataType.ERROR:
        return ServerError(data=payload)

    model = PAYLOAD_MODELS[data_type]
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise MessageDecodeError(
            f"invalid {data_type.value} payload: {e.error_count()} error(s)",
            raw=_as_text(raw),
        ) from e


def _as_text(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw
