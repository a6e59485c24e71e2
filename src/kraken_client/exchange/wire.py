"""Wire-format models and conversion to validated domain objects.

Responses share the envelope ``{"error": [...], "result": {...}}``. The
pydantic models below only check the shape of the JSON; the domain
constructors in kraken_client.models check the business invariants. Any
failure in either step aborts the whole conversion.
"""

import math

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from kraken_client.clock import Clock, system_clock
from kraken_client.exceptions import ExchangeApiError, InvariantViolation
from kraken_client.models import (
    CurrencyAmount,
    FeeSet,
    Leverage,
    Margin,
    OpenOrder,
    OpenOrderDescription,
    OrderSide,
    OrderStatus,
    OrderType,
    ServerTime,
    XbtUsd,
)


class ServerTimeResult(BaseModel):
    unixtime: int
    rfc1123: str


class ServerTimeEnvelope(BaseModel):
    error: list[str] = []
    result: ServerTimeResult | None = None


class AssetPair(BaseModel):
    """One entry of the AssetPairs result."""

    altname: str
    wsname: str
    aclass_base: str
    base: str
    aclass_quote: str
    quote: str
    lot: str
    pair_decimals: int
    lot_decimals: int
    lot_multiplier: int
    leverage_buy: list[int]
    leverage_sell: list[int]
    fees: list[tuple[int, float]]
    fees_maker: list[tuple[int, float]]
    fee_volume_currency: str
    margin_call: int
    margin_stop: int
    ordermin: str


class XbtUsdResult(BaseModel):
    xxbtzusd: AssetPair = Field(alias="XXBTZUSD")


class XbtUsdEnvelope(BaseModel):
    error: list[str] = []
    result: XbtUsdResult | None = None


class OrderDescription(BaseModel):
    pair: str
    side: str = Field(alias="type")
    ordertype: str
    price: str
    price2: str
    leverage: str
    order: str
    close: str = ""


class OpenOrderEntry(BaseModel):
    """An order as listed under ``result.open``; its id is the dict key."""

    refid: str | None = None
    userref: int | None = None
    status: str
    opentm: float
    starttm: float
    expiretm: float
    descr: OrderDescription
    vol: str
    vol_exec: str
    cost: str
    fee: str
    price: str
    stopprice: str
    limitprice: str
    misc: str
    oflags: str
    trades: list[str] = []


class OpenOrdersResult(BaseModel):
    open: dict[str, OpenOrderEntry] = {}


class OpenOrdersEnvelope(BaseModel):
    error: list[str] = []
    result: OpenOrdersResult | None = None


def parse_server_time(text: str, clock: Clock = system_clock) -> ServerTime:
    """Convert a /public/Time response into a ServerTime checked against ``clock``."""
    result = _unwrap(ServerTimeEnvelope, text)
    return ServerTime(result.unixtime, result.rfc1123, clock=clock)


def parse_xbtusd_pair(text: str) -> XbtUsd:
    """Convert a /public/AssetPairs?pair=XXBTZUSD response into XbtUsd."""
    pair = _unwrap(XbtUsdEnvelope, text).xxbtzusd
    return XbtUsd(
        altname=pair.altname,
        wsname=pair.wsname,
        aclass_base=pair.aclass_base,
        base=pair.base,
        aclass_quote=pair.aclass_quote,
        quote=pair.quote,
        lot=pair.lot,
        pair_decimals=pair.pair_decimals,
        lot_decimals=pair.lot_decimals,
        lot_multiplier=pair.lot_multiplier,
        leverage_buy=Leverage(tuple(pair.leverage_buy)),
        leverage_sell=Leverage(tuple(pair.leverage_sell)),
        fees=FeeSet.from_pairs(pair.fees),
        fees_maker=FeeSet.from_pairs(pair.fees_maker),
        fee_volume_currency=pair.fee_volume_currency,
        margin_call=Margin(pair.margin_call),
        margin_stop=Margin(pair.margin_stop),
        ordermin=pair.ordermin,
    )


def parse_open_orders(text: str) -> list[OpenOrder]:
    """Convert a /private/OpenOrders response into OpenOrder objects."""
    result = _unwrap(OpenOrdersEnvelope, text)
    return [
        _open_order(identifier, entry) for identifier, entry in result.open.items()
    ]


def _unwrap(envelope_cls: type[BaseModel], text: str):
    try:
        envelope = envelope_cls.model_validate_json(text)
    except PydanticValidationError as exc:
        raise InvariantViolation(
            f"malformed {envelope_cls.__name__} response: {exc}"
        ) from exc
    if envelope.error:
        raise ExchangeApiError(envelope.error)
    if envelope.result is None:
        raise InvariantViolation(f"{envelope_cls.__name__} response has no result")
    return envelope.result


def _open_order(identifier: str, entry: OpenOrderEntry) -> OpenOrder:
    return OpenOrder(
        identifier=identifier,
        refid=entry.refid,
        userref=entry.userref,
        status=_to_enum(OrderStatus, entry.status, "order status"),
        opentm=entry.opentm,
        starttm=entry.starttm,
        expiretm=entry.expiretm,
        description=_description(entry.descr),
        volume=_amount(entry.vol, "vol"),
        vol_exec=_amount(entry.vol_exec, "vol_exec"),
        cost=_amount(entry.cost, "cost"),
        fee=_amount(entry.fee, "fee"),
        price=_amount(entry.price, "price"),
        stopprice=_amount(entry.stopprice, "stopprice"),
        limitprice=_amount(entry.limitprice, "limitprice"),
        misc=entry.misc,
        oflags=entry.oflags,
        trades=tuple(entry.trades),
    )


def _description(descr: OrderDescription) -> OpenOrderDescription:
    return OpenOrderDescription(
        pair=descr.pair,
        side=_to_enum(OrderSide, descr.side, "order side"),
        order_type=_to_enum(OrderType, descr.ordertype, "order type"),
        price=_to_float(descr.price, "descr.price"),
        price2=_to_float(descr.price2, "descr.price2"),
        leverage=descr.leverage,
        order=descr.order,
        close=descr.close,
    )


def _amount(value: str, name: str) -> CurrencyAmount:
    return CurrencyAmount(_to_float(value, name))


def _to_float(value: str, name: str) -> float:
    try:
        number = float(value)
    except ValueError as exc:
        raise InvariantViolation(f"{name} is not a number: {value!r}") from exc
    if not math.isfinite(number):
        raise InvariantViolation(f"{name} is not finite: {value!r}")
    return number


def _to_enum(enum_cls, value: str, name: str):
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise InvariantViolation(f"unknown {name} {value!r}") from exc
