"""Domain value types for the Kraken client.

Every type here is a frozen dataclass whose ``__post_init__`` enforces the
type's invariants. Constructing an instance is the validation: if it exists,
it is valid. Violations raise InvariantViolation with a readable message.
"""

import math
from dataclasses import dataclass, field
from datetime import timezone
from email.utils import parsedate_to_datetime
from enum import Enum

from kraken_client.clock import Clock, system_clock
from kraken_client.exceptions import InvariantViolation

MIN_LEVERAGE = 1
MAX_LEVERAGE = 5
MAX_MARGIN_PERCENT = 100
SERVER_TIME_TOLERANCE_SECONDS = 10


class OrderStatus(str, Enum):
    """Order lifecycle status as reported by the exchange."""

    OPEN = "open"
    CLOSED = "closed"


class OrderSide(str, Enum):
    """Order direction."""

    BUY = "buy"
    SELL = "sell"


class OrderType(str, Enum):
    """Kraken order types."""

    MARKET = "market"
    LIMIT = "limit"
    STOP_LOSS = "stop-loss"
    TAKE_PROFIT = "take-profit"
    STOP_LOSS_LIMIT = "stop-loss-limit"
    TAKE_PROFIT_LIMIT = "take-profit-limit"
    SETTLE_POSITION = "settle-position"


@dataclass(frozen=True)
class Credentials:
    """API credentials for private endpoints.

    None of the fields appear in repr() so credentials never leak into logs.
    """

    api_key: str = field(repr=False)
    private_key: str = field(repr=False)  # base64
    otp_secret: str = field(repr=False)  # base32


@dataclass(frozen=True)
class CurrencyAmount:
    """A non-negative amount of currency (volume, price, cost or fee)."""

    value: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.value):
            raise InvariantViolation(f"currency amount must be finite, got {self.value}")
        if self.value < 0:
            raise InvariantViolation(f"currency amount cannot be negative, got {self.value}")


@dataclass(frozen=True)
class FeeSet:
    """Volume-tiered fee schedule.

    ``tiers`` holds (volume_tier, fee_rate) pairs in ascending tier order.
    Rates must strictly decrease as the tier grows and never go below zero.
    """

    tiers: tuple[tuple[int, float], ...]

    def __post_init__(self) -> None:
        for tier, rate in self.tiers:
            if rate < 0:
                raise InvariantViolation(
                    f"fee rate cannot be negative, got {rate} at tier {tier}"
                )
        for (tier, rate), (next_tier, next_rate) in zip(self.tiers, self.tiers[1:]):
            if next_tier <= tier:
                raise InvariantViolation(
                    f"fee tiers must be strictly ascending, got {tier} then {next_tier}"
                )
            if next_rate >= rate:
                raise InvariantViolation(
                    "fees need to be positive and decreasing in quantity, "
                    f"got {rate} at tier {tier} then {next_rate} at tier {next_tier}"
                )

    @classmethod
    def from_pairs(cls, pairs) -> "FeeSet":
        """Build a FeeSet from unordered (tier, rate) pairs."""
        return cls(tuple(sorted((int(tier), float(rate)) for tier, rate in pairs)))


@dataclass(frozen=True)
class Leverage:
    """Allowed leverage multipliers for one side of a trading pair."""

    values: tuple[int, ...]

    def __post_init__(self) -> None:
        invalid = [v for v in self.values if not MIN_LEVERAGE <= v <= MAX_LEVERAGE]
        if invalid:
            raise InvariantViolation(
                f"leverage needs to be between {MIN_LEVERAGE} and {MAX_LEVERAGE}, "
                f"got {invalid}"
            )


@dataclass(frozen=True)
class Margin:
    """Margin level as a whole percentage."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= MAX_MARGIN_PERCENT:
            raise InvariantViolation(
                f"margin must be between 0 and {MAX_MARGIN_PERCENT}%, got {self.value}"
            )


@dataclass(frozen=True)
class ServerTime:
    """Exchange server time, checked for consistency and freshness.

    Both representations must denote the same instant, and that instant must
    lie within the last ``SERVER_TIME_TOLERANCE_SECONDS`` of ``clock``. A
    timestamp from the future or an older one points to a misconfigured or
    stale server.
    """

    unixtime: int
    rfc1123: str
    clock: Clock = field(default=system_clock, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._validate_rfc1123_equivalence()
        now = self.clock()
        if self.unixtime > now:
            raise InvariantViolation(
                f"the api returned a timestamp from the future: {self.unixtime} > {now}"
            )
        if self.unixtime < now - SERVER_TIME_TOLERANCE_SECONDS:
            raise InvariantViolation(
                f"the api returned a timestamp which is too old: {self.unixtime}, "
                f"now is {now}"
            )

    def _validate_rfc1123_equivalence(self) -> None:
        try:
            parsed = parsedate_to_datetime(self.rfc1123)
        except (TypeError, ValueError) as exc:
            raise InvariantViolation(
                f"invalid rfc1123 timestamp {self.rfc1123!r}"
            ) from exc
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        if int(parsed.timestamp()) != self.unixtime:
            raise InvariantViolation(
                f"unix time {self.unixtime} and rfc1123 {self.rfc1123!r} do not match"
            )


@dataclass(frozen=True)
class OpenOrderDescription:
    """Human-facing description block of an order."""

    pair: str
    side: OrderSide
    order_type: OrderType
    price: float
    price2: float
    leverage: str
    order: str
    close: str


@dataclass(frozen=True)
class OpenOrder:
    """Snapshot of an open order.

    Only orders in ``open`` status are accepted.
    """

    identifier: str
    refid: str | None
    userref: int | None
    status: OrderStatus
    opentm: float
    starttm: float
    expiretm: float
    description: OpenOrderDescription
    volume: CurrencyAmount
    vol_exec: CurrencyAmount
    cost: CurrencyAmount
    fee: CurrencyAmount
    price: CurrencyAmount
    stopprice: CurrencyAmount
    limitprice: CurrencyAmount
    misc: str
    oflags: str
    trades: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.status is not OrderStatus.OPEN:
            raise InvariantViolation(
                f"order {self.identifier} cannot be {self.status.value}"
            )


@dataclass(frozen=True)
class XbtUsd:
    """Trading-pair metadata for XBT/USD."""

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
    leverage_buy: Leverage
    leverage_sell: Leverage
    fees: FeeSet
    fees_maker: FeeSet
    fee_volume_currency: str
    margin_call: Margin
    margin_stop: Margin
    ordermin: str

    def __post_init__(self) -> None:
        if self.margin_stop.value > self.margin_call.value:
            raise InvariantViolation(
                f"margin stop ({self.margin_stop.value}%) cannot be larger than "
                f"margin call ({self.margin_call.value}%)"
            )
