"""Option chain models and the option chain endpoint."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from .enums import (
    ExpirationMonth,
    OptionChainContractType,
    OptionChainRange,
    OptionChainStrategy,
    OptionChainType,
    OptionEntitlement,
    OptionExpirationType,
    OptionSettlementType,
)
from .errors import ResponseError
from .session import optional_query

_E = TypeVar("_E", bound=Enum)


def decode_flexible_float(value: Any) -> float:
    """Decode a number given either as a JSON number or a numeric string."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise ValueError(f"expected a number or numeric string, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if "_" in text:
            raise ValueError(f"invalid number {value!r}")
        try:
            return float(text)
        except ValueError:
            raise ValueError(f"invalid number {value!r}") from None
    raise ValueError(f"expected a number or numeric string, got {type(value).__name__}")


def decode_flexible_string(value: Any) -> str:
    """Decode a value given either as a JSON string or another JSON literal."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value).strip()


class _Fields:
    """Typed access to the members of a decoded JSON object."""

    def __init__(self, data: Any, name: str) -> None:
        if not isinstance(data, Mapping):
            raise ValueError(f"{name}: expected a JSON object, got {type(data).__name__}")
        self.data = data
        self.name = name

    def _fail(self, key: str, expected: str, value: Any) -> ValueError:
        return ValueError(
            f"{self.name}.{key}: expected {expected}, got {type(value).__name__}"
        )

    def number(self, key: str) -> float:
        value = self.data.get(key)
        if value is None:
            return 0.0
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self._fail(key, "a number", value)
        return float(value)

    def integer(self, key: str) -> int:
        value = self.data.get(key)
        if value is None:
            return 0
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self._fail(key, "an integer", value)
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(f"{self.name}.{key}: expected an integer, got {value!r}")
            return int(value)
        return value

    def text(self, key: str) -> str:
        value = self.data.get(key)
        if value is None:
            return ""
        if not isinstance(value, str):
            raise self._fail(key, "a string", value)
        return value

    def flag(self, key: str) -> bool:
        value = self.data.get(key)
        if value is None:
            return False
        if not isinstance(value, bool):
            raise self._fail(key, "a boolean", value)
        return value

    def choice(self, key: str, enum_type: type[_E]) -> _E | str:
        raw = self.text(key)
        try:
            return enum_type(raw)
        except ValueError:
            return raw


@dataclass
class OptionChainParams:
    """Query parameters for the option chain endpoint; unset values are not sent."""

    symbol: str
    contract_type: OptionChainContractType | str | None = None
    strike_count: int = 0
    include_underlying_quote: bool = False
    strategy: OptionChainStrategy | str | None = None
    interval: float = 0.0
    strike: float = 0.0
    strike_range: OptionChainRange | str | None = None
    from_date: str = ""
    to_date: str = ""
    volatility: float = 0.0
    underlying_price: float = 0.0
    interest_rate: float = 0.0
    days_to_expiration: int = 0
    exp_month: ExpirationMonth | str | None = None
    option_type: OptionChainType | str | None = None
    entitlement: OptionEntitlement | str | None = None

    def to_query(self) -> dict[str, str]:
        """Return the query string parameters for these settings."""
        return {
            "symbol": self.symbol,
            **optional_query(
                {
                    "contractType": self.contract_type,
                    "strikeCount": self.strike_count,
                    "includeUnderlyingQuote": True if self.include_underlying_quote else None,
                    "strategy": self.strategy,
                    "interval": self.interval,
                    "strike": self.strike,
                    "range": self.strike_range,
                    "fromDate": self.from_date,
                    "toDate": self.to_date,
                    "volatility": self.volatility,
                    "underlyingPrice": self.underlying_price,
                    "interestRate": self.interest_rate,
                    "daysToExpiration": self.days_to_expiration,
                    "expMonth": self.exp_month,
                    "optionType": self.option_type,
                    "entitlement": self.entitlement,
                }
            ),
        }


@dataclass
class OptionDeliverable:
    """A single deliverable of an option contract."""

    asset_type: str = ""
    currency_type: str = ""
    deliverable_units: float = 0.0
    symbol: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> OptionDeliverable:
        f = _Fields(data, "OptionDeliverable")
        return cls(
            asset_type=f.text("assetType"),
            currency_type=f.text("currencyType"),
            deliverable_units=f.number("deliverableUnits"),
            symbol=f.text("symbol"),
        )


@dataclass
class OptionContract:
    """A single option contract within an option chain."""

    put_call: OptionChainContractType | str = ""
    symbol: str = ""
    description: str = ""
    exchange_name: str = ""
    bid_price: float = 0.0
    ask_price: float = 0.0
    last_price: float = 0.0
    mark_price: float = 0.0
    bid_size: int = 0
    ask_size: int = 0
    last_size: int = 0
    high_price: float = 0.0
    low_price: float = 0.0
    open_price: float = 0.0
    close_price: float = 0.0
    total_volume: int = 0
    trade_date: str = ""
    trade_time_in_long: int = 0
    quote_time_in_long: int = 0
    net_change: float = 0.0
    percent_change: float = 0.0
    mark_change: float = 0.0
    mark_percent_change: float = 0.0
    volatility: float = 0.0
    delta: float = 0.0
    gamma: float = 0.0
    theta: float = 0.0
    vega: float = 0.0
    rho: float = 0.0
    open_interest: int = 0
    time_value: float = 0.0
    theoretical_option_value: float = 0.0
    theoretical_volatility: float = 0.0
    strike_price: float = 0.0
    expiration_date: str = ""
    days_to_expiration: int = 0
    expiration_type: OptionExpirationType | str = ""
    last_trading_day: int = 0
    multiplier: float = 0.0
    settlement_type: OptionSettlementType | str = ""
    deliverable_note: str = ""
    in_the_money: bool = False
    non_standard: bool = False
    mini: bool = False
    penny_pilot: bool = False
    index_option: bool = False
    option_root: str = ""
    intrinsic_value: float = 0.0
    extrinsic_value: float = 0.0
    implied_yield: float = 0.0
    option_deliverables_list: list[OptionDeliverable] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> OptionContract:
        """Build a contract, accepting the short price aliases and flexible trade dates."""
        f = _Fields(data, "OptionContract")
        deliverables = data.get("optionDeliverablesList") or []
        if not isinstance(deliverables, list):
            raise ValueError("OptionContract.optionDeliverablesList: expected a list")

        prices = {
            name: f.number(f"{name}Price") for name in ("bid", "ask", "last", "mark")
        }
        for name in prices:
            alias = data.get(name)
            if alias is None:
                continue
            try:
                prices[name] = decode_flexible_float(alias)
            except ValueError as exc:
                raise ValueError(f"decode {name}: {exc}") from exc

        in_the_money = f.flag("isInTheMoney")
        if data.get("inTheMoney") is not None:
            in_the_money = f.flag("inTheMoney")

        return cls(
            put_call=f.choice("putCall", OptionChainContractType),
            symbol=f.text("symbol"),
            description=f.text("description"),
            exchange_name=f.text("exchangeName"),
            bid_price=prices["bid"],
            ask_price=prices["ask"],
            last_price=prices["last"],
            mark_price=prices["mark"],
            bid_size=f.integer("bidSize"),
            ask_size=f.integer("askSize"),
            last_size=f.integer("lastSize"),
            high_price=f.number("highPrice"),
            low_price=f.number("lowPrice"),
            open_price=f.number("openPrice"),
            close_price=f.number("closePrice"),
            total_volume=f.integer("totalVolume"),
            trade_date=decode_flexible_string(data.get("tradeDate")),
            trade_time_in_long=f.integer("tradeTimeInLong"),
            quote_time_in_long=f.integer("quoteTimeInLong"),
            net_change=f.number("netChange"),
            percent_change=f.number("percentChange"),
            mark_change=f.number("markChange"),
            mark_percent_change=f.number("markPercentChange"),
            volatility=f.number("volatility"),
            delta=f.number("delta"),
            gamma=f.number("gamma"),
            theta=f.number("theta"),
            vega=f.number("vega"),
            rho=f.number("rho"),
            open_interest=f.integer("openInterest"),
            time_value=f.number("timeValue"),
            theoretical_option_value=f.number("theoreticalOptionValue"),
            theoretical_volatility=f.number("theoreticalVolatility"),
            strike_price=f.number("strikePrice"),
            expiration_date=f.text("expirationDate"),
            days_to_expiration=f.integer("daysToExpiration"),
            expiration_type=f.choice("expirationType", OptionExpirationType),
            last_trading_day=f.integer("lastTradingDay"),
            multiplier=f.number("multiplier"),
            settlement_type=f.choice("settlementType", OptionSettlementType),
            deliverable_note=f.text("deliverableNote"),
            in_the_money=in_the_money,
            non_standard=f.flag("isNonStandard"),
            mini=f.flag("isMini"),
            penny_pilot=f.flag("isPennyPilot"),
            index_option=f.flag("isIndexOption"),
            option_root=f.text("optionRoot"),
            intrinsic_value=f.number("intrinsicValue"),
            extrinsic_value=f.number("extrinsicValue"),
            implied_yield=f.number("impliedYield"),
            option_deliverables_list=[OptionDeliverable.from_dict(item) for item in deliverables],
        )


@dataclass
class Underlying:
    """The underlying quote returned with an option chain."""

    ask: float = 0.0
    ask_size: int = 0
    bid: float = 0.0
    bid_size: int = 0
    change: float = 0.0
    close: float = 0.0
    delayed: bool = False
    description: str = ""
    exchange_name: str = ""
    fifty_two_week_high: float = 0.0
    fifty_two_week_low: float = 0.0
    high_price: float = 0.0
    last: float = 0.0
    low_price: float = 0.0
    mark: float = 0.0
    mark_change: float = 0.0
    mark_percent_change: float = 0.0
    open_price: float = 0.0
    percent_change: float = 0.0
    quote_time: int = 0
    symbol: str = ""
    total_volume: int = 0
    trade_time: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> Underlying:
        f = _Fields(data, "Underlying")
        return cls(
            ask=f.number("ask"),
            ask_size=f.integer("askSize"),
            bid=f.number("bid"),
            bid_size=f.integer("bidSize"),
            change=f.number("change"),
            close=f.number("close"),
            delayed=f.flag("delayed"),
            description=f.text("description"),
            exchange_name=f.text("exchangeName"),
            fifty_two_week_high=f.number("fiftyTwoWeekHigh"),
            fifty_two_week_low=f.number("fiftyTwoWeekLow"),
            high_price=f.number("highPrice"),
            last=f.number("last"),
            low_price=f.number("lowPrice"),
            mark=f.number("mark"),
            mark_change=f.number("markChange"),
            mark_percent_change=f.number("markPercentChange"),
            open_price=f.number("openPrice"),
            percent_change=f.number("percentChange"),
            quote_time=f.integer("quoteTime"),
            symbol=f.text("symbol"),
            total_volume=f.integer("totalVolume"),
            trade_time=f.integer("tradeTime"),
        )


ExpDateMap = dict[str, dict[str, list[OptionContract]]]


def _parse_exp_date_map(value: Any, key: str) -> ExpDateMap:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"OptionChain.{key}: expected a JSON object")
    result: ExpDateMap = {}
    for expiration, strikes in value.items():
        if strikes is None:
            result[expiration] = {}
            continue
        if not isinstance(strikes, Mapping):
            raise ValueError(f"OptionChain.{key}[{expiration!r}]: expected a JSON object")
        by_strike: dict[str, list[OptionContract]] = {}
        for strike, contracts in strikes.items():
            if contracts is None:
                contracts = []
            if not isinstance(contracts, list):
                raise ValueError(
                    f"OptionChain.{key}[{expiration!r}][{strike!r}]: expected a list"
                )
            by_strike[strike] = [OptionContract.from_dict(item) for item in contracts]
        result[expiration] = by_strike
    return result


@dataclass
class OptionChain:
    """An option chain: contracts keyed by expiration, then by strike."""

    symbol: str = ""
    status: str = ""
    strategy: OptionChainStrategy | str = ""
    interval: float = 0.0
    is_delayed: bool = False
    is_index: bool = False
    days_to_expiration: float = 0.0
    interest_rate: float = 0.0
    underlying_price: float = 0.0
    volatility: float = 0.0
    call_exp_date_map: ExpDateMap = field(default_factory=dict)
    put_exp_date_map: ExpDateMap = field(default_factory=dict)
    underlying: Underlying | None = None

    @classmethod
    def from_dict(cls, data: Any) -> OptionChain:
        f = _Fields(data, "OptionChain")
        underlying = data.get("underlying")
        return cls(
            symbol=f.text("symbol"),
            status=f.text("status"),
            strategy=f.choice("strategy", OptionChainStrategy),
            interval=f.number("interval"),
            is_delayed=f.flag("isDelayed"),
            is_index=f.flag("isIndex"),
            days_to_expiration=f.number("daysToExpiration"),
            interest_rate=f.number("interestRate"),
            underlying_price=f.number("underlyingPrice"),
            volatility=f.number("volatility"),
            call_exp_date_map=_parse_exp_date_map(data.get("callExpDateMap"), "callExpDateMap"),
            put_exp_date_map=_parse_exp_date_map(data.get("putExpDateMap"), "putExpDateMap"),
            underlying=Underlying.from_dict(underlying) if underlying is not None else None,
        )


class ChainsMixin:
    """Adds the option chain endpoint to a client with a ``request`` method."""

    def get_option_chain(self, params: OptionChainParams | None) -> OptionChain:
        """Fetch the option chain described by ``params``."""
        if params is None or not params.symbol:
            raise ValueError("symbol is required")
        data = self.request("/chains", params.to_query())  # type: ignore[attr-defined]
        try:
            return OptionChain.from_dict(data)
        except ValueError as exc:
            raise ResponseError(f"decode response body: {exc}") from exc