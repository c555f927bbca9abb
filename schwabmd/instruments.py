"""Instrument search models and endpoints."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any
from urllib.parse import quote

from .chains import _Fields
from .errors import ResponseError
from .session import format_query_value

# Characters a URL path segment may carry unescaped.
_SEGMENT_SAFE = "$&+:=@"


class InstrumentProjection(StrEnum):
    """Kind of instrument search to perform."""

    SYMBOL_SEARCH = "symbol-search"
    SYMBOL_REGEX = "symbol-regex"
    DESC_SEARCH = "desc-search"
    DESC_REGEX = "desc-regex"
    SEARCH = "search"
    FUNDAMENTAL = "fundamental"


class InstrumentNotFoundError(LookupError):
    """No instrument was returned for the requested CUSIP."""


@dataclass
class BondInfo:
    """Bond-specific instrument details."""

    asset_type: str = ""
    bond_factor: str = ""
    bond_multiplier: str = ""
    bond_price: float = 0.0
    cusip: str = ""
    description: str = ""
    exchange: str = ""
    symbol: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> BondInfo:
        f = _Fields(data, "BondInfo")
        return cls(
            asset_type=f.text("assetType"),
            bond_factor=f.text("bondFactor"),
            bond_multiplier=f.text("bondMultiplier"),
            bond_price=f.number("bondPrice"),
            cusip=f.text("cusip"),
            description=f.text("description"),
            exchange=f.text("exchange"),
            symbol=f.text("symbol"),
            type=f.text("type"),
        )


@dataclass
class InstrumentInfo:
    """Basic instrument details for nested references."""

    asset_type: str = ""
    cusip: str = ""
    description: str = ""
    exchange: str = ""
    symbol: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> InstrumentInfo:
        f = _Fields(data, "InstrumentInfo")
        return cls(
            asset_type=f.text("assetType"),
            cusip=f.text("cusip"),
            description=f.text("description"),
            exchange=f.text("exchange"),
            symbol=f.text("symbol"),
            type=f.text("type"),
        )


@dataclass
class FundamentalData:
    """Financial metrics returned by a fundamental search."""

    symbol: str = ""
    high52: float = 0.0
    low52: float = 0.0
    dividend_amount: float = 0.0
    dividend_yield: float = 0.0
    dividend_date: str = ""
    pe_ratio: float = 0.0
    peg_ratio: float = 0.0
    pb_ratio: float = 0.0
    pr_ratio: float = 0.0
    pcf_ratio: float = 0.0
    gross_margin_ttm: float = 0.0
    gross_margin_mrq: float = 0.0
    net_profit_margin_ttm: float = 0.0
    net_profit_margin_mrq: float = 0.0
    operating_margin_ttm: float = 0.0
    operating_margin_mrq: float = 0.0
    return_on_equity: float = 0.0
    return_on_assets: float = 0.0
    return_on_investment: float = 0.0
    quick_ratio: float = 0.0
    current_ratio: float = 0.0
    interest_coverage: float = 0.0
    total_debt_to_capital: float = 0.0
    lt_debt_to_equity: float = 0.0
    total_debt_to_equity: float = 0.0
    eps_ttm: float = 0.0
    eps_change_percent_ttm: float = 0.0
    eps_change_year: float = 0.0
    eps_change: float = 0.0
    rev_change_year: float = 0.0
    rev_change_ttm: float = 0.0
    rev_change_in: float = 0.0
    shares_outstanding: float = 0.0
    market_cap_float: float = 0.0
    market_cap: float = 0.0
    book_value_per_share: float = 0.0
    short_int_to_float: float = 0.0
    short_int_day_to_cover: float = 0.0
    div_growth_rate_3_year: float = 0.0
    dividend_pay_amount: float = 0.0
    dividend_pay_date: str = ""
    beta: float = 0.0
    vol_1_day_avg: float = 0.0
    vol_10_day_avg: float = 0.0
    vol_3_month_avg: float = 0.0
    avg_1_day_volume: int = 0
    avg_10_days_volume: int = 0
    avg_3_month_volume: int = 0
    avg_1_year_volume: int = 0
    declaration_date: str = ""
    dividend_freq: int = 0
    eps: float = 0.0
    dtn_volume: int = 0
    next_dividend_pay_date: str = ""
    next_dividend_date: str = ""
    fund_leverage_factor: float = 0.0
    fund_strategy: str = ""
    corpaction_date: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> FundamentalData:
        f = _Fields(data, "FundamentalData")
        return cls(
            symbol=f.text("symbol"),
            high52=f.number("high52"),
            low52=f.number("low52"),
            dividend_amount=f.number("dividendAmount"),
            dividend_yield=f.number("dividendYield"),
            dividend_date=f.text("dividendDate"),
            pe_ratio=f.number("peRatio"),
            peg_ratio=f.number("pegRatio"),
            pb_ratio=f.number("pbRatio"),
            pr_ratio=f.number("prRatio"),
            pcf_ratio=f.number("pcfRatio"),
            gross_margin_ttm=f.number("grossMarginTTM"),
            gross_margin_mrq=f.number("grossMarginMRQ"),
            net_profit_margin_ttm=f.number("netProfitMarginTTM"),
            net_profit_margin_mrq=f.number("netProfitMarginMRQ"),
            operating_margin_ttm=f.number("operatingMarginTTM"),
            operating_margin_mrq=f.number("operatingMarginMRQ"),
            return_on_equity=f.number("returnOnEquity"),
            return_on_assets=f.number("returnOnAssets"),
            return_on_investment=f.number("returnOnInvestment"),
            quick_ratio=f.number("quickRatio"),
            current_ratio=f.number("currentRatio"),
            interest_coverage=f.number("interestCoverage"),
            total_debt_to_capital=f.number("totalDebtToCapital"),
            lt_debt_to_equity=f.number("ltDebtToEquity"),
            total_debt_to_equity=f.number("totalDebtToEquity"),
            eps_ttm=f.number("epsTTM"),
            eps_change_percent_ttm=f.number("epsChangePercentTTM"),
            eps_change_year=f.number("epsChangeYear"),
            eps_change=f.number("epsChange"),
            rev_change_year=f.number("revChangeYear"),
            rev_change_ttm=f.number("revChangeTTM"),
            rev_change_in=f.number("revChangeIn"),
            shares_outstanding=f.number("sharesOutstanding"),
            market_cap_float=f.number("marketCapFloat"),
            market_cap=f.number("marketCap"),
            book_value_per_share=f.number("bookValuePerShare"),
            short_int_to_float=f.number("shortIntToFloat"),
            short_int_day_to_cover=f.number("shortIntDayToCover"),
            div_growth_rate_3_year=f.number("divGrowthRate3Year"),
            dividend_pay_amount=f.number("dividendPayAmount"),
            dividend_pay_date=f.text("dividendPayDate"),
            beta=f.number("beta"),
            vol_1_day_avg=f.number("vol1DayAvg"),
            vol_10_day_avg=f.number("vol10DayAvg"),
            vol_3_month_avg=f.number("vol3MonthAvg"),
            avg_1_day_volume=f.integer("avg1DayVolume"),
            avg_10_days_volume=f.integer("avg10DaysVolume"),
            avg_3_month_volume=f.integer("avg3MonthVolume"),
            avg_1_year_volume=f.integer("avg1YearVolume"),
            declaration_date=f.text("declarationDate"),
            dividend_freq=f.integer("dividendFreq"),
            eps=f.number("eps"),
            dtn_volume=f.integer("dtnVolume"),
            next_dividend_pay_date=f.text("nextDividendPayDate"),
            next_dividend_date=f.text("nextDividendDate"),
            fund_leverage_factor=f.number("fundLeverageFactor"),
            fund_strategy=f.text("fundStrategy"),
            corpaction_date=f.text("corpactionDate"),
        )


def _optional(data: Any, key: str, factory: Any) -> Any:
    value = data.get(key)
    return factory(value) if value is not None else None


@dataclass
class Instrument:
    """A financial instrument."""

    cusip: str = ""
    symbol: str = ""
    description: str = ""
    exchange: str = ""
    asset_type: str = ""
    bond_factor: str = ""
    bond_multiplier: str = ""
    bond_price: float = 0.0
    bond_instrument_info: BondInfo | None = None
    instrument_info: InstrumentInfo | None = None
    type: str = ""
    fundamental: FundamentalData | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Instrument:
        f = _Fields(data, "Instrument")
        return cls(
            cusip=f.text("cusip"),
            symbol=f.text("symbol"),
            description=f.text("description"),
            exchange=f.text("exchange"),
            asset_type=f.text("assetType"),
            bond_factor=f.text("bondFactor"),
            bond_multiplier=f.text("bondMultiplier"),
            bond_price=f.number("bondPrice"),
            bond_instrument_info=_optional(data, "bondInstrumentInfo", BondInfo.from_dict),
            instrument_info=_optional(data, "instrumentInfo", InstrumentInfo.from_dict),
            type=f.text("type"),
            fundamental=_optional(data, "fundamental", FundamentalData.from_dict),
        )


@dataclass
class InstrumentResponse:
    """Instruments matching a search."""

    instruments: list[Instrument] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> InstrumentResponse:
        _Fields(data, "InstrumentResponse")
        items = data.get("instruments") or []
        if not isinstance(items, list):
            raise ValueError("InstrumentResponse.instruments: expected a list")
        return cls(instruments=[Instrument.from_dict(item) for item in items])


def _decode(data: Any) -> InstrumentResponse:
    try:
        return InstrumentResponse.from_dict(data if data is not None else {})
    except ValueError as exc:
        raise ResponseError(f"decode response body: {exc}") from exc


class InstrumentsMixin:
    """Adds the instrument endpoints to a client with a ``request`` method."""

    def search_instruments(
        self, symbol: str, projection: InstrumentProjection | str
    ) -> InstrumentResponse:
        """Search instruments by symbol or description using ``projection``."""
        query = {"symbol": symbol, "projection": format_query_value(projection)}
        return _decode(self.request("/instruments", query))  # type: ignore[attr-defined]

    def get_instrument_by_cusip(self, cusip_id: str) -> Instrument:
        """Fetch the instrument with the given CUSIP."""
        path = "/instruments/" + quote(cusip_id, safe=_SEGMENT_SAFE)
        result = _decode(self.request(path))  # type: ignore[attr-defined]
        if not result.instruments:
            raise InstrumentNotFoundError(
                f"no instrument found for CUSIP {json.dumps(cusip_id, ensure_ascii=False)}"
            )
        return result.instruments[0]