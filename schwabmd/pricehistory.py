"""Price history models and endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .chains import _Fields
from .errors import ResponseError
from .session import optional_query


class PeriodType(StrEnum):
    """Period type for price history."""

    DAY = "day"
    MONTH = "month"
    YEAR = "year"
    YTD = "ytd"


class FrequencyType(StrEnum):
    """Frequency type for price history."""

    MINUTE = "minute"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass
class PriceHistoryParams:
    """Optional price history parameters; unset values are not sent.

    ``start_date`` and ``end_date`` are milliseconds since the epoch.
    """

    period_type: PeriodType | str | None = None
    period: int = 0
    frequency_type: FrequencyType | str | None = None
    frequency: int = 0
    start_date: int = 0
    end_date: int = 0
    need_extended_hours_data: bool | None = None
    need_previous_close: bool | None = None

    def to_query(self) -> dict[str, str]:
        """Return the query string parameters for these settings."""
        return optional_query(
            {
                "periodType": self.period_type,
                "period": self.period,
                "frequencyType": self.frequency_type,
                "frequency": self.frequency,
                "startDate": self.start_date,
                "endDate": self.end_date,
                "needExtendedHoursData": self.need_extended_hours_data,
                "needPreviousClose": self.need_previous_close,
            }
        )


@dataclass
class Candle:
    """A single OHLCV candle; ``datetime`` is milliseconds since the epoch."""

    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    close: float = 0.0
    volume: int = 0
    datetime: int = 0
    datetime_iso: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Candle:
        f = _Fields(data, "Candle")
        return cls(
            open=f.number("open"),
            high=f.number("high"),
            low=f.number("low"),
            close=f.number("close"),
            volume=f.integer("volume"),
            datetime=f.integer("datetime"),
            datetime_iso=f.text("datetimeISO8601"),
        )


@dataclass
class CandleList:
    """Price history candles for a symbol."""

    candles: list[Candle] = field(default_factory=list)
    symbol: str = ""
    empty: bool = False
    previous_close: float = 0.0
    previous_close_date: int = 0
    previous_close_date_iso: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> CandleList:
        f = _Fields(data, "CandleList")
        items = data.get("candles") or []
        if not isinstance(items, list):
            raise ValueError("CandleList.candles: expected a list")
        return cls(
            candles=[Candle.from_dict(item) for item in items],
            symbol=f.text("symbol"),
            empty=f.flag("empty"),
            previous_close=f.number("previousClose"),
            previous_close_date=f.integer("previousCloseDate"),
            previous_close_date_iso=f.text("previousCloseDateISO8601"),
        )


class PriceHistoryMixin:
    """Adds the price history endpoint to a client with a ``request`` method."""

    def get_price_history(
        self, symbol: str, params: PriceHistoryParams | None = None
    ) -> CandleList:
        """Fetch price history candles for ``symbol``."""
        query = {"symbol": symbol}
        if params is not None:
            query.update(params.to_query())
        data = self.request("/pricehistory", query)  # type: ignore[attr-defined]
        try:
            return CandleList.from_dict(data if data is not None else {})
        except ValueError as exc:
            raise ResponseError(f"decode response body: {exc}") from exc