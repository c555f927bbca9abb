"""Market hours models and the market hours endpoints."""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date as Date
from datetime import datetime
from typing import Any
from urllib.parse import quote

from .chains import _Fields
from .enums import MarketID
from .errors import ResponseError

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def _quoted(value: Any) -> str:
    return json.dumps(str(value), ensure_ascii=False)


@dataclass
class SessionHours:
    """A trading session time window."""

    start: str = ""
    end: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> SessionHours:
        f = _Fields(data, "SessionHours")
        return cls(start=f.text("start"), end=f.text("end"))


@dataclass
class MarketHours:
    """Trading hours for one market product."""

    date: str = ""
    market_type: str = ""
    exchange: str = ""
    category: str = ""
    product: str = ""
    product_name: str = ""
    is_open: bool = False
    session_hours: dict[str, list[SessionHours]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> MarketHours:
        f = _Fields(data, "MarketHours")
        raw_sessions = data.get("sessionHours") or {}
        if not isinstance(raw_sessions, Mapping):
            raise ValueError("MarketHours.sessionHours: expected a JSON object")
        sessions: dict[str, list[SessionHours]] = {}
        for name, windows in raw_sessions.items():
            windows = windows or []
            if not isinstance(windows, list):
                raise ValueError(f"MarketHours.sessionHours[{name!r}]: expected a list")
            sessions[name] = [SessionHours.from_dict(window) for window in windows]
        return cls(
            date=f.text("date"),
            market_type=f.text("marketType"),
            exchange=f.text("exchange"),
            category=f.text("category"),
            product=f.text("product"),
            product_name=f.text("productName"),
            is_open=f.flag("isOpen"),
            session_hours=sessions,
        )


MarketHoursMap = dict[str, dict[str, MarketHours]]


def parse_market_hours_map(data: Any) -> MarketHoursMap:
    """Decode a map keyed by market type, then by product."""
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError("MarketHoursMap: expected a JSON object")
    result: MarketHoursMap = {}
    for market, products in data.items():
        if products is None:
            result[market] = {}
            continue
        if not isinstance(products, Mapping):
            raise ValueError(f"MarketHoursMap[{market!r}]: expected a JSON object")
        result[market] = {
            product: MarketHours.from_dict(hours) for product, hours in products.items()
        }
    return result


def validate_market_id(market_id: MarketID | str) -> MarketID:
    """Return ``market_id`` as a ``MarketID`` or raise ``ValueError``."""
    try:
        return MarketID(market_id)
    except ValueError:
        raise ValueError(
            f"invalid market {_quoted(market_id)}: "
            "expected one of equity, option, bond, future, forex"
        ) from None


def validate_market_ids(markets: Iterable[MarketID | str] | None) -> list[MarketID]:
    """Validate a non-empty list of distinct markets."""
    markets = list(markets or [])
    if not markets:
        raise ValueError("markets is required")
    seen: list[MarketID] = []
    for market in markets:
        market_id = validate_market_id(market)
        if market_id in seen:
            raise ValueError(f"duplicate market {_quoted(market_id)}")
        seen.append(market_id)
    return seen


def _one_year_after(day: Date) -> Date:
    try:
        return day.replace(year=day.year + 1)
    except ValueError:
        # February 29 rolls over to March 1.
        return Date(day.year + 1, 3, 1)


def validate_market_hours_date(date: str, now: datetime | None = None) -> Date | None:
    """Check a YYYY-MM-DD date lies between today and one year out, inclusive.

    Returns the parsed date, or None when ``date`` is empty.
    """
    if not date:
        return None
    parsed: Date | None = None
    if _DATE_PATTERN.fullmatch(date):
        try:
            parsed = Date.fromisoformat(date)
        except ValueError:
            parsed = None
    if parsed is None:
        raise ValueError(f"invalid date {_quoted(date)}: expected YYYY-MM-DD")

    today = (now or datetime.now()).date()
    if parsed < today:
        raise ValueError(f"date {_quoted(date)} is before today")
    if parsed > _one_year_after(today):
        raise ValueError(f"date {_quoted(date)} is more than one year from today")
    return parsed


def _decode(data: Any) -> MarketHoursMap:
    try:
        return parse_market_hours_map(data)
    except ValueError as exc:
        raise ResponseError(f"decode response body: {exc}") from exc


class HoursMixin:
    """Adds the market hours endpoints to a client with a ``request`` method."""

    def get_market_hours(
        self, markets: Iterable[MarketID | str] | None, date: str = ""
    ) -> MarketHoursMap:
        """Fetch hours for several markets; ``date`` is optional (YYYY-MM-DD)."""
        market_ids = validate_market_ids(markets)
        validate_market_hours_date(date)
        query = {"markets": ",".join(market_id.value for market_id in market_ids)}
        if date:
            query["date"] = date
        return _decode(self.request("/markets", query))  # type: ignore[attr-defined]

    def get_market_hours_single(self, market_id: MarketID | str, date: str = "") -> MarketHoursMap:
        """Fetch hours for one market; ``date`` is optional (YYYY-MM-DD)."""
        validated = validate_market_id(market_id)
        validate_market_hours_date(date)
        query = {"date": date} if date else None
        path = "/markets/" + quote(validated.value, safe="")
        return _decode(self.request(path, query))  # type: ignore[attr-defined]