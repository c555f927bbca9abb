"""Market movers models and endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any
from urllib.parse import quote

from .chains import _Fields
from .errors import ResponseError
from .session import format_query_value

# Characters a URL path segment may carry unescaped.
_SEGMENT_SAFE = "$&+:=@"


class MoverSort(StrEnum):
    """Sort order for movers."""

    VOLUME = "VOLUME"
    TRADES = "TRADES"
    PERCENT_CHANGE_UP = "PERCENT_CHANGE_UP"
    PERCENT_CHANGE_DOWN = "PERCENT_CHANGE_DOWN"


@dataclass
class Screener:
    """A single mover entry."""

    symbol: str = ""
    description: str = ""
    direction: str = ""
    last: float = 0.0
    change: float = 0.0
    net_percent_change: float = 0.0
    market_share: float = 0.0
    total_volume: int = 0
    trades: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> Screener:
        f = _Fields(data, "Screener")
        return cls(
            symbol=f.text("symbol"),
            description=f.text("description"),
            direction=f.text("direction"),
            last=f.number("last"),
            change=f.number("change"),
            net_percent_change=f.number("netPercentChange"),
            market_share=f.number("marketShare"),
            total_volume=f.integer("totalVolume"),
            trades=f.integer("trades"),
        )


@dataclass
class MoverResponse:
    """The movers of an index."""

    screeners: list[Screener] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> MoverResponse:
        _Fields(data, "MoverResponse")
        items = data.get("screeners") or []
        if not isinstance(items, list):
            raise ValueError("MoverResponse.screeners: expected a list")
        return cls(screeners=[Screener.from_dict(item) for item in items])


class MoversMixin:
    """Adds the movers endpoint to a client with a ``request`` method."""

    def get_movers(
        self,
        symbol_id: str,
        sort: MoverSort | str | None = None,
        frequency: int | None = None,
    ) -> MoverResponse:
        """Fetch movers for an index such as ``$DJI``; sort and frequency are optional."""
        query: dict[str, str] = {}
        if sort:
            query["sort"] = format_query_value(sort)
        if frequency is not None:
            query["frequency"] = str(frequency)
        path = "/movers/" + quote(symbol_id, safe=_SEGMENT_SAFE)
        data = self.request(path, query)  # type: ignore[attr-defined]
        try:
            return MoverResponse.from_dict(data if data is not None else {})
        except ValueError as exc:
            raise ResponseError(f"decode response body: {exc}") from exc