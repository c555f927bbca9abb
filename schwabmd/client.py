"""Client for the market data API."""

from __future__ import annotations

from .chains import ChainsMixin
from .expirationchain import ExpirationChainMixin
from .hours import HoursMixin
from .instruments import InstrumentsMixin
from .movers import MoversMixin
from .pricehistory import PriceHistoryMixin
from .session import BaseClient


class MarketDataClient(
    ChainsMixin,
    HoursMixin,
    ExpirationChainMixin,
    MoversMixin,
    InstrumentsMixin,
    PriceHistoryMixin,
    BaseClient,
):
    """HTTP client for the market data API.

    Usable as a context manager; closes the HTTP client it created on exit.
    """