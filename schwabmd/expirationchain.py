"""Option expiration chain models and endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .chains import _Fields
from .enums import OptionExpirationType, OptionSettlementType
from .errors import ResponseError


@dataclass
class Expiration:
    """A single option expiration date."""

    expiration_date: str = ""
    days_to_expiration: int = 0
    expiration_type: OptionExpirationType | str = ""
    settlement_type: OptionSettlementType | str = ""
    option_roots: str = ""
    standard: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> Expiration:
        f = _Fields(data, "Expiration")
        return cls(
            expiration_date=f.text("expiration"),
            days_to_expiration=f.integer("daysToExpiration"),
            expiration_type=f.choice("expirationType", OptionExpirationType),
            settlement_type=f.choice("settlementType", OptionSettlementType),
            option_roots=f.text("optionRoots"),
            standard=f.flag("standard"),
        )


@dataclass
class ExpirationChain:
    """The list of expirations available for an underlying symbol."""

    status: str = ""
    expiration_list: list[Expiration] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> ExpirationChain:
        f = _Fields(data, "ExpirationChain")
        items = data.get("expirationList") or []
        if not isinstance(items, list):
            raise ValueError("ExpirationChain.expirationList: expected a list")
        return cls(
            status=f.text("status"),
            expiration_list=[Expiration.from_dict(item) for item in items],
        )


class ExpirationChainMixin:
    """Adds the expiration chain endpoint to a client with a ``request`` method."""

    def get_expiration_chain(self, symbol: str) -> ExpirationChain:
        """Fetch the option expiration chain for an underlying symbol."""
        data = self.request("/expirationchain", {"symbol": symbol})  # type: ignore[attr-defined]
        try:
            return ExpirationChain.from_dict(data if data is not None else {})
        except ValueError as exc:
            raise ResponseError(f"decode response body: {exc}") from exc