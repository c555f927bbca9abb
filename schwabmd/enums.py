"""Enumerations of values accepted and returned by the market data API."""

from __future__ import annotations

from enum import StrEnum


class QuoteType(StrEnum):
    """Quote feed type in a quote envelope."""

    NBBO = "NBBO"


class OptionChainContractType(StrEnum):
    """Filters or identifies option chain contracts."""

    CALL = "CALL"
    PUT = "PUT"
    ALL = "ALL"


class OptionContractType(StrEnum):
    """Option contract side in quote reference payloads."""

    PUT = "P"
    CALL = "C"


class OptionChainStrategy(StrEnum):
    """Option chain strategy filters."""

    SINGLE = "SINGLE"
    ANALYTICAL = "ANALYTICAL"
    COVERED = "COVERED"
    VERTICAL = "VERTICAL"
    CALENDAR = "CALENDAR"
    STRANGLE = "STRANGLE"
    STRADDLE = "STRADDLE"
    BUTTERFLY = "BUTTERFLY"
    CONDOR = "CONDOR"
    DIAGONAL = "DIAGONAL"
    COLLAR = "COLLAR"
    ROLL = "ROLL"


class OptionChainRange(StrEnum):
    """Option chain strike range filters."""

    IN_THE_MONEY = "ITM"
    NEAR_THE_MONEY = "NTM"
    OUT_OF_THE_MONEY = "OTM"
    STRIKES_ABOVE_MARKET = "SAK"
    STRIKES_BELOW_MARKET = "SBK"
    STRIKES_NEAR_MARKET = "SNK"
    ALL = "ALL"


class ExpirationMonth(StrEnum):
    """Option expiration month filters."""

    JANUARY = "JAN"
    FEBRUARY = "FEB"
    MARCH = "MAR"
    APRIL = "APR"
    MAY = "MAY"
    JUNE = "JUN"
    JULY = "JUL"
    AUGUST = "AUG"
    SEPTEMBER = "SEP"
    OCTOBER = "OCT"
    NOVEMBER = "NOV"
    DECEMBER = "DEC"
    ALL = "ALL"


class OptionChainType(StrEnum):
    """Standard versus non-standard option chain filters."""

    STANDARD = "S"
    NON_STANDARD = "NS"
    ALL = "ALL"


class OptionEntitlement(StrEnum):
    """Entitlement filters for option chains."""

    PAYING_NON_PROFESSIONAL = "PN"
    NON_PROFESSIONAL = "NP"
    PAYING_PROFESSIONAL = "PP"


class OptionExerciseType(StrEnum):
    """American or European exercise style."""

    AMERICAN = "A"
    EUROPEAN = "E"


class OptionExpirationType(StrEnum):
    """Option expiration cycle."""

    MONTHLY = "M"
    QUARTERLY = "Q"
    STANDARD = "S"
    WEEKLY = "W"


class OptionSettlementType(StrEnum):
    """Option settlement time."""

    AM = "A"
    PM = "P"


class MarketID(StrEnum):
    """Markets that have trading hours resources."""

    EQUITY = "equity"
    OPTION = "option"
    BOND = "bond"
    FUTURE = "future"
    FOREX = "forex"