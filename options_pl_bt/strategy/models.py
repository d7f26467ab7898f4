"""
Strategy domain types: option type, side, strategy kind, legs.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Tuple

from ..errors import InvalidInputError


class OptionType(str, Enum):
    CALL = "Call"
    PUT = "Put"

    @classmethod
    def parse(cls, value: "OptionType | str") -> "OptionType":
        """Parse 'call'/'put' in any case"""
        if isinstance(value, OptionType):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        raise InvalidInputError(f"Unknown option type: {value!r}. Expected Call or Put")


class Side(str, Enum):
    LONG = "Long"
    SHORT = "Short"

    @classmethod
    def parse(cls, value: "Side | str") -> "Side":
        """Parse 'long'/'short' in any case"""
        if isinstance(value, Side):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        raise InvalidInputError(f"Unknown side: {value!r}. Expected Long or Short")


class StrategyKind(str, Enum):
    SINGLE_LEG = "SingleLeg"
    CREDIT_SPREAD = "CreditSpread"
    IRON_CONDOR = "IronCondor"
    CUSTOM = "Custom"


@dataclass(frozen=True)
class Leg:
    """One option position inside a strategy."""

    type: OptionType
    strike: Decimal
    side: Side
    contracts: int
    expiry: date

    def __post_init__(self):
        if not isinstance(self.strike, Decimal):
            object.__setattr__(self, "strike", Decimal(str(self.strike)))
        if not self.strike.is_finite() or self.strike < 0:
            raise InvalidInputError(f"Leg strike must be a non-negative number. Got {self.strike}.")
        if not isinstance(self.contracts, int):
            try:
                object.__setattr__(self, "contracts", int(self.contracts))
            except (TypeError, ValueError):
                raise InvalidInputError(f"Leg contracts must be a whole number. Got {self.contracts!r}.") from None
        if self.contracts < 1:
            raise InvalidInputError(f"Leg contracts must be at least 1. Got {self.contracts}.")

    def describe(self) -> str:
        return f"{self.side.value} {self.contracts}x {self.type.value} {self.strike} exp {self.expiry.isoformat()}"


@dataclass(frozen=True)
class Strategy:
    """
    A strategy as received from a caller.

    strategy_kind is the raw string; the validator resolves it to a StrategyKind.
    """

    symbol: str
    strategy_kind: str
    legs: Tuple[Leg, ...]

    def __post_init__(self):
        object.__setattr__(self, "legs", tuple(self.legs))

    @property
    def min_expiry(self) -> date:
        return min(leg.expiry for leg in self.legs)
