"""
Request schemas using Pydantic for validation and type safety.

Field names follow the wire format (camelCase aliases); snake_case names are accepted too.
The strategy kind is read from strategyKind or strategyType and written back as strategyType.
"""

from datetime import date
from decimal import Decimal
from typing import List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .models import Leg, OptionType, Side, Strategy


def _to_decimal(v):
    # floats go through their shortest repr so 42.5 stays 42.5, not a binary expansion
    if isinstance(v, float):
        return Decimal(repr(v))
    return v


class LegRequest(BaseModel):
    """One leg as sent by a client"""
    model_config = ConfigDict(populate_by_name=True)

    type: OptionType = Field(description="Call or Put (case-insensitive)")
    strike: Decimal = Field(ge=0, description="Strike price")
    side: Side = Field(description="Long or Short (case-insensitive)")
    contracts: int = Field(default=1, ge=1, description="Number of contracts")
    expiry: date = Field(description="Expiry date (ISO format, e.g., '2025-01-17')")

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, v):
        return OptionType.parse(v)

    @field_validator("side", mode="before")
    @classmethod
    def parse_side(cls, v):
        return Side.parse(v)

    @field_validator("strike", mode="before")
    @classmethod
    def parse_strike(cls, v):
        return _to_decimal(v)

    def to_leg(self) -> Leg:
        return Leg(type=self.type, strike=self.strike, side=self.side, contracts=self.contracts, expiry=self.expiry)


class BacktestRequest(BaseModel):
    """Strategy description plus entry date"""
    model_config = ConfigDict(populate_by_name=True)

    symbol: str = Field(default="", description="Underlying symbol (informational)")
    entry_date: date = Field(alias="entryDate", description="First day of the simulation window")
    strategy_type: str = Field(
        default="",
        validation_alias=AliasChoices("strategyKind", "strategyType", "strategy_type"),
        serialization_alias="strategyType",
        description="SingleLeg, CreditSpread, IronCondor or Custom",
    )
    legs: List[LegRequest] = Field(default_factory=list, description="Option legs")

    @field_validator("legs", mode="before")
    @classmethod
    def null_legs(cls, v):
        """Missing legs are reported by the engine, not as a schema error"""
        return [] if v is None else v

    def to_strategy(self) -> Strategy:
        return Strategy(
            symbol=self.symbol,
            strategy_kind=self.strategy_type,
            legs=tuple(leg.to_leg() for leg in self.legs),
        )
