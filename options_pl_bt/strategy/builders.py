"""
Leg builders for the common strategy shapes.

Builders only assemble legs; structural checks stay in the validator.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Tuple, Union

from .models import Leg, OptionType, Side

Number = Union[Decimal, int, float, str]


def _dec(x: Number) -> Decimal:
    return x if isinstance(x, Decimal) else Decimal(str(x))


def single_leg(
    option_type: OptionType | str,
    strike: Number,
    side: Side | str,
    expiry: date,
    contracts: int = 1,
) -> Tuple[Leg]:
    return (Leg(OptionType.parse(option_type), _dec(strike), Side.parse(side), int(contracts), expiry),)


def credit_spread(
    option_type: OptionType | str,
    short_strike: Number,
    long_strike: Number,
    expiry: date,
    contracts: int = 1,
) -> Tuple[Leg, Leg]:
    """Short leg first, then the protective long leg of the same type."""
    cp = OptionType.parse(option_type)
    return (
        Leg(cp, _dec(short_strike), Side.SHORT, int(contracts), expiry),
        Leg(cp, _dec(long_strike), Side.LONG, int(contracts), expiry),
    )


def iron_condor(
    put_long: Number,
    put_short: Number,
    call_short: Number,
    call_long: Number,
    expiry: date,
    contracts: int = 1,
) -> Tuple[Leg, Leg, Leg, Leg]:
    """Put spread legs followed by call spread legs, strikes given low to high."""
    return (
        *credit_spread(OptionType.PUT, put_short, put_long, expiry, contracts),
        *credit_spread(OptionType.CALL, call_short, call_long, expiry, contracts),
    )
