"""
Leg pricing from quoted mids or, at expiry, from intrinsic value.

All functions are pure and work in Decimal dollars. A contract covers
CONTRACT_MULTIPLIER shares of the underlying.
"""

from decimal import Decimal

from ..strategy.models import Leg, OptionType, Side

CONTRACT_MULTIPLIER = Decimal(100)


def sign(side: Side) -> int:
    return 1 if side == Side.LONG else -1


def intrinsic(underlying: Decimal, strike: Decimal, option_type: OptionType) -> Decimal:
    """Payoff per share at expiration; never negative"""
    if option_type == OptionType.CALL:
        return max(Decimal(0), underlying - strike)
    return max(Decimal(0), strike - underlying)


def leg_value_from_mid(mid: Decimal, side: Side, contracts: int) -> Decimal:
    return sign(side) * mid * CONTRACT_MULTIPLIER * contracts


def leg_value_from_intrinsic(underlying: Decimal, leg: Leg) -> Decimal:
    return sign(leg.side) * intrinsic(underlying, leg.strike, leg.type) * CONTRACT_MULTIPLIER * leg.contracts
