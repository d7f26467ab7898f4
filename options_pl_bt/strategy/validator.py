"""
Structural validation of strategies, run once before any valuation.

Rules are checked in a fixed order per kind and the first failure is reported.
The credit spread rule about which strike is short is structural only: it never looks at
the underlying price.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..errors import InvalidInputError
from .models import Leg, OptionType, Side, Strategy, StrategyKind
from .registry import get_validator, parse_strategy_kind, register_validator

logger = logging.getLogger(__name__)


def validate_strategy(strategy: Strategy) -> StrategyKind:
    """
    Validate a strategy's shape for its declared kind.

    Returns:
        The resolved StrategyKind

    Raises:
        InvalidInputError: On an unknown kind or the first violated structural rule
    """
    kind = parse_strategy_kind(strategy.strategy_kind)
    get_validator(kind)(strategy.legs)
    logger.debug(f"Strategy accepted: {strategy.symbol} {kind.value} ({len(strategy.legs)} legs)")
    return kind


def _first(legs: Sequence[Leg], side: Side) -> Optional[Leg]:
    return next((leg for leg in legs if leg.side == side), None)


def _of_type(legs: Sequence[Leg], option_type: OptionType) -> List[Leg]:
    return [leg for leg in legs if leg.type == option_type]


@register_validator(StrategyKind.SINGLE_LEG)
def validate_single_leg(legs: Sequence[Leg]) -> None:
    if len(legs) != 1:
        raise InvalidInputError(f"Single leg strategy must have exactly 1 leg. Found {len(legs)} legs.")


@register_validator(StrategyKind.CREDIT_SPREAD)
def validate_credit_spread(legs: Sequence[Leg]) -> None:
    if len(legs) != 2:
        raise InvalidInputError(f"Credit spread must have exactly 2 legs. Found {len(legs)} legs.")

    short_leg = _first(legs, Side.SHORT)
    long_leg = _first(legs, Side.LONG)
    if short_leg is None:
        raise InvalidInputError("Credit spread must have a short leg.")
    if long_leg is None:
        raise InvalidInputError("Credit spread must have a long leg.")

    if short_leg.type != long_leg.type:
        raise InvalidInputError(
            f"Credit spread legs must be the same type. Found {short_leg.type.value} and {long_leg.type.value}."
        )
    if short_leg.expiry != long_leg.expiry:
        raise InvalidInputError("Credit spread legs must have the same expiry date.")
    if short_leg.contracts != long_leg.contracts:
        raise InvalidInputError(
            f"Credit spread legs must have the same number of contracts. "
            f"Found {short_leg.contracts} and {long_leg.contracts}."
        )

    # short strike sits closer to the money: below the long for calls, above it for puts
    if short_leg.type == OptionType.CALL:
        if short_leg.strike >= long_leg.strike:
            raise InvalidInputError(
                f"Call credit spread: short strike ({short_leg.strike}) must be less than "
                f"long strike ({long_leg.strike})."
            )
    elif short_leg.strike <= long_leg.strike:
        raise InvalidInputError(
            f"Put credit spread: short strike ({short_leg.strike}) must be greater than "
            f"long strike ({long_leg.strike})."
        )


@register_validator(StrategyKind.IRON_CONDOR)
def validate_iron_condor(legs: Sequence[Leg]) -> None:
    if len(legs) != 4:
        raise InvalidInputError(f"Iron condor must have exactly 4 legs. Found {len(legs)} legs.")

    calls = _of_type(legs, OptionType.CALL)
    puts = _of_type(legs, OptionType.PUT)
    if len(calls) != 2:
        raise InvalidInputError(f"Iron condor must have exactly 2 call legs. Found {len(calls)}.")
    if len(puts) != 2:
        raise InvalidInputError(f"Iron condor must have exactly 2 put legs. Found {len(puts)}.")

    call_short, call_long = _first(calls, Side.SHORT), _first(calls, Side.LONG)
    if call_short is None or call_long is None:
        raise InvalidInputError("Iron condor call spread must have one short and one long leg.")
    if call_short.strike >= call_long.strike:
        raise InvalidInputError(
            f"Iron condor call spread: short strike ({call_short.strike}) must be less than "
            f"long strike ({call_long.strike})."
        )

    put_short, put_long = _first(puts, Side.SHORT), _first(puts, Side.LONG)
    if put_short is None or put_long is None:
        raise InvalidInputError("Iron condor put spread must have one short and one long leg.")
    if put_short.strike <= put_long.strike:
        raise InvalidInputError(
            f"Iron condor put spread: short strike ({put_short.strike}) must be greater than "
            f"long strike ({put_long.strike})."
        )

    if len({leg.expiry for leg in legs}) > 1:
        raise InvalidInputError("All iron condor legs must have the same expiry date.")
    if len({leg.contracts for leg in legs}) > 1:
        raise InvalidInputError("All iron condor legs must have the same number of contracts.")

    if put_short.strike >= call_short.strike:
        raise InvalidInputError(
            f"Iron condor: put short strike ({put_short.strike}) must be less than "
            f"call short strike ({call_short.strike})."
        )


@register_validator(StrategyKind.CUSTOM)
def validate_custom(legs: Sequence[Leg]) -> None:
    """Custom strategies carry no structural constraints."""
