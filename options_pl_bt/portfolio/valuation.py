"""
Whole-position valuation on a single trading day.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Sequence

from ..data.models import MarketDataIndex
from ..errors import DataUnavailableError
from ..strategy.models import Leg
from .pricer import leg_value_from_intrinsic, leg_value_from_mid

logger = logging.getLogger(__name__)


def settlement_underlying(index: MarketDataIndex, day: date) -> Decimal:
    """Underlying on `day`, else on the previous trading day, else zero."""
    spot = index.get_underlying(day)
    if spot is not None:
        return spot
    prev = index.prev_trading_day(day)
    if prev is not None:
        spot = index.get_underlying(prev)
        if spot is not None:
            logger.debug(f"No underlying on {day}, settling with {prev} close {spot}")
            return spot
    logger.warning(f"No underlying on or before {day}; settling at zero")
    return Decimal(0)


def leg_value_on(index: MarketDataIndex, day: date, leg: Leg) -> Decimal:
    """
    Value one leg on one day.

    Raises:
        DataUnavailableError: If the leg is unquoted on a day before its expiry
    """
    mid = index.get_mid(day, leg.expiry, leg.strike, leg.type)
    if mid is not None:
        return leg_value_from_mid(mid, leg.side, leg.contracts)

    if day == leg.expiry:
        return leg_value_from_intrinsic(settlement_underlying(index, day), leg)

    raise DataUnavailableError(
        f"Missing mid for leg before expiry on {day.isoformat()} "
        f"(strike={leg.strike}, type={leg.type.value}, expiry={leg.expiry.isoformat()})."
    )


def position_value_on(index: MarketDataIndex, day: date, legs: Sequence[Leg]) -> Decimal:
    """Signed dollar value of all legs on `day`"""
    total = Decimal(0)
    for leg in legs:
        total += leg_value_on(index, day, leg)
    return total
