"""
Portfolio layer: leg pricing and daily position valuation.
"""

from .pricer import CONTRACT_MULTIPLIER, sign, intrinsic, leg_value_from_mid, leg_value_from_intrinsic
from .valuation import position_value_on, leg_value_on, settlement_underlying

__all__ = [
    "CONTRACT_MULTIPLIER",
    "sign",
    "intrinsic",
    "leg_value_from_mid",
    "leg_value_from_intrinsic",
    "position_value_on",
    "leg_value_on",
    "settlement_underlying",
]
