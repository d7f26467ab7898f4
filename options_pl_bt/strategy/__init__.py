"""
Strategy module: domain types, structural validation and leg builders.

Validators register themselves via @register_validator when validator.py is imported,
so importing this package is enough to make every kind available.
"""

from .models import OptionType, Side, StrategyKind, Leg, Strategy
from .registry import register_validator, list_kinds, parse_strategy_kind, get_validator
from .validator import validate_strategy
from .builders import single_leg, credit_spread, iron_condor
from .schemas import BacktestRequest, LegRequest

__all__ = [
    "OptionType",
    "Side",
    "StrategyKind",
    "Leg",
    "Strategy",
    "register_validator",
    "list_kinds",
    "parse_strategy_kind",
    "get_validator",
    "validate_strategy",
    "single_leg",
    "credit_spread",
    "iron_condor",
    "BacktestRequest",
    "LegRequest",
]
