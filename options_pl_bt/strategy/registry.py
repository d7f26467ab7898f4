"""
Validator registry keyed by strategy kind.

Each kind registers exactly one structural validator using @register_validator.
Lookup resolves free-form kind strings ("iron condor", "CreditSpread") to a StrategyKind.
"""

from typing import Callable, Dict, List, Sequence
import logging

from ..errors import InvalidInputError
from .models import Leg, StrategyKind

logger = logging.getLogger(__name__)

LegValidator = Callable[[Sequence[Leg]], None]

# Global registry: kind -> validator function
_validator_registry: Dict[StrategyKind, LegValidator] = {}


def register_validator(kind: StrategyKind):
    """
    Decorator to register the structural validator for a strategy kind.

    Example:
        @register_validator(StrategyKind.SINGLE_LEG)
        def validate_single_leg(legs):
            ...
    """
    def decorator(fn: LegValidator) -> LegValidator:
        if kind in _validator_registry:
            logger.warning(f"Validator for '{kind.value}' is already registered. Overwriting.")
        _validator_registry[kind] = fn
        logger.debug(f"Registered validator: {kind.value} -> {fn.__name__}")
        return fn
    return decorator


def list_kinds() -> List[str]:
    """Names of all kinds with a registered validator"""
    return [kind.value for kind in StrategyKind if kind in _validator_registry]


def parse_strategy_kind(value: str) -> StrategyKind:
    """
    Resolve a kind string, ignoring case and whitespace.

    Raises:
        InvalidInputError: If the string is blank or names no known kind
    """
    if value is None or not str(value).strip():
        raise InvalidInputError("Strategy type is required.")

    compact = "".join(str(value).split()).lower()
    for kind in StrategyKind:
        if kind.value.lower() == compact:
            return kind

    supported = ", ".join(kind.value for kind in StrategyKind)
    raise InvalidInputError(f"Unknown strategy type: {value}. Supported types: {supported}")


def get_validator(kind: StrategyKind) -> LegValidator:
    """
    Get the validator registered for a kind.

    Raises:
        KeyError: If no validator is registered (a wiring bug, not a client error)
    """
    try:
        return _validator_registry[kind]
    except KeyError:
        raise KeyError(
            f"No validator registered for strategy kind '{kind.value}'. "
            f"Registered: {', '.join(list_kinds()) or '(none)'}"
        ) from None
