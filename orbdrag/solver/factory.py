"""
Strategy Factory Module - Name-to-class registry for drag solvers.

solve() and the CLI look strategies up here by name; concrete strategies
register themselves when orbdrag.solver.strategies is imported.
"""

from typing import Dict, List, Type

from .base import SolverStrategy
from .exceptions import UnknownStrategyError


# Registered strategy classes by name
_STRATEGIES: Dict[str, Type[SolverStrategy]] = {}


def register_strategy(cls: Type[SolverStrategy]) -> Type[SolverStrategy]:
    """
    Class decorator adding a strategy to the registry.

    Usage:
        @register_strategy
        class BeamSearchStrategy(SolverStrategy):
            name = "beam"

    Raises:
        ValueError: Another class already registered under the same name
    """
    existing = _STRATEGIES.get(cls.name)
    if existing is not None and existing is not cls:
        raise ValueError(f"Strategy name {cls.name!r} already used by {existing.__name__}")
    _STRATEGIES[cls.name] = cls
    return cls


def create_strategy(name: str) -> SolverStrategy:
    """
    Instantiate a registered strategy.

    Args:
        name: Strategy name, e.g. "beam"

    Raises:
        UnknownStrategyError: No strategy registered under that name
    """
    try:
        cls = _STRATEGIES[name]
    except KeyError:
        available = ", ".join(get_strategy_names())
        raise UnknownStrategyError(f"Unknown strategy: {name}. Available: {available}") from None
    return cls()


def get_strategy_names() -> List[str]:
    """Registered strategy names, sorted (used for CLI choices)."""
    return sorted(_STRATEGIES)
