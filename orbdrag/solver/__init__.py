"""
Solver Package - Drag planner for a 6x6 match-3 board.

This package finds a single continuous drag (pick a piece up, slide the
hole through neighbouring cells, drop out through the staging row or on an
end cell) that reaches a target number of cleared clusters.

Public API:
    - BoardState: Immutable board representation
    - Cell, encode(), decode(): Cell codec
    - SolverConfig, Axis, Priority: Search parameters
    - SolveResult, SolutionMetrics: Result of a solve
    - SolutionContext: Cancellation and progress for one solve
    - SolverStrategy: Abstract base for strategies
    - ResultCache: Memoization by board and configuration
    - solve(): Entry point
    - create_strategy(), get_strategy_names()

Usage:
    from orbdrag.solver import BoardState, SolverConfig, Axis, solve

    board = BoardState.from_codes(codes)
    result = solve(board, SolverConfig(axis=Axis.VERTICAL), target=3)

    for r, c in result.path:
        print(f"({r},{c})")
"""

# Core data structures
from .board import (
    BoardState,
    Cell,
    Designation,
    Restriction,
    EMPTY,
    decode,
    encode,
)
from .config import Axis, Priority, SolverConfig
from .context import SolutionContext
from .evaluation import Evaluation, evaluate_board
from .exceptions import BoardFormatError, MarkConflictError, SolverError, UnknownStrategyError
from .matching import MatchResult, find_matches
from .gravity import apply_gravity
from .scoring import calc_score, potential_score, theoretical_max_clusters
from .solution import SolutionMetrics, SolveResult
from .cache import ResultCache, make_cache_key

# Strategy framework
from .base import SolverStrategy
from .factory import (
    create_strategy,
    get_strategy_names,
    register_strategy,
)

# Import strategies to register them
from . import strategies

from .api import build_config, default_cache, solve

__all__ = [
    # Data structures
    "BoardState",
    "Cell",
    "Designation",
    "Restriction",
    "EMPTY",
    "decode",
    "encode",
    "Axis",
    "Priority",
    "SolverConfig",
    "SolutionContext",
    "Evaluation",
    "MatchResult",
    "SolveResult",
    "SolutionMetrics",
    "ResultCache",
    # Errors
    "SolverError",
    "BoardFormatError",
    "MarkConflictError",
    "UnknownStrategyError",
    # Evaluation
    "find_matches",
    "apply_gravity",
    "evaluate_board",
    "potential_score",
    "calc_score",
    "theoretical_max_clusters",
    "make_cache_key",
    # Strategy framework
    "SolverStrategy",
    "create_strategy",
    "get_strategy_names",
    "register_strategy",
    # Entry point
    "build_config",
    "default_cache",
    "solve",
]
