"""
Solver API Module - The solve(board, config) entry point.

Consumers (replay, export, UI) only go through solve(); they never see the
search internals.
"""

import dataclasses
import logging
from typing import Optional, Sequence, Union

from .board import BoardState
from .cache import ResultCache, make_cache_key
from .config import Axis, Priority, SolverConfig
from .context import SolutionContext
from .factory import create_strategy
from .scoring import theoretical_max_clusters
from .solution import SolveResult

logger = logging.getLogger(__name__)

# Process-wide memo shared by callers that do not bring their own cache
default_cache = ResultCache()


def build_config(config: Optional[SolverConfig] = None,
                 axis: Optional[Union[Axis, str]] = None,
                 priority: Optional[Union[Priority, str]] = None,
                 chain_enabled: Optional[bool] = None,
                 diagonal_enabled: Optional[bool] = None) -> SolverConfig:
    """Apply per-call mode overrides on top of a base config."""
    base = config or SolverConfig()
    overrides = {
        "axis": axis,
        "priority": priority,
        "chain_enabled": chain_enabled,
        "diagonal_enabled": diagonal_enabled,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return dataclasses.replace(base, **overrides) if overrides else base


def solve(board: Union[BoardState, Sequence[int]],
          config: Optional[SolverConfig] = None,
          target: Optional[int] = None,
          *,
          axis: Optional[Union[Axis, str]] = None,
          priority: Optional[Union[Priority, str]] = None,
          chain_enabled: Optional[bool] = None,
          diagonal_enabled: Optional[bool] = None,
          context: Optional[SolutionContext] = None,
          cache: Optional[ResultCache] = None,
          use_cache: bool = True,
          strategy_name: str = "beam") -> SolveResult:
    """
    Plan the best single drag for a board.

    Args:
        board: BoardState or the flat 36-code transfer format
        config: Search parameters (defaults to SolverConfig())
        target: Target clusters; None uses the board's theoretical maximum
        axis: Preferred axis override
        priority: Priority override
        chain_enabled: Chain reaction override
        diagonal_enabled: Diagonal move override
        context: Supplies cancel flag, timeout and progress callback
        cache: Result cache (defaults to the module cache)
        use_cache: Set False to bypass memoization
        strategy_name: Registered strategy to run

    Returns:
        SolveResult; clusters may fall short of target when infeasible

    Raises:
        BoardFormatError: Malformed board
        MarkConflictError: Conflicting start/end marks
    """
    if not isinstance(board, BoardState):
        board = BoardState.from_codes(board)

    config = build_config(config, axis, priority, chain_enabled, diagonal_enabled)
    if target is None:
        target = theoretical_max_clusters(board)
        logger.debug(f"No target given, using theoretical max {target}")
    if target < 0:
        raise ValueError(f"target must be non-negative, got {target}")

    result_cache = (cache if cache is not None else default_cache) if use_cache else None
    key = make_cache_key(board, config, target, strategy_name)

    if result_cache is not None:
        cached = result_cache.get(key)
        if cached is not None:
            logger.info(f"Cache hit: {cached.total_clusters}/{target} clusters, {cached.steps} steps")
            return dataclasses.replace(
                cached, metrics=dataclasses.replace(cached.metrics, from_cache=True)
            )

    if context is None:
        run_context = SolutionContext(board=board, config=config, target=target)
    else:
        run_context = dataclasses.replace(context, board=board, config=config, target=target)

    strategy = create_strategy(strategy_name)
    result = strategy.solve(run_context)

    if result_cache is not None:
        result_cache.put(key, result)
    return result
