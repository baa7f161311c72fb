"""
Solution Module - Result of a drag solve.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .board import Position


@dataclass(frozen=True)
class SolutionMetrics:
    """
    Performance metrics for solution computation.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Frontier states expanded
        pruned_branches: Expansions discarded by deduplication
        steps_searched: Frontier advances performed
        strategy_name: Name of strategy that computed this solution
        from_cache: True if the result was served by the result cache
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    pruned_branches: int = 0
    steps_searched: int = 0
    strategy_name: str = ""
    from_cache: bool = False


@dataclass(frozen=True)
class SolveResult:
    """
    Best drag found by a solve.

    Immutable: the result cache shares one instance between callers.

    Attributes:
        path: Drag positions, origin first; empty if nothing was acceptable
        total_clusters: Clusters including the chain reaction
        chain_clusters: Clusters produced by the chain reaction only
        cleared_count: Cells cleared
        vertical_clusters: Clusters tagged vertical
        horizontal_clusters: Clusters tagged horizontal
        target: Target the search was run with
        score: Search score of the returned path
        was_cancelled: Stopped early by cancellation or timeout
        budget_exhausted: Step or node budget cut the search short
        metrics: Performance statistics
    """
    path: Tuple[Position, ...] = ()
    total_clusters: int = 0
    chain_clusters: int = 0
    cleared_count: int = 0
    vertical_clusters: int = 0
    horizontal_clusters: int = 0
    target: int = 0
    score: float = float("-inf")
    was_cancelled: bool = False
    budget_exhausted: bool = False
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    @property
    def steps(self) -> int:
        """Number of moves in the drag."""
        return max(0, len(self.path) - 1)

    @property
    def first_pass_clusters(self) -> int:
        return self.total_clusters - self.chain_clusters

    @property
    def has_path(self) -> bool:
        return len(self.path) > 0

    @property
    def target_met(self) -> bool:
        return self.has_path and self.total_clusters >= self.target

    def to_dict(self) -> Dict[str, Any]:
        """Plain transfer form for consumers such as a replay layer."""
        return {
            "path": [list(p) for p in self.path],
            "totalClusters": self.total_clusters,
            "chainClusters": self.chain_clusters,
            "clearedCount": self.cleared_count,
            "verticalClusters": self.vertical_clusters,
            "horizontalClusters": self.horizontal_clusters,
            "steps": self.steps,
            "wasCancelled": self.was_cancelled,
            "budgetExhausted": self.budget_exhausted,
        }
