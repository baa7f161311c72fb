"""
Evaluation Module - Chain resolution over detect/clear/compact passes.
"""

from dataclasses import dataclass
from typing import Sequence

from .gravity import apply_gravity
from .matching import find_matches


@dataclass(frozen=True)
class Evaluation:
    """
    Totals for a board after its first clear and any chain reaction.

    Attributes:
        clusters: Total clusters, first pass plus chain
        chain_clusters: Clusters produced by the chain reaction only
        cleared: Total cells cleared
        horizontal: Clusters tagged horizontal across all passes
        vertical: Clusters tagged vertical across all passes
        passes: Detection passes that found at least one cluster
    """
    clusters: int = 0
    chain_clusters: int = 0
    cleared: int = 0
    horizontal: int = 0
    vertical: int = 0
    passes: int = 0

    @property
    def first_pass_clusters(self) -> int:
        return self.clusters - self.chain_clusters

    def axis_clusters(self, vertical: bool) -> int:
        """Cluster count on the requested axis."""
        return self.vertical if vertical else self.horizontal


def evaluate_board(grid: Sequence[Sequence[int]], chain_enabled: bool = False) -> Evaluation:
    """
    Evaluate a hole-free board.

    With chains disabled only the first detection pass counts. Otherwise
    gravity and re-detection repeat until a pass finds nothing; every
    productive pass removes at least three pieces, so the loop is bounded
    by the playable cell count.

    Args:
        grid: 6x6 cell codes
        chain_enabled: Whether to resolve the chain reaction

    Returns:
        Evaluation with accumulated counts
    """
    result = find_matches(grid)
    if result.clusters == 0:
        return Evaluation()

    first_clusters = result.clusters
    clusters = result.clusters
    cleared = result.cleared
    horizontal = result.horizontal
    vertical = result.vertical
    passes = 1

    if chain_enabled:
        current = grid
        while result.clusters > 0:
            current = apply_gravity(current, result.clear_mask)
            result = find_matches(current)
            if result.clusters > 0:
                clusters += result.clusters
                cleared += result.cleared
                horizontal += result.horizontal
                vertical += result.vertical
                passes += 1

    return Evaluation(
        clusters=clusters,
        chain_clusters=clusters - first_clusters,
        cleared=cleared,
        horizontal=horizontal,
        vertical=vertical,
        passes=passes,
    )
