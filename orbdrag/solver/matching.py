"""
Match Detection Module - Finds cleared runs and groups them into clusters.

A run is three or more identical pieces in a playable row or column. All
runs are unioned into one clear mask, and each 4-connected same-type
component of the mask counts as a single cluster, so an L or T shape made
of a horizontal and a vertical run is one cluster tagged on both axes.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import FrozenSet, List, Sequence, Set

from .board import COLS, EMPTY, PLAY_ROWS_START, TOTAL_ROWS, Position, piece_of

MIN_RUN = 3

_NEIGHBORS = ((0, 1), (0, -1), (1, 0), (-1, 0))


@dataclass(frozen=True)
class MatchResult:
    """
    Result of a single detection pass.

    Attributes:
        clusters: Number of connected clusters
        cleared: Number of cells in the clear mask
        horizontal: Clusters containing a row-run member
        vertical: Clusters containing a column-run member
        clear_mask: Positions to clear
    """
    clusters: int = 0
    cleared: int = 0
    horizontal: int = 0
    vertical: int = 0
    clear_mask: FrozenSet[Position] = field(default_factory=frozenset)


def _mark_runs(line: List[int], min_run: int = MIN_RUN) -> List[int]:
    """Indexes of every cell belonging to a maximal run >= min_run."""
    marked: List[int] = []
    start = 0
    n = len(line)
    while start < n:
        end = start + 1
        while end < n and line[end] == line[start]:
            end += 1
        if line[start] != EMPTY and end - start >= min_run:
            marked.extend(range(start, end))
        start = end
    return marked


def find_matches(grid: Sequence[Sequence[int]]) -> MatchResult:
    """
    Detect runs and merge them into clusters.

    Args:
        grid: 6x6 cell codes without a hole (row 0 is ignored)

    Returns:
        MatchResult with counts and the clear mask
    """
    pieces = [[piece_of(v) for v in row] for row in grid]

    horizontal: Set[Position] = set()
    vertical: Set[Position] = set()

    for r in range(PLAY_ROWS_START, TOTAL_ROWS):
        for c in _mark_runs(pieces[r]):
            horizontal.add((r, c))

    for c in range(COLS):
        column = [pieces[r][c] for r in range(PLAY_ROWS_START, TOTAL_ROWS)]
        for i in _mark_runs(column):
            vertical.add((i + PLAY_ROWS_START, c))

    to_clear = horizontal | vertical
    if not to_clear:
        return MatchResult()

    clusters = 0
    h_clusters = 0
    v_clusters = 0
    visited: Set[Position] = set()

    # Row-major scan keeps cluster discovery order deterministic
    for r in range(PLAY_ROWS_START, TOTAL_ROWS):
        for c in range(COLS):
            if (r, c) not in to_clear or (r, c) in visited:
                continue

            clusters += 1
            kind = pieces[r][c]
            has_h = False
            has_v = False
            queue = deque([(r, c)])
            visited.add((r, c))

            while queue:
                cr, cc = queue.popleft()
                if (cr, cc) in horizontal:
                    has_h = True
                if (cr, cc) in vertical:
                    has_v = True

                for dr, dc in _NEIGHBORS:
                    nxt = (cr + dr, cc + dc)
                    if (nxt in to_clear and nxt not in visited
                            and pieces[nxt[0]][nxt[1]] == kind):
                        visited.add(nxt)
                        queue.append(nxt)

            if has_h:
                h_clusters += 1
            if has_v:
                v_clusters += 1

    return MatchResult(
        clusters=clusters,
        cleared=len(to_clear),
        horizontal=h_clusters,
        vertical=v_clusters,
        clear_mask=frozenset(to_clear),
    )
