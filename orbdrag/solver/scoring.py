"""
Scoring Module - Near-match potential and the two-regime search score.

Before the target is reachable the score rewards clusters on the preferred
axis, closeness to the target and promising near-matches. Once a branch
meets the target it switches to a flat base that only pays for cleared
cells and charges for steps and overshoot.
"""

from typing import Sequence

from .board import COLS, EMPTY, PIECE_TYPES, PLAY_ROWS_START, TOTAL_ROWS, BoardState, piece_of
from .config import Axis, Priority, SolverConfig
from .evaluation import Evaluation

PREFERRED_AXIS_WEIGHT = 3.0
OTHER_AXIS_WEIGHT = 0.5

# Any target-meeting drag outranks every drag that falls short
TARGET_MET_BASE = 1_000_000_000
AXIS_CLUSTER_BONUS = 5_000_000
CLUSTER_WEIGHT = 1_000_000
OVERSHOOT_PENALTY = 600_000
MISS_PENALTY = 8_000
UNMET_STEP_COST = 20
MIN_STEPS_PENALTY_FACTOR = 4
MIN_STEPS_CLEARED_DIVISOR = 5


def _near_matches(a: int, b: int, c: int) -> int:
    """Count two-of-three patterns in a window that starts on a piece."""
    if a == EMPTY:
        return 0
    count = 0
    if a == b != c:
        count += 1
    if b == c != a:
        count += 1
    if a == c != b:
        count += 1
    return count


def potential_score(grid: Sequence[Sequence[int]], axis: Axis) -> float:
    """
    Score near-matches over every 3-cell window of the playable region.

    Args:
        grid: 6x6 cell codes without a hole
        axis: Preferred axis, weighted heavier

    Returns:
        Weighted near-match count
    """
    h_weight = PREFERRED_AXIS_WEIGHT if axis == Axis.HORIZONTAL else OTHER_AXIS_WEIGHT
    v_weight = PREFERRED_AXIS_WEIGHT if axis == Axis.VERTICAL else OTHER_AXIS_WEIGHT
    pieces = [[piece_of(v) for v in row] for row in grid]

    h_count = 0
    for r in range(PLAY_ROWS_START, TOTAL_ROWS):
        row = pieces[r]
        for c in range(COLS - 2):
            h_count += _near_matches(row[c], row[c + 1], row[c + 2])

    v_count = 0
    for c in range(COLS):
        for r in range(PLAY_ROWS_START, TOTAL_ROWS - 2):
            v_count += _near_matches(pieces[r][c], pieces[r + 1][c], pieces[r + 2][c])

    return h_count * h_weight + v_count * v_weight


def calc_score(evaluation: Evaluation, potential: float, path_len: int,
               target: int, config: SolverConfig) -> float:
    """
    Convert an evaluated board and path length into one comparable score.

    Args:
        evaluation: Board evaluation (clusters include chains)
        potential: potential_score() of the same board
        path_len: Steps taken so far
        target: Target cluster count
        config: Weights, axis and priority

    Returns:
        Score, higher is better
    """
    min_steps = config.priority == Priority.MIN_STEPS
    cleared_weight = config.cleared_weight
    if min_steps:
        cleared_weight = cleared_weight / MIN_STEPS_CLEARED_DIVISOR

    if evaluation.clusters >= target:
        step_penalty = config.step_penalty
        if min_steps:
            step_penalty *= MIN_STEPS_PENALTY_FACTOR
        over = evaluation.clusters - target
        return (TARGET_MET_BASE
                - path_len * step_penalty
                - over * over * OVERSHOOT_PENALTY
                + evaluation.cleared * cleared_weight)

    miss = target - evaluation.clusters
    axis_bonus = evaluation.axis_clusters(config.vertical) * AXIS_CLUSTER_BONUS
    return (axis_bonus
            + min(evaluation.clusters, target) * CLUSTER_WEIGHT
            - miss * miss * MISS_PENALTY
            + potential * config.potential_weight
            + evaluation.cleared * cleared_weight
            - path_len * UNMET_STEP_COST)


def theoretical_max_clusters(board: BoardState) -> int:
    """
    Upper bound on first-pass clusters reachable by one drag.

    Every three pieces of a type can form at most one cluster; a drag that
    starts in the staging row brings one extra piece of that type in.

    Args:
        board: Board to inspect

    Returns:
        Best sum of count // 3 over piece types
    """
    counts = [0] * PIECE_TYPES
    for r in range(PLAY_ROWS_START, TOTAL_ROWS):
        for c in range(COLS):
            piece = piece_of(board.grid[r][c])
            if piece != EMPTY:
                counts[piece] += 1

    best = sum(n // 3 for n in counts)
    for c in range(COLS):
        held = piece_of(board.grid[0][c])
        if held == EMPTY:
            continue
        total = sum((n + (1 if i == held else 0)) // 3 for i, n in enumerate(counts))
        best = max(best, total)
    return best
