"""
Beam Search Strategy - Bounded frontier search over hole-sliding drags.

A drag picks one piece up (leaving a hole, or none when it starts in the
staging row) and then steps cell to cell. Every step slides the piece at
the destination into the current hole, so the hole follows the drag. The
drag ends on a terminal-only cell, on the designated end cell, or by
stepping back into the staging row.

Every frontier state, every expansion and every staging-row exit is offered
to a single acceptance policy; the best accepted candidate over the whole
search is returned.
"""

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

from ..base import SolverStrategy
from ..board import (
    COLS, EMPTY, PLAY_ROWS_START, TOTAL_ROWS,
    BoardState, Designation, Grid, Position, Restriction,
    in_bounds, piece_of, restriction_of,
)
from ..config import Priority, SolverConfig
from ..context import SolutionContext
from ..evaluation import Evaluation, evaluate_board
from ..exceptions import MarkConflictError
from ..factory import register_strategy
from ..scoring import calc_score, potential_score
from ..solution import SolutionMetrics, SolveResult

logger = logging.getLogger(__name__)

DIRS_4: Tuple[Tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))
DIRS_8: Tuple[Tuple[int, int], ...] = DIRS_4 + ((1, 1), (1, -1), (-1, 1), (-1, -1))

# Hole key for states that have not entered the playable rows yet
_NO_HOLE = (-1, -1)


@dataclass
class DragState:
    """
    Frontier node: one partially executed drag.

    Attributes:
        grid: Board with the hole left EMPTY
        held: Cell code of the piece being dragged
        hole: Current hole, None while the drag is in the staging row
        pos: Current drag position
        path: Positions visited, origin first
        locked: Stepped on a terminal-only or end cell; no further expansion
        evaluation: Evaluation of the board with the held piece dropped in
        potential: Near-match potential of that board
        score: Search score for this path
    """
    grid: Grid
    held: int
    hole: Optional[Position]
    pos: Position
    path: Tuple[Position, ...]
    locked: bool
    evaluation: Evaluation
    potential: float
    score: float

    @property
    def steps(self) -> int:
        return len(self.path) - 1

    def dedup_key(self) -> tuple:
        return (self.grid, self.held, self.pos, self.hole or _NO_HOLE, self.locked)


class _Seen(NamedTuple):
    horizontal: int
    vertical: int
    clusters: int
    cleared: int
    potential: float
    steps: int


class _BestTracker:
    """
    Acceptance policy for candidate drags.

    MAX_CLUSTERS keeps the highest score, tie broken by cleared count.
    MIN_STEPS keeps the shortest target-meeting drag, and before any drag
    meets the target, the one with the most clusters.
    """

    def __init__(self, config: SolverConfig, target: int, end_pos: Optional[Position]):
        self.priority = config.priority
        self.target = target
        self.end_pos = end_pos
        self.evaluation: Optional[Evaluation] = None
        self.score = float("-inf")
        self.path: Tuple[Position, ...] = ()

    @property
    def clusters(self) -> int:
        return self.evaluation.clusters if self.evaluation else -1

    def consider(self, evaluation: Evaluation, score: float, path: Tuple[Position, ...]) -> bool:
        if self.end_pos is not None and path[-1] != self.end_pos:
            return False

        if self.priority == Priority.MAX_CLUSTERS:
            best_cleared = self.evaluation.cleared if self.evaluation else -1
            better = (score > self.score
                      or (score == self.score and evaluation.cleared > best_cleared))
        elif evaluation.clusters >= self.target:
            better = (self.clusters < self.target
                      or len(path) - 1 < max(0, len(self.path) - 1))
        else:
            better = evaluation.clusters > self.clusters

        if better:
            self.evaluation = evaluation
            self.score = score
            self.path = path
        return better


def locate_marks(board: BoardState) -> Tuple[Optional[Position], Optional[Position]]:
    """
    Find the start and end designations.

    Returns:
        (start, end) positions, each None when absent

    Raises:
        MarkConflictError: More than one start or end, or one on a forbidden cell
    """
    found = board.find_designations()
    starts = found[Designation.START]
    ends = found[Designation.END]
    if len(starts) > 1:
        raise MarkConflictError(f"Multiple start marks: {starts}")
    if len(ends) > 1:
        raise MarkConflictError(f"Multiple end marks: {ends}")
    for pos in starts + ends:
        if restriction_of(board.grid[pos[0]][pos[1]]) == Restriction.FORBIDDEN:
            raise MarkConflictError(f"Start/end mark on forbidden cell {pos}")
    return (starts[0] if starts else None, ends[0] if ends else None)


def _with_held(grid: Grid, hole: Optional[Position], held: int) -> Grid:
    """Board as it would settle if the held piece were dropped into the hole."""
    if hole is None:
        return grid
    rows = [list(row) for row in grid]
    rows[hole[0]][hole[1]] = held
    return tuple(tuple(row) for row in rows)


def _to_grid(rows: Sequence[Sequence[int]]) -> Grid:
    return tuple(tuple(row) for row in rows)


@register_strategy
class BeamSearchStrategy(SolverStrategy):
    """
    Beam search over single-drag move sequences.

    Algorithm:
        1. Seed the frontier with one state per legal origin
        2. For each step up to max_steps:
           - Offer every frontier state's "stay here" candidate
           - Expand unlocked states in all enabled directions
           - Drop revisits of a known state that improve nothing
           - Rank and truncate to beam_width
        3. Return the best candidate accepted during the whole search

    Ranking:
        MAX_CLUSTERS sorts by score, then cleared count, then path length.
        MIN_STEPS buckets states by (axis clusters, clusters, cleared) and
        round-robins over the buckets so several cluster tiers survive.
    """
    name = "beam"
    description = "Beam Search - Bounded frontier over hole-sliding drags"

    def solve(self, context: SolutionContext) -> SolveResult:
        """
        Search for the best drag on the context's board.

        Args:
            context: Solution context with board, config, target, cancellation

        Returns:
            SolveResult with the best path found
        """
        start_time = time.perf_counter()
        config = context.config
        target = context.target
        board = context.board

        start_pos, end_pos = locate_marks(board)
        best = _BestTracker(config, target, end_pos)
        directions = DIRS_8 if config.diagonal_enabled else DIRS_4
        node_budget = config.effective_max_nodes

        # Per-solve state: nothing here outlives this call
        seen: Dict[tuple, _Seen] = {}
        eval_cache: Dict[Grid, Tuple[Evaluation, float]] = {}
        nodes_expanded = 0
        pruned = 0
        steps_searched = 0
        was_cancelled = False
        budget_exhausted = False

        def evaluate(grid: Grid, hole: Optional[Position], held: int) -> Tuple[Evaluation, float]:
            filled = _with_held(grid, hole, held)
            cached = eval_cache.get(filled)
            if cached is None:
                cached = (evaluate_board(filled, config.chain_enabled),
                          potential_score(filled, config.axis))
                eval_cache[filled] = cached
            return cached

        def is_duplicate(state: DragState) -> bool:
            key = state.dedup_key()
            ev = state.evaluation
            prev = seen.get(key)
            if prev is not None:
                same_axis = (ev.vertical == prev.vertical if config.vertical
                             else ev.horizontal == prev.horizontal)
                if (same_axis and ev.clusters == prev.clusters
                        and ev.cleared <= prev.cleared
                        and state.potential <= prev.potential
                        and state.steps >= prev.steps):
                    return True
            seen[key] = _Seen(ev.horizontal, ev.vertical, ev.clusters,
                              ev.cleared, state.potential, state.steps)
            return False

        frontier = self._initial_frontier(board, start_pos, evaluate, config, target)
        for state in frontier:
            is_duplicate(state)

        logger.debug(f"[BeamSearch] {len(frontier)} origins, node budget {node_budget}")

        if config.max_steps == 0 and not self._check_cancelled(context):
            # No step to take: the origins themselves are the only drags
            for state in frontier:
                best.consider(state.evaluation, state.score, state.path)

        for _ in range(config.max_steps):
            if self._check_cancelled(context):
                was_cancelled = True
                break

            candidates: List[DragState] = []

            for state in frontier:
                if nodes_expanded > node_budget:
                    break

                best.consider(state.evaluation, state.score, state.path)
                if state.locked:
                    continue

                r, c = state.pos
                for dr, dc in directions:
                    nr, nc = r + dr, c + dc
                    if not in_bounds(nr, nc):
                        continue

                    new_path = state.path + ((nr, nc),)
                    new_steps = len(new_path) - 1
                    dest = state.grid[nr][nc]
                    mark = restriction_of(dest)
                    if mark == Restriction.FORBIDDEN:
                        continue

                    if r == 0:
                        # Staging row: only drop into the first playable row
                        if nr != PLAY_ROWS_START:
                            continue
                        rows = [list(row) for row in state.grid]
                        rows[nr][nc] = EMPTY
                    elif nr == 0:
                        # Leaving through the staging row ends the drag
                        score = calc_score(state.evaluation, state.potential,
                                           new_steps, target, config)
                        best.consider(state.evaluation, score, new_path)
                        continue
                    else:
                        hr, hc = state.hole
                        rows = [list(row) for row in state.grid]
                        rows[hr][hc] = dest
                        rows[nr][nc] = EMPTY

                    next_grid = _to_grid(rows)
                    next_hole = (nr, nc)
                    ev, pot = evaluate(next_grid, next_hole, state.held)
                    score = calc_score(ev, pot, new_steps, target, config)
                    best.consider(ev, score, new_path)

                    child = DragState(
                        grid=next_grid,
                        held=state.held,
                        hole=next_hole,
                        pos=(nr, nc),
                        path=new_path,
                        locked=mark == Restriction.TERMINAL_ONLY or (nr, nc) == end_pos,
                        evaluation=ev,
                        potential=pot,
                        score=score,
                    )
                    if is_duplicate(child):
                        pruned += 1
                        continue

                    candidates.append(child)
                    nodes_expanded += 1

            steps_searched += 1
            context.report_progress(
                min(0.99, steps_searched / max(1, config.max_steps)),
                f"step {steps_searched}: {len(candidates)} candidates, "
                f"best {max(0, best.clusters)}/{target} clusters"
            )

            if nodes_expanded > node_budget:
                budget_exhausted = True
                break
            if not candidates:
                break

            frontier = self._rank(candidates, config)
            logger.debug(
                f"[BeamSearch] Step {steps_searched}: {len(candidates)} candidates, "
                f"kept {len(frontier)}, best score {best.score}"
            )
        else:
            budget_exhausted = config.max_steps > 0 and bool(frontier)

        result = self._build_result(
            best, target, start_time,
            states_explored=nodes_expanded,
            pruned=pruned,
            steps_searched=steps_searched,
            was_cancelled=was_cancelled,
            budget_exhausted=budget_exhausted,
        )

        logger.info(
            f"[BeamSearch] Solve complete: {result.total_clusters}/{target} clusters, "
            f"{result.steps} steps, {nodes_expanded} nodes, {pruned} pruned"
            + (" (cancelled)" if was_cancelled else "")
            + (" (budget exhausted)" if budget_exhausted else "")
        )
        return result

    def _initial_frontier(
        self,
        board: BoardState,
        start_pos: Optional[Position],
        evaluate: Callable[[Grid, Optional[Position], int], Tuple[Evaluation, float]],
        config: SolverConfig,
        target: int
    ) -> List[DragState]:
        """
        One state per legal origin: staging row first, then playable rows.

        A staging-row origin holds that cell's piece and has no hole yet; a
        playable origin lifts its piece and leaves a hole behind.
        """
        frontier: List[DragState] = []
        origins = [(0, c) for c in range(COLS)]
        origins += [(r, c) for r in range(PLAY_ROWS_START, TOTAL_ROWS) for c in range(COLS)]

        for r, c in origins:
            if start_pos is not None and (r, c) != start_pos:
                continue
            held = board.grid[r][c]
            if piece_of(held) == EMPTY:
                continue
            mark = restriction_of(held)
            if mark == Restriction.FORBIDDEN:
                continue

            if r == 0:
                grid = board.grid
                hole = None
            else:
                rows = board.to_list()
                rows[r][c] = EMPTY
                grid = _to_grid(rows)
                hole = (r, c)

            ev, pot = evaluate(grid, hole, held)
            frontier.append(DragState(
                grid=grid,
                held=held,
                hole=hole,
                pos=(r, c),
                path=((r, c),),
                locked=mark == Restriction.TERMINAL_ONLY,
                evaluation=ev,
                potential=pot,
                score=calc_score(ev, pot, 0, target, config),
            ))

        return frontier

    def _rank(self, candidates: List[DragState], config: SolverConfig) -> List[DragState]:
        """Order candidates and truncate to the beam width."""
        if config.priority == Priority.MAX_CLUSTERS:
            candidates.sort(key=lambda s: (-s.score, -s.evaluation.cleared, len(s.path)))
            return candidates[:config.beam_width]

        buckets: Dict[Tuple[int, int, int], List[DragState]] = {}
        for state in candidates:
            ev = state.evaluation
            key = (ev.axis_clusters(config.vertical), ev.clusters, ev.cleared)
            buckets.setdefault(key, []).append(state)

        queues = [
            deque(sorted(buckets[key], key=lambda s: -s.score))
            for key in sorted(buckets, reverse=True)
        ]

        frontier: List[DragState] = []
        i = 0
        while len(frontier) < config.beam_width and queues:
            idx = i % len(queues)
            if queues[idx]:
                frontier.append(queues[idx].popleft())
            else:
                del queues[idx]
            i += 1
        return frontier

    def _build_result(self, best: _BestTracker, target: int, start_time: float,
                      states_explored: int, pruned: int, steps_searched: int,
                      was_cancelled: bool, budget_exhausted: bool) -> SolveResult:
        """Build SolveResult from the tracker and counters."""
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        metrics = SolutionMetrics(
            computation_time_ms=elapsed_ms,
            states_explored=states_explored,
            pruned_branches=pruned,
            steps_searched=steps_searched,
            strategy_name=self.name,
        )

        ev = best.evaluation
        if ev is None:
            return SolveResult(
                target=target,
                was_cancelled=was_cancelled,
                budget_exhausted=budget_exhausted,
                metrics=metrics,
            )

        return SolveResult(
            path=best.path,
            total_clusters=ev.clusters,
            chain_clusters=ev.chain_clusters,
            cleared_count=ev.cleared,
            vertical_clusters=ev.vertical,
            horizontal_clusters=ev.horizontal,
            target=target,
            score=best.score,
            was_cancelled=was_cancelled,
            budget_exhausted=budget_exhausted,
            metrics=metrics,
        )
