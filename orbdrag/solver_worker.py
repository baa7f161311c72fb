"""
Solver Worker Module for the Orb Drag Planner

Provides a background QThread worker that runs one solve off the
interactive thread. Communicates with the caller via Qt signals for
thread-safe status updates.
"""

import logging
import threading
from typing import Optional

from PyQt5.QtCore import QThread, pyqtSignal

from orbdrag.solver import (
    BoardState, ResultCache, SolutionContext, SolverConfig, SolveResult, solve,
)


# Configure module logger
logger = logging.getLogger(__name__)


class SolverWorker(QThread):
    """
    Background worker thread for a single solve.

    The search itself is synchronous; the worker only moves it off the
    thread that handles input. Cancellation is cooperative: request_stop()
    sets the flag the search polls between steps, and the best result
    found so far is still delivered.

    Signals:
        status_changed(str): Emitted when worker status changes
        progress_changed(float, str): Search progress 0.0-1.0 and message
        solution_ready(object): Emits the SolveResult when finished
        error_occurred(str): Emitted when the solve raises

    Example:
        worker = SolverWorker(board, config, target=3)
        worker.solution_ready.connect(on_result)
        worker.start()
        # ...
        worker.request_stop()
        worker.wait()
    """

    # Signals for UI updates (thread-safe)
    status_changed = pyqtSignal(str)
    progress_changed = pyqtSignal(float, str)
    solution_ready = pyqtSignal(object)
    error_occurred = pyqtSignal(str)

    def __init__(self, board: BoardState, config: Optional[SolverConfig] = None,
                 target: Optional[int] = None, cache: Optional[ResultCache] = None,
                 strategy_name: str = "beam"):
        """
        Initialize the solver worker.

        Args:
            board: Board to solve
            config: Search parameters
            target: Target clusters (None = theoretical maximum)
            cache: Result cache shared with other workers
            strategy_name: Strategy to run (default: "beam")
        """
        super().__init__()
        self.board = board
        self.config = config or SolverConfig()
        self.target = target
        self.strategy_name = strategy_name
        self._cache = cache
        self._cancel_flag = threading.Event()
        self._result: Optional[SolveResult] = None

    def run(self):
        """
        Worker body. Called when thread starts.

        Runs the solve and emits its result, or the error if it raised.
        """
        logger.info("Solver worker started")
        self.status_changed.emit("Solving")

        context = SolutionContext(
            board=self.board,
            config=self.config,
            cancel_flag=self._cancel_flag,
            progress_callback=self._on_progress,
        )

        try:
            result = solve(
                self.board,
                self.config,
                self.target,
                context=context,
                cache=self._cache,
                strategy_name=self.strategy_name,
            )
        except Exception as e:
            logger.exception("Error in solver worker")
            self.error_occurred.emit(str(e))
            self.status_changed.emit("Error")
            return

        self._result = result
        if result.was_cancelled:
            self.status_changed.emit("Cancelled")
        elif result.target_met:
            self.status_changed.emit(f"Solved ({result.steps} steps)")
        else:
            self.status_changed.emit(f"Best effort ({result.total_clusters}/{result.target})")

        self.solution_ready.emit(result)
        logger.info("Solver worker stopped")

    def _on_progress(self, percent: float, message: str) -> None:
        self.progress_changed.emit(percent, message)

    def request_stop(self):
        """
        Request the solve to stop at its next step boundary.

        Use wait() after calling this to block until stopped.
        """
        logger.info("Stop requested")
        self._cancel_flag.set()

    @property
    def result(self) -> Optional[SolveResult]:
        """Last result produced by run(), if any."""
        return self._result
