"""
Solution Context Module - Per-solve inputs, cancellation and progress.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .board import BoardState
from .config import SolverConfig


@dataclass
class SolutionContext:
    """
    Context passed to strategies containing the board, search parameters,
    cancellation, and progress reporting.

    Each solve owns its context; nothing in it is shared between solves
    except the cancel flag a caller chooses to hand in.

    Attributes:
        board: Board to solve
        config: Search parameters and play modes
        target: Target cluster count
        cancel_flag: Threading event for cancellation
        timeout_sec: Optional wall-clock limit, treated as cancellation
        start_time: When computation started
        progress_callback: Optional callback for progress updates
    """
    board: BoardState
    config: SolverConfig = field(default_factory=SolverConfig)
    target: int = 1
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    timeout_sec: Optional[float] = None
    start_time: float = field(default_factory=time.time)
    progress_callback: Optional[Callable[[float, str], None]] = None

    def is_cancelled(self) -> bool:
        """
        Check if cancellation requested or timeout exceeded.

        Returns:
            True if strategy should stop execution
        """
        if self.cancel_flag.is_set():
            return True
        if self.timeout_sec is not None and time.time() - self.start_time > self.timeout_sec:
            return True
        return False

    def cancel(self) -> None:
        self.cancel_flag.set()

    def report_progress(self, percent: float, message: str = "") -> None:
        """
        Report progress to the caller.

        Args:
            percent: Progress from 0.0 to 1.0
            message: Optional status message
        """
        if self.progress_callback:
            self.progress_callback(percent, message)

