"""
Base Strategy Module - Abstract base class for solving strategies.
"""

from abc import ABC, abstractmethod

from .context import SolutionContext
from .solution import SolveResult


class SolverStrategy(ABC):
    """
    Abstract base class for all solving strategies.

    Subclasses must implement the solve() method and define
    name and description class attributes.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description for UI
    """
    name: str = "base"
    description: str = "Base strategy"

    @abstractmethod
    def solve(self, context: SolutionContext) -> SolveResult:
        """
        Compute the best drag for the context's board.

        Must periodically check context.is_cancelled() and return
        the best-so-far result if True.

        Args:
            context: Solution context with board, config, cancellation

        Returns:
            SolveResult with path and cluster counts
        """
        pass

    def _check_cancelled(self, context: SolutionContext) -> bool:
        """Convenience method to check cancellation."""
        return context.is_cancelled()
