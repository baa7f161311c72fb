"""Exception hierarchy for the drag solver."""


class SolverError(Exception):
    """Base exception for solver failures."""


class BoardFormatError(SolverError, ValueError):
    """Raised when a board has the wrong size or an undecodable cell code."""


class MarkConflictError(SolverError, ValueError):
    """Raised when start/end/restriction marks contradict each other."""


class UnknownStrategyError(SolverError, ValueError):
    """Raised when the strategy factory is asked for an unregistered name."""
