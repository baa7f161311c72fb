"""
Strategies Package - Concrete strategy implementations.

Import this module to register all built-in strategies.
"""

from .beam_search import BeamSearchStrategy

__all__ = [
    "BeamSearchStrategy",
]
