"""Orb drag planner: single-drag beam search for 6x6 match-3 boards."""

__version__ = "0.1.0"
