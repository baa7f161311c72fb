"""
Solver Configuration Module - Search parameters and play modes.
"""

import json
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict


class Axis(str, Enum):
    """Preferred cluster axis."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Priority(str, Enum):
    """What the search optimises once the target is reachable."""
    MAX_CLUSTERS = "clusters"
    MIN_STEPS = "steps"


@dataclass(frozen=True)
class SolverConfig:
    """
    Beam search parameters.

    Attributes:
        beam_width: Frontier states kept per step
        max_steps: Step budget (longest path considered)
        max_nodes: Node budget (expansions across the whole search)
        step_penalty: Score cost per step once the target is met
        potential_weight: Weight of the near-match heuristic
        cleared_weight: Score per cleared cell (divided by 5 under MIN_STEPS)
        node_floor_factor: Under MAX_CLUSTERS the node budget is at least
            max_steps * beam_width * node_floor_factor
        axis: Preferred cluster axis
        priority: MAX_CLUSTERS or MIN_STEPS
        chain_enabled: Count chain reactions after the first clear
        diagonal_enabled: Allow 8-neighbour moves
    """
    beam_width: int = 200
    max_steps: int = 50
    max_nodes: int = 120000
    step_penalty: float = 250
    potential_weight: float = 800
    cleared_weight: float = 1000
    node_floor_factor: int = 20
    axis: Axis = Axis.HORIZONTAL
    priority: Priority = Priority.MAX_CLUSTERS
    chain_enabled: bool = False
    diagonal_enabled: bool = True

    def __post_init__(self):
        # Accept plain strings from settings files and CLI arguments
        object.__setattr__(self, "axis", Axis(self.axis))
        object.__setattr__(self, "priority", Priority(self.priority))
        if self.beam_width < 1:
            raise ValueError(f"beam_width must be positive, got {self.beam_width}")
        if self.max_steps < 0 or self.max_nodes < 0:
            raise ValueError("max_steps and max_nodes must be non-negative")

    @property
    def vertical(self) -> bool:
        return self.axis == Axis.VERTICAL

    @property
    def effective_max_nodes(self) -> int:
        """Node budget including the MAX_CLUSTERS floor."""
        if self.priority == Priority.MAX_CLUSTERS:
            return max(self.max_nodes, self.max_steps * self.beam_width * self.node_floor_factor)
        return self.max_nodes

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["axis"] = self.axis.value
        data["priority"] = self.priority.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SolverConfig":
        """Build a config from a dict, ignoring unknown keys."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})

    def key(self) -> str:
        """Stable serialized form used by the result cache."""
        return json.dumps(self.to_dict(), sort_keys=True)
