"""Solver configuration."""

from __future__ import annotations
import json
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

DEFAULT_MAX_SET_SIZE = 5


@dataclass
class SolverConfig:
    """
    Tunable knobs of the propagation solver.

    Attributes:
        max_set_size: Largest naked/hidden set size searched (2-8).
        use_x_wing: Run the X-Wing scan before every pass.
        max_passes: Optional bound on passes per puzzle; None for no bound.
    """
    max_set_size: int = DEFAULT_MAX_SET_SIZE
    use_x_wing: bool = True
    max_passes: Optional[int] = None

    def __post_init__(self):
        if (not isinstance(self.max_set_size, int) or isinstance(self.max_set_size, bool)
                or not 2 <= self.max_set_size <= 8):
            raise ValueError(f"max_set_size must be 2-8, got {self.max_set_size!r}")
        if not isinstance(self.use_x_wing, bool):
            raise ValueError(f"use_x_wing must be a boolean, got {self.use_x_wing!r}")
        if self.max_passes is not None and (not isinstance(self.max_passes, int)
                                            or isinstance(self.max_passes, bool)
                                            or self.max_passes < 1):
            raise ValueError(f"max_passes must be a positive integer, got {self.max_passes!r}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SolverConfig:
        """Build a config, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**data)


def load_config(path: str) -> SolverConfig:
    """Load a SolverConfig from a JSON file."""
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must hold a JSON object")
    return SolverConfig.from_dict(data)
