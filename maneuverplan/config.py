from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from .transforms import Pose2D

_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}


def _as_bool(value: Any) -> bool:
    """Host parameters may arrive as strings; "false" must not read as True."""
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        raise ValueError(f"use_last_goal_as_start must be a boolean, got {value!r}")
    return bool(value)


@dataclass
class PlanningContext:
    """Caller-owned planner settings plus the goal cached from the last successful plan."""

    step_size: float = 0.05
    turning_radius: float = 0.8
    min_dist_from_robot: float = 0.10  # kept for parameter compatibility, not used by the planner
    use_last_goal_as_start: bool = False
    last_goal: Optional[Pose2D] = None

    def __post_init__(self):
        if not self.step_size > 0.0:
            raise ValueError("step_size must be > 0")
        if not self.turning_radius > 0.0:
            raise ValueError("turning_radius must be > 0")

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any], default_step_size: Optional[float] = None) -> "PlanningContext":
        """Build from a host parameter dict. Unknown keys are ignored; step_size defaults to the map resolution."""
        known = {f.name for f in fields(cls)} - {"last_goal"}
        kwargs = {k: v for k, v in params.items() if k in known}
        if "step_size" not in kwargs and default_step_size is not None:
            kwargs["step_size"] = default_step_size
        for key in ("step_size", "turning_radius", "min_dist_from_robot"):
            if key in kwargs:
                kwargs[key] = float(kwargs[key])
        if "use_last_goal_as_start" in kwargs:
            kwargs["use_last_goal_as_start"] = _as_bool(kwargs["use_last_goal_as_start"])
        return cls(**kwargs)

    def start_for(self, start: Pose2D) -> Pose2D:
        if self.use_last_goal_as_start and self.last_goal is not None:
            return self.last_goal
        return start
