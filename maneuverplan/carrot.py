import logging
from typing import List, Tuple

from .common import heading_diff, lerp, wrap_angle
from .geometry import CostFn, Footprint
from .transforms import Pose2D

logger = logging.getLogger(__name__)

DEFAULT_INCREMENT = 0.05


def fallback_fractions(increment: float = DEFAULT_INCREMENT) -> List[float]:
    """Fractions 0, increment, 2*increment, ... up to and including 1 when it is a multiple."""
    if increment <= 0.0:
        raise ValueError("increment must be > 0")
    steps = int(1.0 / increment + 1e-9)
    return [i * increment for i in range(steps + 1)]


def linear_fallback_plan(
    start: Pose2D,
    goal: Pose2D,
    cost_fn: CostFn,
    footprint: Footprint,
    increment: float = DEFAULT_INCREMENT,
) -> Tuple[List[Pose2D], bool]:
    """
    Step along the straight line from start to goal until the footprint hits an obstacle.

    Heading is interpolated along the shortest rotation. Returns (poses, fully_free);
    poses hold every sample before the first collision.
    """
    dyaw = heading_diff(goal.theta, start.theta)
    poses: List[Pose2D] = []
    for s in fallback_fractions(increment):
        x = lerp(start.x, goal.x, s)
        y = lerp(start.y, goal.y, s)
        theta = wrap_angle(start.theta + s * dyaw)
        if cost_fn(x, y, theta, footprint) < 0:
            if not poses:
                logger.warning("The maneuver planner could not find a valid plan for this goal")
            return poses, False
        poses.append(Pose2D(x, y, theta, goal.frame_id, goal.stamp))
    return poses, True
