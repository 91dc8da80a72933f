"""
Single-turn maneuver feasibility.

The goal is expressed in the frame of the reference point at its start pose
(origin, heading along +x). The turning circle is tangent to the x-axis, so
its center lies on the y-axis and the two straight segments meet at the
tangent-line intersection (x_i, 0).
"""

import enum
import logging
import math
from dataclasses import dataclass

from .common import wrap_angle
from .transforms import Pose2D

logger = logging.getLogger(__name__)

_PARALLEL_EPS = 1e-12


class CurveType(enum.Enum):
    NONE = 0
    LEFT_TURN = 1
    RIGHT_TURN = 2


@dataclass(frozen=True)
class CurveParameters:
    curve_type: CurveType
    distance_before_turn: float
    distance_after_turn: float
    signed_radius: float

    @property
    def feasible(self) -> bool:
        return self.curve_type is not CurveType.NONE

    @classmethod
    def none(cls) -> "CurveParameters":
        return cls(CurveType.NONE, -1.0, -1.0, 0.0)


def intersection_x(x_goal: float, y_goal: float, yaw_goal: float) -> float:
    """Where the goal heading line crosses the start heading line (the x-axis)."""
    return x_goal - y_goal / math.tan(yaw_goal)


def compute_curve_parameters(goal: Pose2D, turning_radius: float) -> CurveParameters:
    """Straight, arc, straight parameters reaching `goal` from the origin, or NONE."""
    x_goal, y_goal = goal.x, goal.y
    yaw_goal = wrap_angle(goal.theta)

    if abs(math.sin(yaw_goal)) < _PARALLEL_EPS:
        logger.debug("No single turn possible, goal heading parallel to start heading")
        return CurveParameters.none()

    x_i = intersection_x(x_goal, y_goal, yaw_goal)
    if x_i < 0.0:
        logger.debug("No single turn possible, xi<0 (xi=%.3f)", x_i)
        return CurveParameters.none()

    dist_to_intersection = math.hypot(x_goal - x_i, y_goal)

    if y_goal > 0.0:
        if yaw_goal < 0.0 or yaw_goal > math.pi:
            logger.debug("Target on the left but orientation is facing to the right")
            return CurveParameters.none()
        curve_type = CurveType.LEFT_TURN
        signed_radius = abs(turning_radius)
    else:
        if yaw_goal > 0.0 or yaw_goal < -math.pi:
            logger.debug("Target on the right but orientation is facing to the left")
            return CurveParameters.none()
        curve_type = CurveType.RIGHT_TURN
        signed_radius = -abs(turning_radius)

    offset = signed_radius / math.tan((math.pi - yaw_goal) / 2.0)
    before = x_i - offset
    after = dist_to_intersection - offset

    if before < 0.0 or after < 0.0 or before > x_i:
        logger.debug(
            "No single turn possible with radius %.3f (before=%.3f, after=%.3f, xi=%.3f)",
            turning_radius,
            before,
            after,
            x_i,
        )
        return CurveParameters.none()

    return CurveParameters(curve_type, before, after, signed_radius)
