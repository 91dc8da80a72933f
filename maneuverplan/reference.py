import logging
from dataclasses import dataclass
from typing import Tuple

from .curves import CurveParameters, CurveType, compute_curve_parameters
from .geometry import Footprint
from .transforms import Pose2D, from_frame, to_frame

logger = logging.getLogger(__name__)

CENTER = (0.0, 0.0)


@dataclass(frozen=True)
class ReferenceSelection:
    """Reference point (vehicle frame) and the maneuver fitted about it."""

    offset: Tuple[float, float]
    params: CurveParameters
    goal_in_ref_frame: Pose2D

    @property
    def is_center(self) -> bool:
        return self.offset == CENTER


def candidate_point(footprint: Footprint, curve_type: CurveType) -> Tuple[float, float]:
    """Front-right corner for left turns, the right side point for right turns."""
    if curve_type is CurveType.LEFT_TURN:
        return footprint.top_right
    if curve_type is CurveType.RIGHT_TURN:
        return footprint.right_side_point
    raise ValueError(f"No reference candidate for curve type {curve_type!r}")


def reference_pose(vehicle_pose: Pose2D, offset: Tuple[float, float]) -> Pose2D:
    """Global pose of a point fixed at `offset` on a vehicle placed at `vehicle_pose`."""
    local = Pose2D(offset[0], offset[1], 0.0, vehicle_pose.frame_id, vehicle_pose.stamp)
    return from_frame(local, vehicle_pose)


def select_reference_point(
    start: Pose2D,
    goal: Pose2D,
    footprint: Footprint,
    turning_radius: float,
    center_params: CurveParameters,
    goal_in_start: Pose2D,
) -> ReferenceSelection:
    """Try the turn-side candidate point; revert to the rotation center if it has no single-turn maneuver."""
    center = ReferenceSelection(CENTER, center_params, goal_in_start)
    if not center_params.feasible:
        return center

    if center_params.curve_type is CurveType.LEFT_TURN:
        logger.info("Left turn")
    else:
        logger.info("Right turn")
    offset = candidate_point(footprint, center_params.curve_type)

    ref_start = reference_pose(start, offset)
    ref_goal = reference_pose(goal, offset)
    ref_goal_local = to_frame(ref_goal, ref_start)

    params = compute_curve_parameters(ref_goal_local, turning_radius)
    if not params.feasible:
        logger.info("Setting reference point back to center of rotation")
        return center
    return ReferenceSelection(offset, params, ref_goal_local)
