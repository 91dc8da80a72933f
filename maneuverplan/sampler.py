"""
Trajectory sampling for a single-turn maneuver.

The reference point is driven along straight -> arc -> straight in its own
start frame. The rotation center follows by integrating the velocity that the
inverse steering Jacobian assigns to it, so the reported poses are always
rotation-center poses.
"""

import enum
import logging
import math
from typing import Iterator, List, Optional, Tuple

from .common import wrap_angle
from .curves import CurveParameters
from .geometry import CostFn, Footprint, SteeringJacobian
from .reference import ReferenceSelection, reference_pose
from .transforms import Pose2D, from_frame

logger = logging.getLogger(__name__)

_DIST_EPS = 1e-9


class Phase(enum.Enum):
    STRAIGHT_BEFORE = 0
    TURNING = 1
    STRAIGHT_AFTER = 2


def iter_reference_poses(
    params: CurveParameters, goal_heading: float, step_size: float
) -> Iterator[Tuple[float, float, float, Phase]]:
    """Yield (x, y, heading, phase) of the reference point after each step, origin excluded.

    The generator is exhausted once all three phases have no distance or angle left.
    """
    if step_size <= 0.0:
        raise ValueError("step_size must be > 0")
    radius = params.signed_radius
    before = params.distance_before_turn
    after = params.distance_after_turn
    goal_heading = wrap_angle(goal_heading)
    grid = step_size / radius

    x = y = theta = 0.0
    dist_before = dist_after = 0.0
    while True:
        if before - dist_before > _DIST_EPS:
            ds = min(step_size, before - dist_before)
            dist_before += ds
            theta = 0.0
            x += ds
            yield x, y, theta, Phase.STRAIGHT_BEFORE
        elif abs(goal_heading - theta) > abs(grid / 2.0):
            theta += grid
            x = before + radius * math.sin(theta)
            y = radius * (1.0 - math.cos(theta))
            yield x, y, theta, Phase.TURNING
        elif after - dist_after > _DIST_EPS:
            ds = min(step_size, after - dist_after)
            dist_after += ds
            theta = goal_heading
            x += ds * math.cos(theta)
            y += ds * math.sin(theta)
            yield x, y, theta, Phase.STRAIGHT_AFTER
        else:
            return


def step_bound(params: CurveParameters, goal_heading: float, step_size: float) -> int:
    """Upper bound on the number of reference steps for a maneuver."""
    grid = abs(step_size / params.signed_radius)
    straight = (params.distance_before_turn + params.distance_after_turn) / step_size
    return int(math.ceil(straight + abs(wrap_angle(goal_heading)) / grid)) + 3


def sample_trajectory(
    start: Pose2D,
    selection: ReferenceSelection,
    step_size: float,
    cost_fn: CostFn,
    footprint: Footprint,
    frame_id: Optional[str] = None,
    stamp: Optional[float] = None,
    jacobian: Optional[SteeringJacobian] = None,
) -> Tuple[List[Pose2D], bool]:
    """
    Sample rotation-center poses of the maneuver in the global frame.

    Every pose is checked with `cost_fn` before it is kept; the first negative
    cost stops sampling. Returns (poses, fully_free).
    """
    frame_id = start.frame_id if frame_id is None else frame_id
    stamp = start.stamp if stamp is None else stamp
    ref_x, ref_y = selection.offset
    ref_start = reference_pose(start, selection.offset)
    if jacobian is None:
        jacobian = SteeringJacobian(ref_x, ref_y)

    # center starts at -offset in the reference start frame
    cx, cy, cphi = -ref_x, -ref_y, 0.0
    prev_x = prev_y = 0.0

    poses: List[Pose2D] = []
    references = iter_reference_poses(selection.params, selection.goal_in_ref_frame.theta, step_size)
    while True:
        center = from_frame(Pose2D(cx, cy, cphi, frame_id, stamp), ref_start)
        if cost_fn(center.x, center.y, center.theta, footprint) < 0:
            logger.debug("Trajectory blocked at (%.3f, %.3f, %.3f)", center.x, center.y, center.theta)
            return poses, False
        poses.append(center)

        nxt = next(references, None)
        if nxt is None:
            return poses, True
        x, y, theta, _ = nxt

        # virtual velocity over a unit time step
        vx, vy = x - prev_x, y - prev_y
        prev_x, prev_y = x, y

        if jacobian.is_degenerate:
            cx, cy, cphi = x, y, theta
        else:
            cos_p = math.cos(cphi)
            sin_p = math.sin(cphi)
            local = (cos_p * vx + sin_p * vy, -sin_p * vx + cos_p * vy)
            forward, angular = jacobian.center_velocity(local)
            cphi += angular
            cx += forward * math.cos(cphi)
            cy += forward * math.sin(cphi)
