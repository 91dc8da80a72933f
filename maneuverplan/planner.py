import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .carrot import linear_fallback_plan
from .config import PlanningContext
from .curves import CurveType, compute_curve_parameters
from .errors import FrameMismatch, InvalidFootprint, ManeuverPlannerError, NotInitialized
from .geometry import CostFn, Footprint, SteeringJacobian, footprint_jacobians
from .reference import select_reference_point
from .sampler import sample_trajectory
from .transforms import Pose2D, to_frame

logger = logging.getLogger(__name__)


@dataclass
class PlanResult:
    """Outcome of one planning call. success=False means no plan at all."""

    success: bool
    path: List[Pose2D] = field(default_factory=list)
    fully_free: bool = False
    used_fallback: bool = False
    curve_type: CurveType = CurveType.NONE
    reference_point: Tuple[float, float] = (0.0, 0.0)
    reason: str = ""

    def as_tuple(self) -> Tuple[bool, List[Pose2D], bool]:
        return self.success, self.path, self.fully_free


def plan_maneuver(
    start: Pose2D,
    goal: Pose2D,
    footprint: Footprint,
    cost_fn: CostFn,
    step_size: float,
    turning_radius: float,
    jacobians: Optional[Dict[str, SteeringJacobian]] = None,
) -> PlanResult:
    """Single-turn maneuver from start to goal, or the linear fallback when none exists.

    `jacobians` are the precomputed per-footprint Jacobians; one matching the
    selected reference point is reused instead of being rebuilt.
    """
    goal_in_start = to_frame(goal, start)
    center_params = compute_curve_parameters(goal_in_start, turning_radius)

    if not center_params.feasible:
        logger.warning("No single left or right maneuver possible. Executing fallback planner")
        path, free = linear_fallback_plan(start, goal, cost_fn, footprint)
        return PlanResult(True, path, free, used_fallback=True)

    selection = select_reference_point(start, goal, footprint, turning_radius, center_params, goal_in_start)
    jacobian = None
    for candidate in (jacobians or {}).values():
        if (candidate.ref_x, candidate.ref_y) == selection.offset:
            jacobian = candidate
            break
    path, free = sample_trajectory(
        start,
        selection,
        step_size,
        cost_fn,
        footprint,
        frame_id=goal.frame_id,
        stamp=goal.stamp,
        jacobian=jacobian,
    )
    if not free:
        logger.info("Maneuver blocked after %d poses", len(path))
    return PlanResult(
        True,
        path,
        free,
        curve_type=selection.params.curve_type,
        reference_point=selection.offset,
    )


class ManeuverPlanner:
    """
    Single-turn maneuver planner for a vehicle with a four-corner footprint.

    The planner keeps only immutable setup (footprint, Jacobians, cost oracle,
    global frame). Per-call settings and the last-goal cache live in the
    caller's PlanningContext.
    """

    def __init__(
        self,
        footprint_points: Optional[Sequence[Tuple[float, float]]] = None,
        cost_fn: Optional[CostFn] = None,
        global_frame: str = "map",
    ):
        self.global_frame = global_frame
        self.footprint: Optional[Footprint] = None
        self.jacobians: Dict[str, SteeringJacobian] = {}
        self.cost_fn: Optional[CostFn] = None
        if footprint_points is not None and cost_fn is not None:
            self.initialize(footprint_points, cost_fn)

    @property
    def initialized(self) -> bool:
        return self.footprint is not None and self.cost_fn is not None

    def initialize(self, footprint_points: Sequence[Tuple[float, float]], cost_fn: CostFn) -> bool:
        """Set up footprint and Jacobians. Returns False and stays uninitialized on a bad footprint."""
        if self.initialized:
            logger.warning("This planner has already been initialized... doing nothing")
            return True
        try:
            footprint = Footprint.from_points(footprint_points)
        except InvalidFootprint as exc:
            logger.error("%s", exc)
            return False
        self.footprint = footprint
        self.jacobians = footprint_jacobians(footprint)
        self.cost_fn = cost_fn
        return True

    def footprint_cost(self, x: float, y: float, theta: float) -> float:
        if not self.initialized:
            raise NotInitialized("The planner has not been initialized, please call initialize() to use the planner")
        return self.cost_fn(x, y, theta, self.footprint)

    def _check_request(self, goal: Pose2D) -> None:
        if not self.initialized:
            raise NotInitialized("The planner has not been initialized, please call initialize() to use the planner")
        if goal.frame_id != self.global_frame:
            raise FrameMismatch(self.global_frame, goal.frame_id)

    def plan(self, start: Pose2D, goal: Pose2D, context: PlanningContext) -> PlanResult:
        """Plan from start (or the cached last goal) to goal. Never raises planner errors."""
        try:
            self._check_request(goal)
        except ManeuverPlannerError as exc:
            logger.error("%s", exc)
            return PlanResult(False, reason=str(exc))

        start = context.start_for(start)
        logger.debug("Got a start: %.2f, %.2f, and a goal: %.2f, %.2f", start.x, start.y, goal.x, goal.y)

        result = plan_maneuver(
            start,
            goal,
            self.footprint,
            self.cost_fn,
            step_size=context.step_size,
            turning_radius=context.turning_radius,
            jacobians=self.jacobians,
        )
        if result.success:
            context.last_goal = goal
        return result
