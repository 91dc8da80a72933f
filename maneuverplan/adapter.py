"""
Thin shim exposing the planner through a navigation-stack style global planner
interface: initialize once, then make_plan(start, goal) -> (ok, plan).
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .config import PlanningContext
from .geometry import CostFn
from .planner import ManeuverPlanner, PlanResult
from .transforms import Pose2D

logger = logging.getLogger(__name__)


class GlobalPlannerAdapter:
    def __init__(self):
        self.name = ""
        self.planner: Optional[ManeuverPlanner] = None
        self.context: Optional[PlanningContext] = None
        self.last_result: Optional[PlanResult] = None

    @property
    def initialized(self) -> bool:
        return self.planner is not None and self.planner.initialized

    def initialize(
        self,
        name: str,
        footprint_points: Sequence[Tuple[float, float]],
        cost_fn: CostFn,
        global_frame: str = "map",
        params: Optional[Mapping[str, Any]] = None,
        map_resolution: Optional[float] = None,
    ) -> bool:
        if self.initialized:
            logger.warning("This planner has already been initialized... doing nothing")
            return True
        try:
            context = PlanningContext.from_mapping(params or {}, default_step_size=map_resolution)
        except (TypeError, ValueError) as exc:
            logger.error("Invalid parameters for planner %s: %s", name, exc)
            return False
        planner = ManeuverPlanner(global_frame=global_frame)
        if not planner.initialize(footprint_points, cost_fn):
            return False
        self.name = name
        self.planner = planner
        self.context = context
        return True

    def make_plan(self, start: Pose2D, goal: Pose2D) -> Tuple[bool, List[Pose2D]]:
        if not self.initialized:
            logger.error("The planner has not been initialized, please call initialize() to use the planner")
            return False, []
        self.last_result = self.planner.plan(start, goal, self.context)
        return self.last_result.success, list(self.last_result.path)
