"""
Single-turn maneuver planner for vehicles with a turning radius and a four-corner footprint.
Exports:
- ManeuverPlanner / plan_maneuver: straight-arc-straight maneuver with linear fallback
- GlobalPlannerAdapter: navigation-stack style wrapper
- Pose2D, Footprint, PlanningContext, GridMap, GridFootprintCost
"""

from .adapter import GlobalPlannerAdapter
from .config import PlanningContext
from .curves import CurveParameters, CurveType, compute_curve_parameters
from .errors import FrameMismatch, InvalidFootprint, ManeuverPlannerError, NotInitialized
from .geometry import Footprint, GridFootprintCost, SteeringJacobian
from .map_utils import GridMap
from .planner import ManeuverPlanner, PlanResult, plan_maneuver
from .transforms import Pose2D, rotate, translate

__all__ = [
    "GlobalPlannerAdapter",
    "PlanningContext",
    "CurveParameters",
    "CurveType",
    "compute_curve_parameters",
    "FrameMismatch",
    "InvalidFootprint",
    "ManeuverPlannerError",
    "NotInitialized",
    "Footprint",
    "GridFootprintCost",
    "SteeringJacobian",
    "GridMap",
    "ManeuverPlanner",
    "PlanResult",
    "plan_maneuver",
    "Pose2D",
    "rotate",
    "translate",
]
