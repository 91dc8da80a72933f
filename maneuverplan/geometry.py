import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

import numpy as np

from .errors import InvalidFootprint

LETHAL_COST = -1.0
OFF_MAP_COST = -2.0

# Longitudinal position of the side reference points, ahead of the rotation axis.
SIDE_POINT_X = 0.1


@dataclass(frozen=True)
class Footprint:
    """Four-corner footprint around the rotation center, heading along +x.

    "top" is the front of the vehicle (x > 0) and "right" is y < 0.
    """

    top_left: Tuple[float, float]
    top_right: Tuple[float, float]
    bottom_left: Tuple[float, float]
    bottom_right: Tuple[float, float]

    @classmethod
    def from_points(cls, points: Sequence[Tuple[float, float]]) -> "Footprint":
        """Classify corner points by quadrant. Raises InvalidFootprint."""
        points = [(float(p[0]), float(p[1])) for p in points]
        if len(points) != 4:
            raise InvalidFootprint(f"Footprint must have four points, got {len(points)}")
        quadrants: Dict[str, Tuple[float, float]] = {}
        for px, py in points:
            if px > 0 and py > 0:
                quadrants["top_left"] = (px, py)
            elif px > 0 and py < 0:
                quadrants["top_right"] = (px, py)
            elif px < 0 and py < 0:
                quadrants["bottom_right"] = (px, py)
            elif px < 0 and py > 0:
                quadrants["bottom_left"] = (px, py)
        if len(quadrants) != 4:
            raise InvalidFootprint(
                "Footprint must have four corners and center of rotation inside the footprint"
            )
        return cls(**quadrants)

    @classmethod
    def from_box(cls, length: float, width: float, center_offset: float = 0.0) -> "Footprint":
        """Rectangle of given size; center_offset moves the rotation center forward of the box center."""
        hl, hw = length / 2.0, width / 2.0
        return cls.from_points(
            [
                (hl - center_offset, hw),
                (hl - center_offset, -hw),
                (-hl - center_offset, hw),
                (-hl - center_offset, -hw),
            ]
        )

    def points(self) -> List[Tuple[float, float]]:
        """Corners in counter-clockwise order starting at the front-left."""
        return [self.top_left, self.bottom_left, self.bottom_right, self.top_right]

    @property
    def right_side_point(self) -> Tuple[float, float]:
        return SIDE_POINT_X, self.bottom_right[1]

    @property
    def circumradius(self) -> float:
        return max(math.hypot(px, py) for px, py in self.points())

    def corners(self, x: float, y: float, theta: float) -> List[Tuple[float, float]]:
        """Return world-frame corners, counter-clockwise from the front-left."""
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        pts = []
        for bx, by in self.points():
            wx = x + cos_t * bx - sin_t * by
            wy = y + sin_t * bx + cos_t * by
            pts.append((wx, wy))
        return pts

    def contains_local(self, rx: float, ry: float, padding: float = 0.0) -> bool:
        """Point-in-footprint test in the vehicle frame, grown outward by padding."""
        pts = self.points()
        for i in range(4):
            ax, ay = pts[i]
            bx, by = pts[(i + 1) % 4]
            ex, ey = bx - ax, by - ay
            edge = math.hypot(ex, ey)
            if edge == 0.0:
                continue
            # left of each CCW edge means inside
            if (ex * (ry - ay) - ey * (rx - ax)) / edge < -padding:
                return False
        return True

    def point_inside(self, px: float, py: float, x: float, y: float, theta: float) -> bool:
        """Check if world point lies inside the footprint placed at (x, y, theta)."""
        dx = px - x
        dy = py - y
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        rx = cos_t * dx + sin_t * dy
        ry = -sin_t * dx + cos_t * dy
        return self.contains_local(rx, ry)


# cost(x, y, theta, footprint); negative means the pose is in collision or off the map
CostFn = Callable[[float, float, float, Footprint], float]


@dataclass(frozen=True)
class SteeringJacobian:
    """Maps rotation-center velocity (forward, angular) to reference point velocity.

    J = [[1, -ref_y], [0, ref_x]] for a reference point at (ref_x, ref_y) in the
    vehicle frame. Singular when ref_x == 0, i.e. the point lies on the rotation axis.
    """

    ref_x: float
    ref_y: float

    @property
    def matrix(self) -> np.ndarray:
        return np.array([[1.0, -self.ref_y], [0.0, self.ref_x]])

    @property
    def is_degenerate(self) -> bool:
        return self.ref_x == 0.0

    def inverse(self) -> np.ndarray:
        if self.is_degenerate:
            raise ZeroDivisionError("Steering Jacobian is singular for reference points on the rotation axis")
        return np.array([[1.0, self.ref_y / self.ref_x], [0.0, 1.0 / self.ref_x]])

    def apply(self, center_velocity: Tuple[float, float]) -> Tuple[float, float]:
        out = self.matrix @ np.asarray(center_velocity, dtype=float)
        return float(out[0]), float(out[1])

    def center_velocity(self, ref_velocity: Tuple[float, float]) -> Tuple[float, float]:
        """Solve for (forward, angular) center velocity from a vehicle-frame reference velocity."""
        out = self.inverse() @ np.asarray(ref_velocity, dtype=float)
        return float(out[0]), float(out[1])


def footprint_jacobians(footprint: Footprint) -> Dict[str, SteeringJacobian]:
    """Jacobians for every corner plus the right side point, computed once per footprint."""
    return {
        "top_left": SteeringJacobian(*footprint.top_left),
        "top_right": SteeringJacobian(*footprint.top_right),
        "bottom_left": SteeringJacobian(*footprint.bottom_left),
        "bottom_right": SteeringJacobian(*footprint.bottom_right),
        "right_side": SteeringJacobian(*footprint.right_side_point),
    }


def _footprint_offsets_for_heading(
    footprint: Footprint, resolution: float, theta: float, padding: float = 0.0
) -> List[Tuple[int, int]]:
    """
    Compute grid offsets whose cell centers fall inside the footprint at a given heading.
    Offsets are returned as integer (dx, dy) in grid cells relative to the robot center cell.
    """
    radius = footprint.circumradius + padding
    cells = int(math.ceil(radius / resolution)) + 1  # include boundary cells
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    offsets: List[Tuple[int, int]] = []
    for gx in range(-cells, cells + 1):
        for gy in range(-cells, cells + 1):
            wx = gx * resolution
            wy = gy * resolution
            # rotate world offset into robot frame
            rx = cos_t * wx + sin_t * wy
            ry = -sin_t * wx + cos_t * wy
            if footprint.contains_local(rx, ry, padding):
                offsets.append((gx, gy))
    return offsets


class GridFootprintCost:
    """
    Obstacle cost oracle over a GridMap: footprint cell offsets are precomputed per heading bin.

    Returns LETHAL_COST when a covered cell is at or above lethal_threshold,
    OFF_MAP_COST when the footprint leaves the map, otherwise the highest covered cell value.
    """

    def __init__(self, grid_map, theta_bins: int = 72, padding: float = 0.0, lethal_threshold: float = 1.0):
        self.map = grid_map
        self.theta_bins = theta_bins
        self.padding = padding
        self.lethal_threshold = lethal_threshold
        self._offsets: Dict[Tuple[Footprint, int], List[Tuple[int, int]]] = {}

    def _theta_index(self, theta: float) -> int:
        return int(round(((theta % (2 * math.pi)) / (2 * math.pi)) * self.theta_bins)) % self.theta_bins

    def _offsets_for(self, footprint: Footprint, theta_idx: int) -> List[Tuple[int, int]]:
        key = (footprint, theta_idx)
        if key not in self._offsets:
            theta = (2.0 * math.pi * theta_idx) / self.theta_bins
            self._offsets[key] = _footprint_offsets_for_heading(footprint, self.map.resolution, theta, self.padding)
        return self._offsets[key]

    def __call__(self, x: float, y: float, theta: float, footprint: Footprint) -> float:
        gx, gy = self.map.world_to_grid(x, y)
        worst = 0.0
        for dx, dy in self._offsets_for(footprint, self._theta_index(theta)):
            cx = gx + dx
            cy = gy + dy
            if not self.map.in_bounds(cx, cy):
                return OFF_MAP_COST
            value = float(self.map.data[cy, cx])
            if value >= self.lethal_threshold:
                return LETHAL_COST
            worst = max(worst, value)
        return worst

    def collides_path(self, poses: Iterable, footprint: Footprint) -> bool:
        for pose in poses:
            if hasattr(pose, "x"):
                x, y, theta = pose.x, pose.y, pose.theta
            else:
                x, y, theta = pose
            if self(x, y, theta, footprint) < 0:
                return True
        return False
