import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass
class GridMap:
    """
    Occupancy/cost grid backing the obstacle cost oracle.
    data: numpy array (H, W); 0 is free, values >= the oracle's lethal threshold are obstacles.
    resolution: meters per cell, also the default sampling step of the planner.
    origin: world coordinates of grid index (0,0) cell center.
    """

    data: np.ndarray
    resolution: float
    origin: Tuple[float, float] = (0.0, 0.0)

    @classmethod
    def empty(cls, width: float, height: float, resolution: float, origin: Tuple[float, float] = (0.0, 0.0)) -> "GridMap":
        w_cells = int(round(width / resolution))
        h_cells = int(round(height / resolution))
        return cls(np.zeros((h_cells, w_cells), dtype=np.uint8), resolution, origin)

    def world_to_grid(self, x: float, y: float) -> Tuple[int, int]:
        gx = int(round((x - self.origin[0]) / self.resolution))
        gy = int(round((y - self.origin[1]) / self.resolution))
        return gx, gy

    def in_bounds(self, gx: int, gy: int) -> bool:
        h, w = self.data.shape
        return 0 <= gx < w and 0 <= gy < h

    def is_occupied(self, x: float, y: float) -> bool:
        gx, gy = self.world_to_grid(x, y)
        if not self.in_bounds(gx, gy):
            return True
        return bool(self.data[gy, gx])

    def mark_box(self, xmin: float, ymin: float, xmax: float, ymax: float, value: int = 1) -> None:
        """Fill every cell whose center lies in the world-frame box."""
        gx0, gy0 = self.world_to_grid(xmin, ymin)
        gx1, gy1 = self.world_to_grid(xmax, ymax)
        h, w = self.data.shape
        gx0, gx1 = max(gx0, 0), min(gx1, w - 1)
        gy0, gy1 = max(gy0, 0), min(gy1, h - 1)
        if gx0 > gx1 or gy0 > gy1:
            return
        self.data[gy0 : gy1 + 1, gx0 : gx1 + 1] = value

    def copy(self) -> "GridMap":
        return GridMap(self.data.copy(), self.resolution, self.origin)

    def inflate(self, margin: float) -> "GridMap":
        """
        Inflate occupied cells by margin (meters) using a disk of cells.
        Cells outside the map count as occupied.
        """
        cells = int(math.ceil(margin / self.resolution))
        if cells <= 0:
            return self.copy()
        occupied = self.data != 0
        padded = np.pad(occupied, cells, constant_values=True)
        h, w = self.data.shape
        inflated = np.zeros_like(occupied)
        for dy in range(-cells, cells + 1):
            for dx in range(-cells, cells + 1):
                if dx * dx + dy * dy > cells * cells:
                    continue
                inflated |= padded[cells + dy : cells + dy + h, cells + dx : cells + dx + w]
        return GridMap(inflated.astype(self.data.dtype), self.resolution, self.origin)
