"""
Quick-start visualization for single-turn maneuvers.

What it does:
- Builds a small map with a wall segment.
- Plans a left turn, a right turn and a goal behind the robot (linear fallback).
- Plots rotation-center poses and per-step vehicle footprints.

Run:
    python -m examples.plot_maneuver

If you don't have matplotlib installed, install it with:
    pip install matplotlib
"""

import logging
import math
from pathlib import Path

from maneuverplan import GridFootprintCost, GridMap, ManeuverPlanner, PlanningContext, Pose2D

try:
    import matplotlib.pyplot as plt
except ImportError:
    plt = None

FOOTPRINT = [(0.35, 0.25), (0.35, -0.25), (-0.25, 0.25), (-0.25, -0.25)]

SCENARIOS = [
    ("left turn", Pose2D(1.0, 1.0, 0.0, "map"), Pose2D(4.0, 3.0, math.pi / 2, "map")),
    ("right turn", Pose2D(1.0, 3.5, 0.0, "map"), Pose2D(4.5, 1.5, -math.pi / 2, "map")),
    ("goal behind", Pose2D(3.0, 2.5, 0.0, "map"), Pose2D(1.0, 2.0, 0.0, "map")),
]


def make_map(resolution: float = 0.05) -> GridMap:
    grid_map = GridMap.empty(6.0, 5.0, resolution)
    grid_map.mark_box(5.2, 0.5, 5.4, 4.5)
    return grid_map


def plot(grid_map: GridMap, planner: ManeuverPlanner, start: Pose2D, goal: Pose2D, result, title: str):
    if plt is None:
        print("matplotlib not available; install it with `pip install matplotlib` to see the plot.")
        return

    h, w = grid_map.data.shape
    extent = [
        grid_map.origin[0],
        grid_map.origin[0] + w * grid_map.resolution,
        grid_map.origin[1],
        grid_map.origin[1] + h * grid_map.resolution,
    ]
    fig, ax = plt.subplots(figsize=(7, 5))
    ax.imshow(grid_map.data, cmap="gray_r", origin="lower", extent=extent, vmin=0, vmax=1)
    ax.scatter(start.x, start.y, c="green", marker="*", s=90, label="start")
    ax.scatter(goal.x, goal.y, c="red", marker="*", s=90, label="goal")

    for pose in result.path[::4]:
        box = planner.footprint.corners(pose.x, pose.y, pose.theta)
        bx, by = zip(*(box + [box[0]]))
        ax.plot(bx, by, c="orange", lw=0.8, alpha=0.6)

    if result.path:
        xs = [p.x for p in result.path]
        ys = [p.y for p in result.path]
        ax.plot(xs, ys, c="blue", lw=2, label="rotation center")

    ax.set_aspect("equal")
    ax.set_title(title)
    ax.legend(loc="best")
    out_dir = Path(__file__).resolve().parent / "outputs"
    out_dir.mkdir(parents=True, exist_ok=True)
    safe_title = "_".join(part for part in "".join(c if c.isalnum() else "_" for c in title.lower()).split("_") if part)
    out_path = out_dir / f"{safe_title}.png"
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    print(f"Saved: {out_path}")
    plt.show()


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    grid_map = make_map()
    planner = ManeuverPlanner(FOOTPRINT, GridFootprintCost(grid_map), global_frame="map")
    for label, start, goal in SCENARIOS:
        context = PlanningContext(step_size=grid_map.resolution)
        result = planner.plan(start, goal, context)
        print(
            f"{label}: success={result.success}, free={result.fully_free}, "
            f"fallback={result.used_fallback}, poses={len(result.path)}, reference={result.reference_point}"
        )
        plot(grid_map, planner, start, goal, result, title=f"{label} maneuver")


if __name__ == "__main__":
    main()
