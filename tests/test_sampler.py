import math

import pytest

from maneuverplan.common import heading_diff
from maneuverplan.curves import CurveParameters, CurveType, compute_curve_parameters
from maneuverplan.geometry import Footprint
from maneuverplan.reference import CENTER, ReferenceSelection
from maneuverplan.sampler import Phase, iter_reference_poses, sample_trajectory, step_bound
from maneuverplan.transforms import Pose2D

FOOTPRINT = Footprint.from_box(length=0.4, width=0.3)


def free(x, y, theta, footprint):
    return 0.0


def center_selection(goal: Pose2D, radius: float = 0.8) -> ReferenceSelection:
    return ReferenceSelection(CENTER, compute_curve_parameters(goal, radius), goal)


def test_phases_run_in_order():
    params = CurveParameters(CurveType.LEFT_TURN, 1.2, 0.2, 0.8)
    phases = [p for _, _, _, p in iter_reference_poses(params, math.pi / 2, 0.05)]
    assert phases[0] is Phase.STRAIGHT_BEFORE
    assert phases[-1] is Phase.STRAIGHT_AFTER
    assert [p.value for p in phases] == sorted(p.value for p in phases)
    assert phases.count(Phase.STRAIGHT_BEFORE) == 24
    assert phases.count(Phase.STRAIGHT_AFTER) == 4


def test_straight_segments_do_not_overshoot():
    params = CurveParameters(CurveType.RIGHT_TURN, 0.33, 0.07, -0.5)
    poses = list(iter_reference_poses(params, -math.pi / 2, 0.1))
    before = [p for p in poses if p[3] is Phase.STRAIGHT_BEFORE]
    assert before[-1][0] == pytest.approx(0.33)
    last = poses[-1]
    assert last[2] == pytest.approx(-math.pi / 2)


@pytest.mark.parametrize(
    "goal, radius, step",
    [
        (Pose2D(2.0, 1.0, math.pi / 2), 0.8, 0.05),
        (Pose2D(3.0, -0.5, -0.3), 0.6, 0.01),
        (Pose2D(1.5, 2.5, 2.0), 0.6, 0.2),
        (Pose2D(4.0, 1.0, math.pi / 4), 0.3, 0.07),
    ],
)
def test_sampling_terminates_within_bound(goal, radius, step):
    params = compute_curve_parameters(goal, radius)
    assert params.feasible
    count = sum(1 for _ in iter_reference_poses(params, goal.theta, step))
    assert 0 < count <= step_bound(params, goal.theta, step)


def test_non_positive_step_rejected():
    params = CurveParameters(CurveType.LEFT_TURN, 1.0, 1.0, 1.0)
    with pytest.raises(ValueError):
        next(iter_reference_poses(params, 1.0, 0.0))


def test_center_reference_reaches_goal():
    start = Pose2D(0.0, 0.0, 0.0, "map")
    goal = Pose2D(2.0, 1.0, math.pi / 2, "map", 7.0)
    poses, fully_free = sample_trajectory(start, center_selection(goal), 0.05, free, FOOTPRINT, "map", 7.0)
    assert fully_free
    assert poses[0].as_tuple() == pytest.approx((0.0, 0.0, 0.0))
    end = poses[-1]
    assert math.hypot(end.x - goal.x, end.y - goal.y) <= 0.05
    assert abs(heading_diff(end.theta, goal.theta)) < 1e-9
    assert all(p.frame_id == "map" and p.stamp == 7.0 for p in poses)


def test_center_reference_in_rotated_start_frame():
    start = Pose2D(1.0, 1.0, math.pi / 2, "map")
    local_goal = Pose2D(2.0, -1.0, -math.pi / 2)
    poses, fully_free = sample_trajectory(start, center_selection(local_goal), 0.05, free, FOOTPRINT)
    assert fully_free
    end = poses[-1]
    # local (2, -1) seen from a start facing +y lands at (2, 3), heading 0
    assert math.hypot(end.x - 2.0, end.y - 3.0) <= 0.05
    assert abs(heading_diff(end.theta, 0.0)) < 1e-9


def test_corner_reference_keeps_center_on_track():
    start = Pose2D(0.0, 0.0, 0.0, "map")
    ref_goal = Pose2D(1.95, 1.35, math.pi / 2)
    selection = ReferenceSelection(FOOTPRINT.top_right, compute_curve_parameters(ref_goal, 0.8), ref_goal)
    poses, fully_free = sample_trajectory(start, selection, 0.05, free, FOOTPRINT)
    assert fully_free
    # straight phase moves the center along +x without rotating
    assert poses[5].y == pytest.approx(0.0, abs=1e-9)
    assert poses[5].theta == pytest.approx(0.0, abs=1e-9)
    headings = [p.theta for p in poses]
    assert max(headings) < math.pi / 2 + 0.1
    end = poses[-1]
    assert math.hypot(end.x - 2.0, end.y - 1.0) <= 0.1
    assert abs(heading_diff(end.theta, math.pi / 2)) < 0.05


def test_blocked_trajectory_keeps_free_prefix():
    def wall(x, y, theta, footprint):
        return -1.0 if x > 1.01 else 0.0

    start = Pose2D(0.0, 0.0, 0.0)
    poses, fully_free = sample_trajectory(start, center_selection(Pose2D(2.0, 1.0, math.pi / 2)), 0.05, wall, FOOTPRINT)
    assert not fully_free
    assert poses
    assert all(p.x <= 1.01 for p in poses)
    assert poses[-1].x == pytest.approx(1.0, abs=1e-6)


def test_blocked_at_start_returns_empty_plan():
    def blocked(x, y, theta, footprint):
        return -1.0

    poses, fully_free = sample_trajectory(
        Pose2D(0.0, 0.0, 0.0), center_selection(Pose2D(2.0, 1.0, math.pi / 2)), 0.05, blocked, FOOTPRINT
    )
    assert poses == []
    assert not fully_free


def test_oracle_receives_footprint_and_center_poses():
    seen = []

    def recording(x, y, theta, footprint):
        seen.append((x, y, theta, footprint))
        return 0.0

    poses, _ = sample_trajectory(
        Pose2D(0.0, 0.0, 0.0), center_selection(Pose2D(2.0, 1.0, math.pi / 2)), 0.1, recording, FOOTPRINT
    )
    assert len(seen) == len(poses)
    assert all(s[3] is FOOTPRINT for s in seen)
    assert [s[:3] for s in seen] == [p.as_tuple() for p in poses]
