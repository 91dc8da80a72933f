import math
from dataclasses import dataclass, replace
from typing import Tuple

from .common import wrap_angle


@dataclass(frozen=True)
class Pose2D:
    """Planar pose. frame_id and stamp are bookkeeping only."""

    x: float
    y: float
    theta: float
    frame_id: str = ""
    stamp: float = 0.0

    def as_tuple(self) -> Tuple[float, float, float]:
        return self.x, self.y, self.theta


def rotate(pose: Pose2D, theta: float) -> Pose2D:
    """Rotate the position about the origin by theta and add theta to the heading."""
    c = math.cos(theta)
    s = math.sin(theta)
    return replace(
        pose,
        x=c * pose.x - s * pose.y,
        y=s * pose.x + c * pose.y,
        theta=wrap_angle(pose.theta + theta),
    )


def translate(pose: Pose2D, offset: Tuple[float, float]) -> Pose2D:
    """Add a planar offset to the position; heading unchanged."""
    return replace(pose, x=pose.x + offset[0], y=pose.y + offset[1])


def to_frame(pose: Pose2D, frame: Pose2D) -> Pose2D:
    """Express a pose given in the parent frame in the frame anchored at `frame`."""
    local = translate(pose, (-frame.x, -frame.y))
    return rotate(local, -frame.theta)


def from_frame(pose: Pose2D, frame: Pose2D) -> Pose2D:
    """Inverse of `to_frame`: express a pose local to `frame` in the parent frame."""
    return translate(rotate(pose, frame.theta), (frame.x, frame.y))
