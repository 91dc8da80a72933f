import math


def wrap_angle(angle: float) -> float:
    """Wrap angle to (-pi, pi]."""
    a = (angle + math.pi) % (2.0 * math.pi) - math.pi
    if a == -math.pi:
        return math.pi
    return a


def heading_diff(a: float, b: float) -> float:
    """Smallest signed difference a-b."""
    return wrap_angle(a - b)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t
