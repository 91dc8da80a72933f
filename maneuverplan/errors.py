class ManeuverPlannerError(Exception):
    """Base class for planner errors."""


class NotInitialized(ManeuverPlannerError):
    """Planning was requested before a valid footprint was set up."""


class InvalidFootprint(ManeuverPlannerError):
    """Footprint does not have four corners around the rotation center."""


class FrameMismatch(ManeuverPlannerError):
    """Goal is expressed in a frame other than the planner's global frame."""

    def __init__(self, expected: str, received: str):
        super().__init__(
            f"This planner only accepts goals in the {expected!r} frame, "
            f"but a goal was sent in the {received!r} frame."
        )
        self.expected = expected
        self.received = received
