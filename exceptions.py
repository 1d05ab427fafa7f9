"""
Exceptions raised by the route planner.

Every failure is reported as a subclass of RoutePlannerError so callers can
catch all planner errors in one place.
"""


class RoutePlannerError(Exception):
    """Base exception for all route planner errors."""

    pass


class InvalidInputError(RoutePlannerError, ValueError):
    """Raised when a request is malformed.

    Covers wrong start/end counts, too few points, unresolved coordinates,
    malformed distance matrices and malformed position constraints.
    """

    pass


class NoFeasiblePathError(RoutePlannerError):
    """Raised when no route satisfies the request."""

    def __init__(self, reason, constraint=None):
        self.reason = reason
        self.constraint = constraint
        msg = f"No feasible route: {reason}"
        if constraint is not None:
            msg += f" ({constraint})"
        super().__init__(msg)


class InputTooLargeError(RoutePlannerError):
    """Raised when the exact solver is given more points than it allows."""

    def __init__(self, num_points, max_points):
        self.num_points = num_points
        self.max_points = max_points
        super().__init__(
            f"Too many points for exact solving: {num_points} > {max_points}"
        )
