import itertools
import numbers
from enum import Enum
from math import isnan

from exceptions import InvalidInputError


class Role(Enum):
    START = "start"
    END = "end"
    WAYPOINT = "waypoint"
    CONSTRAINED = "constrained"

    @classmethod
    def coerce(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidInputError(f"Unknown point role: {value!r}")


class IdSequence:
    """Point id counter scoped to one planning session."""

    def __init__(self, start=1):
        self._counter = itertools.count(start)

    def next_id(self):
        return next(self._counter)


def _is_unresolved(value):
    return value is None or (isinstance(value, float) and isnan(value))


def _coordinate(name, value):
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInputError(f"Coordinate {name} must be a number, got {value!r}")
    return value


class GeoPoint:
    """A labelled location in either planar pixel space (x, y) or
    geographic degrees (lat, lon)."""

    def __init__(self, point_id, x=None, y=None, lat=None, lon=None, label=None, role=Role.WAYPOINT):
        self.id = point_id
        self.x = _coordinate("x", x)
        self.y = _coordinate("y", y)
        self.lat = _coordinate("lat", lat)
        self.lon = _coordinate("lon", lon)
        self.label = label if label is not None else str(point_id)
        self.role = Role.coerce(role)

    @property
    def has_planar(self):
        return not (_is_unresolved(self.x) or _is_unresolved(self.y))

    @property
    def has_geographic(self):
        return not (_is_unresolved(self.lat) or _is_unresolved(self.lon))

    def __eq__(self, other):
        if not isinstance(other, GeoPoint):
            return False
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def __str__(self):
        return self.label

    def __repr__(self):
        return f"GeoPoint(id={self.id}, label={self.label}, role={self.role.value})"


class PositionConstraint:
    """Restricts where one point may appear in a route.

    Positions are 1-indexed with the start at position 1. max_position=None
    leaves the position unbounded above.
    """

    def __init__(self, index, min_position, max_position=None):
        if min_position < 1:
            raise InvalidInputError(f"min_position must be at least 1, got {min_position}")
        if max_position is not None and max_position < min_position:
            raise InvalidInputError(
                f"max_position {max_position} is below min_position {min_position}"
            )
        self.index = index
        self.min_position = min_position
        self.max_position = max_position

    def allows(self, position):
        if position < self.min_position:
            return False
        return self.max_position is None or position <= self.max_position

    def __repr__(self):
        return (f"PositionConstraint(index={self.index}, min={self.min_position}, "
                f"max={self.max_position})")


class SolvedRoute:
    def __init__(self, path, cost, constrained_position=None, method="exact", constraint_enforced=True):
        self.path = list(path)
        self.cost = cost
        self.constrained_position = constrained_position
        self.method = method
        self.constraint_enforced = constraint_enforced
        self.points = []
        self.annotation = None

    def __len__(self):
        return len(self.path)

    def __repr__(self):
        return (f"SolvedRoute(path={self.path}, cost={self.cost:.2f}, "
                f"method={self.method}, constrained_position={self.constrained_position})")
