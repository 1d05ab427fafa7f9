"""
Distance metrics for route planning.

Planar distance works on map image pixel coordinates; great-circle distance
works on latitude/longitude in decimal degrees and returns kilometres.
"""

from enum import Enum
from math import atan2, cos, hypot, radians, sin, sqrt

import config
from exceptions import InvalidInputError


class Metric(Enum):
    PLANAR = "planar"
    GREAT_CIRCLE = "great_circle"

    @classmethod
    def coerce(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidInputError(f"Unknown distance metric: {value!r}")


def planar_distance(x1, y1, x2, y2):
    return hypot(x2 - x1, y2 - y1)


def haversine(lat1, lon1, lat2, lon2, radius=config.EARTH_RADIUS_KM):
    """Great-circle distance between two (lat, lon) points in degrees.

    Returned in the unit of radius, kilometres by default. One degree of
    latitude is about 111.19 km.
    """
    phi1, phi2 = radians(lat1), radians(lat2)
    d_phi = radians(lat2 - lat1)
    d_lambda = radians(lon2 - lon1)

    a = sin(d_phi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(d_lambda / 2) ** 2
    return 2 * radius * atan2(sqrt(a), sqrt(1 - a))


def point_distance(a, b, metric):
    """Distance between two GeoPoints under the given metric."""
    if metric is Metric.PLANAR:
        return planar_distance(a.x, a.y, b.x, b.y)
    return haversine(a.lat, a.lon, b.lat, b.lon)


def check_resolved(points, metric):
    """Raise InvalidInputError listing every point without coordinates for metric."""
    if metric is Metric.PLANAR:
        missing = [p for p in points if not p.has_planar]
        space = "x/y"
    else:
        missing = [p for p in points if not p.has_geographic]
        space = "lat/lon"
    if missing:
        labels = ", ".join(str(p) for p in missing)
        raise InvalidInputError(f"Unresolved {space} coordinates for: {labels}")
