import math
from enum import Enum

from exceptions import InvalidInputError


class Normalisation(Enum):
    FIRST_LEG = "first_leg"  # first leg shown as 100
    MEAN_LEG = "mean_leg"  # average leg shown as 100

    @classmethod
    def coerce(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidInputError(f"Unknown leg normalisation: {value!r}")


class RouteAnnotation:
    def __init__(self, legs, relative):
        self.legs = legs
        self.relative = relative

    @property
    def total(self):
        return sum(self.legs)

    def rounded(self):
        """Relative leg values as integers, as drawn beside each leg."""
        return [math.floor(v + 0.5) for v in self.relative]

    def __repr__(self):
        return f"RouteAnnotation(legs={len(self.legs)}, total={self.total:.2f})"


def leg_distances(path, matrix):
    return [float(matrix[path[i]][path[i + 1]]) for i in range(len(path) - 1)]


def annotate(path, matrix, normalisation):
    """Per-leg distances plus leg lengths scaled to a reference leg of 100.

    normalisation picks the reference: the first leg or the mean leg.
    """
    normalisation = Normalisation.coerce(normalisation)
    legs = leg_distances(path, matrix)
    if not legs:
        return RouteAnnotation([], [])

    if normalisation is Normalisation.FIRST_LEG:
        reference = legs[0]
    else:
        reference = sum(legs) / len(legs)
    if reference <= 0:
        raise InvalidInputError(f"Cannot scale legs to a {normalisation.value} of zero length")

    return RouteAnnotation(legs, [leg / reference * 100.0 for leg in legs])


def format_distance(distance_km):
    """Human readable distance: metres below 1 km, then km with fewer decimals as it grows."""
    if distance_km < 1:
        return f"{round(distance_km * 1000)} m"
    if distance_km < 10:
        return f"{distance_km:.2f} km"
    return f"{distance_km:.1f} km"
