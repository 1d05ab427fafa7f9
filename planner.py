"""
Route planning entry point: validate a point set, build its distance matrix
and order it with the exact solver, or the heuristic when there are too many
points.
"""

from collections import Counter

import config
from annotate import annotate
from exact import solve_exact
from exceptions import InvalidInputError
from heuristic import solve_heuristic
from logging_config import get_logger
from matrix import build_distance_matrix
from models import PositionConstraint, Role

logger = get_logger(__name__)


def validate_points(points):
    """Check the role and id rules of a request.

    Returns (start_idx, end_idx, constrained_idx or None).
    """
    if len(points) < 2:
        raise InvalidInputError(f"Need at least 2 points, got {len(points)}")

    duplicates = [pid for pid, count in Counter(p.id for p in points).items() if count > 1]
    if duplicates:
        raise InvalidInputError(f"Duplicate point ids: {duplicates}")

    by_role = {role: [i for i, p in enumerate(points) if p.role is role] for role in Role}
    for role in (Role.START, Role.END):
        if len(by_role[role]) != 1:
            raise InvalidInputError(
                f"Need exactly one {role.value} point, got {len(by_role[role])}"
            )
    if len(by_role[Role.CONSTRAINED]) > 1:
        raise InvalidInputError(
            f"At most one constrained point is supported, got {len(by_role[Role.CONSTRAINED])}"
        )

    constrained = by_role[Role.CONSTRAINED][0] if by_role[Role.CONSTRAINED] else None
    return by_role[Role.START][0], by_role[Role.END][0], constrained


def plan_route(points, metric=config.DEFAULT_METRIC, min_position=None, max_position=None,
               max_exact_points=config.MAX_EXACT_POINTS, improve=False, normalisation=None):
    """Order points into the shortest route from the start point to the end point.

    Args:
        points: GeoPoints with exactly one START and one END role
        metric: "planar" or "great_circle"
        min_position, max_position: allowed route positions of the CONSTRAINED
            point; min_position defaults to config.DEFAULT_CONSTRAINED_MIN_POSITION
        max_exact_points: above this the heuristic is used and the constraint is
            not enforced
        improve: polish heuristic routes with 2-opt
        normalisation: when given ("first_leg" or "mean_leg"), also set
            route.annotation with the per-leg distances

    Returns a SolvedRoute with .points in route order.
    """
    points = list(points)
    start_idx, end_idx, constrained_idx = validate_points(points)
    matrix = build_distance_matrix(points, metric)

    constraint = None
    if constrained_idx is not None:
        if min_position is None:
            min_position = config.DEFAULT_CONSTRAINED_MIN_POSITION
        constraint = PositionConstraint(constrained_idx, min_position, max_position)
    elif min_position is not None or max_position is not None:
        logger.warning("Position given but no point has the constrained role; ignoring it")

    n = len(points)
    if n <= max_exact_points:
        route = solve_exact(matrix, start_idx, end_idx, constraint, max_points=max_exact_points)
    else:
        logger.warning(f"{n} points exceeds exact limit of {max_exact_points}, using nearest neighbour")
        route = solve_heuristic(matrix, start_idx, end_idx, improve=improve)
        if constraint is not None:
            route.constraint_enforced = False
            route.constrained_position = route.path.index(constrained_idx) + 1
            logger.warning(
                f"Constraint on {points[constrained_idx]} not enforced; "
                f"it falls at position {route.constrained_position}"
            )

    route.points = [points[i] for i in route.path]
    if normalisation is not None:
        route.annotation = annotate(route.path, matrix, normalisation)
    logger.info(f"Planned {route.method} route over {n} points, total {route.cost:.2f}")
    return route


def submit_plan(executor, points, **kwargs):
    """Run plan_route on a concurrent.futures executor and return the Future."""
    return executor.submit(plan_route, list(points), **kwargs)
