"""
Exact route ordering with the Held-Karp bitmask dynamic programme.

A route starts at a fixed point, ends at a fixed point and visits every
other point exactly once. Optionally one point is held to a range of
positions in the route (for example a lunch stop after the second control).
"""

import numpy as np

import config
from exceptions import InputTooLargeError, InvalidInputError, NoFeasiblePathError
from logging_config import LogTimer, get_logger
from matrix import as_matrix, check_endpoints, path_cost
from models import PositionConstraint, SolvedRoute

logger = get_logger(__name__)


def _coerce_constraint(constraint, n):
    if constraint is None:
        return None
    if not isinstance(constraint, PositionConstraint):
        constraint = PositionConstraint(*constraint)
    if not 0 <= constraint.index < n:
        raise InvalidInputError(f"Constrained index {constraint.index} out of range [0, {n})")
    return constraint


def _finish(path, dist, constraint, method="exact"):
    cost = path_cost(path, dist)
    if not np.isfinite(cost):
        raise NoFeasiblePathError("route contains an unreachable leg", constraint)

    position = None
    if constraint is not None:
        position = path.index(constraint.index) + 1
        if not constraint.allows(position):
            raise NoFeasiblePathError(
                f"point {constraint.index} can only be at position {position}", constraint
            )
    return SolvedRoute(path, cost, constrained_position=position, method=method)


def _popcounts(size, bits):
    masks = np.arange(size)
    counts = np.zeros(size, dtype=np.int64)
    for bit in range(bits):
        counts += (masks >> bit) & 1
    return masks, counts


def _held_karp(dist, start_idx, end_idx, constraint=None):
    """Return the cheapest start-to-end path over all indices of dist.

    Subsets range over every index except the start, which is implicitly
    visited first, so a subset holding `count` points ends at route
    position count + 1.
    """
    n = dist.shape[0]
    others = [i for i in range(n) if i != start_idx]
    m = len(others)
    end = others.index(end_idx)
    held = others.index(constraint.index) if constraint is not None else None

    def may_place(k, count):
        if k == end and count != m:
            return False
        if k == held and not constraint.allows(count + 1):
            return False
        return True

    sub = dist[np.ix_(others, others)]
    size = 1 << m
    full = size - 1
    masks, popcount = _popcounts(size, m)

    cost = np.full((size, m), np.inf)
    parent = np.full((size, m), -1, dtype=np.int16)

    for k in range(m):
        if may_place(k, 1):
            cost[1 << k, k] = dist[start_idx, others[k]]

    for count in range(2, m + 1):
        layer = masks[popcount == count]
        for k in range(m):
            if not may_place(k, count):
                continue
            targets = layer[(layer & (1 << k)) != 0]
            # candidates[t, last] = cost of reaching `last` without k, then stepping to k
            candidates = cost[targets ^ (1 << k)] + sub[:, k]
            best = np.argmin(candidates, axis=1)
            cost[targets, k] = candidates[np.arange(len(targets)), best]
            parent[targets, k] = best

    if not np.isfinite(cost[full, end]):
        if constraint is not None:
            raise NoFeasiblePathError("position constraint cannot be satisfied", constraint)
        raise NoFeasiblePathError("route contains an unreachable leg")

    order = []
    mask, k = full, end
    while k != -1:
        order.append(others[k])
        prev = int(parent[mask, k])
        mask ^= 1 << k
        k = prev
    order.reverse()
    return [start_idx] + order


def solve_exact(matrix, start_idx, end_idx, constraint=None, max_points=config.MAX_EXACT_POINTS):
    """Find the minimum-cost route from start_idx to end_idx visiting every index.

    Args:
        matrix: square distance matrix (nested sequence or ndarray)
        start_idx, end_idx: fixed first and last points
        constraint: optional PositionConstraint, or an (index, min_position[, max_position])
                    tuple, restricting where one point may appear
        max_points: largest matrix accepted; memory grows as 2^n * n

    Raises:
        InvalidInputError: malformed matrix, indices or constraint
        InputTooLargeError: more than max_points points
        NoFeasiblePathError: the constraint cannot be met or a leg is unreachable
    """
    dist = as_matrix(matrix)
    n = dist.shape[0]
    if n > max_points:
        raise InputTooLargeError(n, max_points)
    check_endpoints(n, start_idx, end_idx)
    constraint = _coerce_constraint(constraint, n)

    if n == 2:
        return _finish([start_idx, end_idx], dist, constraint)

    interior = constraint
    if constraint is not None:
        if constraint.index == start_idx and not constraint.allows(1):
            raise NoFeasiblePathError("the start is always at position 1", constraint)
        if constraint.index == end_idx and not constraint.allows(n):
            raise NoFeasiblePathError(f"the end is always at position {n}", constraint)
        if constraint.index in (start_idx, end_idx):
            interior = None
        elif not any(constraint.allows(p) for p in range(2, n)):
            raise NoFeasiblePathError(f"interior positions only run from 2 to {n - 1}", constraint)

    logger.debug(f"Held-Karp over {n} points ({1 << (n - 1)} subsets), constraint={constraint}")
    with LogTimer(logger, f"Held-Karp solve ({n} points)"):
        path = _held_karp(dist, start_idx, end_idx, interior)

    route = _finish(path, dist, constraint)
    logger.debug(f"Exact route cost {route.cost:.3f}: {route.path}")
    return route


def solve_by_constrained_position(matrix, start_idx, end_idx, constrained_idx, positions,
                                  max_points=config.MAX_EXACT_POINTS):
    """Best route for each exact position of constrained_idx.

    Returns {position: SolvedRoute}; positions with no feasible route are left out.
    """
    routes = {}
    for position in positions:
        constraint = PositionConstraint(constrained_idx, position, position)
        try:
            routes[position] = solve_exact(matrix, start_idx, end_idx, constraint, max_points)
        except NoFeasiblePathError as e:
            logger.debug(f"No route with point {constrained_idx} at position {position}: {e}")
    return routes
