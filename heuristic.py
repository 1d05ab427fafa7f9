"""
Nearest-neighbour route ordering for inputs too large for the exact solver.

No optimality guarantee and no position constraint support.
"""

import config
from logging_config import get_logger
from matrix import as_matrix, check_endpoints, path_cost
from models import SolvedRoute

logger = get_logger(__name__)


def nearest_neighbour(dist, start_idx, end_idx):
    """Greedy walk from start over every waypoint, then to end.

    Ties go to the waypoint that comes first in input order.
    """
    unvisited = [i for i in range(len(dist)) if i not in (start_idx, end_idx)]
    route = [start_idx]
    current = start_idx

    while unvisited:
        nearest = unvisited[0]
        for candidate in unvisited[1:]:
            if dist[current][candidate] < dist[current][nearest]:
                nearest = candidate
        route.append(nearest)
        unvisited.remove(nearest)
        current = nearest

    route.append(end_idx)
    return route


def two_opt_improve(route, dist, max_iterations=config.TWO_OPT_MAX_ITERATIONS):
    """Apply 2-opt swaps to reduce route cost.

    The first and last points stay fixed; only the interior segment
    (indices 1 to len-2) is reversed.
    """
    best_route = route[:]
    best_cost = path_cost(best_route, dist)
    n = len(best_route)

    if n < 4:
        return best_route, best_cost

    improved = True
    iteration = 0
    while improved and iteration < max_iterations:
        improved = False
        iteration += 1
        for i in range(1, n - 2):
            for j in range(i + 1, n - 1):
                new_route = best_route[:i] + best_route[i:j + 1][::-1] + best_route[j + 1:]
                new_cost = path_cost(new_route, dist)
                if new_cost < best_cost:
                    best_route = new_route
                    best_cost = new_cost
                    improved = True
                    break
            if improved:
                break

    return best_route, best_cost


def solve_heuristic(matrix, start_idx, end_idx, improve=False,
                    two_opt_iters=config.TWO_OPT_MAX_ITERATIONS):
    """Order all points from start_idx to end_idx by nearest neighbour.

    Always returns a complete route on a well-formed matrix. With improve=True
    the greedy route is polished with 2-opt.
    """
    dist = as_matrix(matrix)
    check_endpoints(dist.shape[0], start_idx, end_idx)

    route = nearest_neighbour(dist, start_idx, end_idx)
    cost = path_cost(route, dist)
    logger.debug(f"Nearest-neighbour route cost {cost:.3f}: {route}")

    if improve:
        route, cost = two_opt_improve(route, dist, max_iterations=two_opt_iters)
        logger.debug(f"2-opt improved route cost {cost:.3f}: {route}")

    return SolvedRoute(route, cost, method="heuristic")
