import numpy as np

import config
from exceptions import InvalidInputError
from geo import Metric, check_resolved, point_distance
from logging_config import get_logger

logger = get_logger(__name__)


def build_distance_matrix(points, metric=config.DEFAULT_METRIC):
    """Build a symmetric, zero-diagonal, read-only distance matrix.

    Rows and columns follow the order of points, not their ids.
    """
    metric = Metric.coerce(metric)
    points = list(points)
    if len(points) < 2:
        raise InvalidInputError(f"Need at least 2 points, got {len(points)}")
    check_resolved(points, metric)

    n = len(points)
    matrix = np.zeros((n, n), dtype=float)
    for i in range(n):
        for j in range(i + 1, n):
            dist = point_distance(points[i], points[j], metric)
            matrix[i, j] = dist
            matrix[j, i] = dist

    matrix.setflags(write=False)
    logger.debug(f"Built {n}x{n} {metric.value} distance matrix")
    return matrix


def as_matrix(matrix):
    """Validate a caller-supplied matrix and return it as a float array.

    The matrix must be symmetric with a zero diagonal. NaN entries are
    treated as unreachable (infinite) legs.
    """
    try:
        arr = np.array(matrix, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Distance matrix is not numeric and rectangular: {e}") from e
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise InvalidInputError(f"Distance matrix must be square, got shape {arr.shape}")
    if arr.shape[0] == 0:
        raise InvalidInputError("Distance matrix is empty")
    arr[np.isnan(arr)] = np.inf
    if (arr < 0).any():
        raise InvalidInputError("Distance matrix contains negative distances")
    if (np.diag(arr) != 0).any():
        raise InvalidInputError("Distance matrix must have a zero diagonal")
    if not np.allclose(arr, arr.T):
        raise InvalidInputError("Distance matrix must be symmetric")
    return arr


def check_endpoints(n, start_idx, end_idx):
    for name, idx in (("start", start_idx), ("end", end_idx)):
        if not 0 <= idx < n:
            raise InvalidInputError(f"{name} index {idx} out of range [0, {n})")
    if start_idx == end_idx:
        raise InvalidInputError("Start and end must be different points")


def path_cost(path, matrix):
    """Sum of consecutive leg distances along path."""
    total = 0.0
    for i in range(len(path) - 1):
        total += float(matrix[path[i]][path[i + 1]])
    return total
