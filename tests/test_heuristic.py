import math
import random
import pytest
from heuristic import nearest_neighbour, solve_heuristic, two_opt_improve
from exact import solve_exact
from matrix import build_distance_matrix, path_cost
from models import GeoPoint


def _points(coords):
    return [GeoPoint(i, x=x, y=y) for i, (x, y) in enumerate(coords)]


@pytest.fixture
def square():
    return build_distance_matrix(_points([(0, 0), (0, 3), (4, 0), (4, 3)]), "planar")


@pytest.fixture
def scattered():
    rng = random.Random(42)
    coords = [(rng.uniform(0, 1000), rng.uniform(0, 1000)) for _ in range(30)]
    return build_distance_matrix(_points(coords), "planar")


class TestNearestNeighbour:
    def test_square(self, square):
        assert nearest_neighbour(square, 0, 3) == [0, 1, 2, 3]

    def test_two_points(self):
        assert nearest_neighbour([[0, 1], [1, 0]], 0, 1) == [0, 1]

    def test_ties_go_to_first_in_list(self):
        m = [
            [0, 2, 2, 2],
            [2, 0, 1, 1],
            [2, 1, 0, 1],
            [2, 1, 1, 0],
        ]
        assert nearest_neighbour(m, 0, 3) == [0, 1, 2, 3]

    def test_end_is_never_visited_early(self):
        # end is closest to the start but must come last
        m = [
            [0, 5, 6, 1],
            [5, 0, 1, 5],
            [6, 1, 0, 5],
            [1, 5, 5, 0],
        ]
        assert nearest_neighbour(m, 0, 3) == [0, 1, 2, 3]

    def test_greedy_is_not_optimal(self):
        # walking to the nearest point first strands the far one
        points = _points([(0, 0), (1, 0), (-3, 0), (10, 0)])
        m = build_distance_matrix(points, "planar")
        greedy = nearest_neighbour(m, 0, 3)
        assert greedy == [0, 1, 2, 3]
        assert path_cost(greedy, m) > solve_exact(m, 0, 3).cost

    def test_infinite_legs_still_complete(self):
        inf = math.inf
        m = [
            [0, inf, inf, 1],
            [inf, 0, inf, inf],
            [inf, inf, 0, inf],
            [1, inf, inf, 0],
        ]
        route = nearest_neighbour(m, 0, 3)
        assert sorted(route) == [0, 1, 2, 3]


class TestTwoOptImprove:
    def test_does_not_increase_cost(self, scattered):
        route = nearest_neighbour(scattered, 0, 29)
        improved, cost = two_opt_improve(route, scattered, 50)
        assert cost <= path_cost(route, scattered) + 1e-9
        assert cost == pytest.approx(path_cost(improved, scattered))

    def test_preserves_endpoints(self, scattered):
        route = nearest_neighbour(scattered, 0, 29)
        improved, _ = two_opt_improve(route, scattered)
        assert improved[0] == 0
        assert improved[-1] == 29

    def test_preserves_visited_set(self, scattered):
        route = nearest_neighbour(scattered, 0, 29)
        improved, _ = two_opt_improve(route, scattered)
        assert sorted(improved) == sorted(route)

    def test_fixes_crossing(self, square):
        improved, cost = two_opt_improve([0, 2, 1, 3], square)
        assert improved == [0, 1, 2, 3]
        assert cost == pytest.approx(11.0)

    def test_short_route_unchanged(self):
        m = [[0, 1, 2], [1, 0, 1], [2, 1, 0]]
        improved, _ = two_opt_improve([0, 1, 2], m)
        assert improved == [0, 1, 2]


class TestSolveHeuristic:
    def test_square_complete(self, square):
        route = solve_heuristic(square, 0, 3)
        assert sorted(route.path) == [0, 1, 2, 3]
        assert route.path[0] == 0
        assert route.path[-1] == 3
        assert route.method == "heuristic"

    def test_no_omissions_or_duplicates(self, scattered):
        route = solve_heuristic(scattered, 5, 17)
        assert len(route.path) == 30
        assert len(set(route.path)) == 30
        assert route.path[0] == 5
        assert route.path[-1] == 17

    def test_cost_is_leg_sum(self, scattered):
        route = solve_heuristic(scattered, 0, 29)
        assert route.cost == path_cost(route.path, scattered)

    def test_deterministic(self, scattered):
        assert solve_heuristic(scattered, 0, 29).path == solve_heuristic(scattered, 0, 29).path

    def test_improve_not_worse(self, scattered):
        plain = solve_heuristic(scattered, 0, 29)
        improved = solve_heuristic(scattered, 0, 29, improve=True, two_opt_iters=20)
        assert improved.cost <= plain.cost + 1e-9

    def test_more_points_than_exact_limit(self, scattered):
        # 30 points is beyond the exact solver but fine here
        route = solve_heuristic(scattered, 0, 29)
        assert len(route) == 30
