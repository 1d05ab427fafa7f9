import json
import pytest
from exceptions import InvalidInputError
from main import load_points_from_file, main
from models import Role


def _write(tmp_path, points):
    path = tmp_path / "points.json"
    path.write_text(json.dumps({"points": points}))
    return path


@pytest.fixture
def square_file(tmp_path):
    return _write(tmp_path, [
        {"label": "Start", "role": "start", "x": 0, "y": 0},
        {"label": "A", "x": 0, "y": 3},
        {"label": "B", "x": 4, "y": 0},
        {"label": "End", "role": "end", "x": 4, "y": 3},
    ])


class TestLoadPoints:
    def test_generated_ids(self, square_file):
        points = load_points_from_file(square_file)
        assert [p.id for p in points] == [1, 2, 3, 4]
        assert points[0].role is Role.START
        assert points[1].role is Role.WAYPOINT

    def test_explicit_ids_and_latlon(self, tmp_path):
        path = _write(tmp_path, [
            {"id": "base", "label": "Base", "role": "start", "lat": 54.4, "lon": -3.2},
            {"id": "top", "label": "Top", "role": "end", "lat": 54.45, "lon": -3.21},
        ])
        points = load_points_from_file(path)
        assert [p.id for p in points] == ["base", "top"]
        assert points[1].has_geographic
        assert not points[1].has_planar

    def test_top_level_not_object(self, tmp_path):
        path = tmp_path / "points.json"
        path.write_text(json.dumps([1, 2]))
        with pytest.raises(InvalidInputError):
            load_points_from_file(path)

    def test_points_not_list(self, tmp_path):
        path = tmp_path / "points.json"
        path.write_text(json.dumps({"points": "Start"}))
        with pytest.raises(InvalidInputError):
            load_points_from_file(path)

    def test_text_coordinate(self, tmp_path):
        path = _write(tmp_path, [{"role": "start", "x": "a", "y": 0}, {"role": "end", "x": 1, "y": 1}])
        with pytest.raises(InvalidInputError):
            load_points_from_file(path)


class TestMain:
    def test_prints_route(self, square_file, capsys):
        assert main([str(square_file)]) == 0
        out = capsys.readouterr().out
        assert "Start -> A -> B -> End" in out
        assert "11.0 px" in out
        assert "[100]" in out

    def test_great_circle_in_km(self, tmp_path, capsys):
        path = _write(tmp_path, [
            {"label": "Base", "role": "start", "lat": 0, "lon": 0},
            {"label": "Top", "role": "end", "lat": 1, "lon": 0},
        ])
        assert main([str(path), "--metric", "great_circle"]) == 0
        assert "111.2 km" in capsys.readouterr().out

    def test_constrained_position_reported(self, tmp_path, capsys):
        path = _write(tmp_path, [
            {"label": "Start", "role": "start", "x": 0, "y": 0},
            {"label": "WP1", "x": 10, "y": 0},
            {"label": "Lunch", "role": "constrained", "x": 1, "y": 1},
            {"label": "End", "role": "end", "x": 20, "y": 0},
        ])
        assert main([str(path), "--min-position", "3"]) == 0
        out = capsys.readouterr().out
        assert "Start -> WP1 -> Lunch -> End" in out
        assert "Constrained point at position 3" in out

    def test_invalid_request_exit_code(self, tmp_path):
        path = _write(tmp_path, [
            {"label": "A", "x": 0, "y": 0},
            {"label": "B", "x": 1, "y": 1},
        ])
        assert main([str(path)]) == 1

    def test_text_coordinate_exit_code(self, tmp_path):
        path = _write(tmp_path, [{"role": "start", "x": "a", "y": 0}, {"role": "end", "x": 1, "y": 1}])
        assert main([str(path)]) == 1

    def test_top_level_list_exit_code(self, tmp_path):
        path = tmp_path / "points.json"
        path.write_text(json.dumps([1, 2]))
        assert main([str(path)]) == 1

    def test_missing_file_exit_code(self, tmp_path):
        assert main([str(tmp_path / "nope.json")]) == 1
