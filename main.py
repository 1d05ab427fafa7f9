import argparse
import json
import sys

import config
from annotate import format_distance
from exceptions import InvalidInputError, RoutePlannerError
from geo import Metric
from logging_config import get_logger, setup_logging
from models import GeoPoint, IdSequence
from planner import plan_route

logger = get_logger(__name__)


def load_points_from_file(path):
    """Load GeoPoints from {"points": [{"label", "role", "x"/"y" or "lat"/"lon", "id"?}]}."""
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict) or not isinstance(data.get("points"), list):
        raise InvalidInputError(f"{path}: expected an object with a \"points\" list")
    ids = IdSequence()
    points = []
    for p in data["points"]:
        if not isinstance(p, dict):
            raise InvalidInputError(f"{path}: each point must be an object, got {p!r}")
        point_id = p["id"] if "id" in p else ids.next_id()
        points.append(GeoPoint(
            point_id,
            x=p.get("x"), y=p.get("y"),
            lat=p.get("lat"), lon=p.get("lon"),
            label=p.get("label"),
            role=p.get("role", "waypoint"),
        ))
    return points


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Order hiking waypoints into the shortest route")
    parser.add_argument("points_file", nargs="?", default=config.POINTS_FILE)
    parser.add_argument("--metric", default=config.DEFAULT_METRIC,
                        choices=[m.value for m in Metric])
    parser.add_argument("--min-position", type=int, default=None,
                        help="earliest route position of the constrained point (start is 1)")
    parser.add_argument("--max-position", type=int, default=None,
                        help="latest route position of the constrained point")
    parser.add_argument("--normalisation", default=config.DEFAULT_NORMALISATION,
                        choices=["first_leg", "mean_leg"])
    parser.add_argument("--max-exact", type=int, default=config.MAX_EXACT_POINTS)
    parser.add_argument("--improve", action="store_true",
                        help="polish heuristic routes with 2-opt")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging("DEBUG" if args.verbose else config.LOG_LEVEL)

    try:
        points = load_points_from_file(args.points_file)
        print(f"Loaded {len(points)} points from {args.points_file}")
        route = plan_route(
            points,
            metric=args.metric,
            min_position=args.min_position,
            max_position=args.max_position,
            max_exact_points=args.max_exact,
            improve=args.improve,
            normalisation=args.normalisation,
        )
    except (OSError, KeyError, json.JSONDecodeError) as e:
        logger.error(f"Could not read points from {args.points_file}: {e}")
        return 1
    except RoutePlannerError as e:
        logger.error(str(e))
        return 1

    in_km = args.metric == Metric.GREAT_CIRCLE.value
    print("\n" + "=" * 50)
    print(f"ROUTE ({route.method}):")
    print(f"  Route:  {' -> '.join(str(p) for p in route.points)}")
    print(f"  Total:  {format_distance(route.cost) if in_km else f'{route.cost:.1f} px'}")
    if route.constrained_position is not None:
        note = "" if route.constraint_enforced else " (constraint not enforced)"
        print(f"  Constrained point at position {route.constrained_position}{note}")
    annotation = route.annotation
    for i, (leg, rel) in enumerate(zip(annotation.legs, annotation.rounded())):
        a, b = route.points[i], route.points[i + 1]
        shown = format_distance(leg) if in_km else f"{leg:.1f} px"
        print(f"  {i + 1:>2}. {a} -> {b}: {shown} [{rel}]")
    print("=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(main())
