# config.py — Central configuration for the hiking route planner

# Input data
POINTS_FILE = "points.json"

# Distance metric: "planar" (map image pixels) or "great_circle" (lat/lon degrees)
DEFAULT_METRIC = "planar"
EARTH_RADIUS_KM = 6371.0

# Exact solver parameters
MAX_EXACT_POINTS = 20  # Held-Karp memory grows as 2^n * n
DEFAULT_CONSTRAINED_MIN_POSITION = 3  # lunch after start + one waypoint

# Heuristic 2-opt parameters
TWO_OPT_MAX_ITERATIONS = 100

# Leg display: "first_leg" or "mean_leg"
#   first_leg — first leg is shown as 100
#   mean_leg  — average leg is shown as 100
DEFAULT_NORMALISATION = "first_leg"

# Logging
LOG_LEVEL = "INFO"
