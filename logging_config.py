"""
Logging configuration for the route planner.

Library modules only ask for loggers; handlers are installed by the command
line entry point through setup_logging().
"""

import logging
import sys
import time


ROOT_LOGGER = "route_planner"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


def setup_logging(level=logging.INFO, detailed=False):
    """Configure the route_planner logger to write to stdout.

    Args:
        level: Logging level, either an int or a name such as "DEBUG"
        detailed: Include file and line number in each record

    Returns:
        The configured logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(DETAILED_FORMAT if detailed else DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name):
    """Get a logger under the route_planner namespace, typically get_logger(__name__)."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


class LogTimer:
    """Context manager that logs how long a block took.

    Example:
        >>> with LogTimer(logger, "Held-Karp solve"):
        ...     route = solve_exact(matrix, 0, 5)
        DEBUG - Held-Karp solve: 0.12s
    """

    def __init__(self, logger, operation, level=logging.DEBUG):
        self.logger = logger
        self.operation = operation
        self.level = level
        self.start_time = None
        self.elapsed = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = time.perf_counter() - self.start_time
        self.logger.log(self.level, f"{self.operation}: {self.elapsed:.2f}s")
        return False
