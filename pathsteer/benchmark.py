"""
Timing harness for the state spaces.

Random start/goal pairs are drawn from a seeded generator, every query is
timed on its own and the measurements are returned to the caller; nothing is
accumulated outside a single run.
"""

import csv
import logging
import math
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from .controls import path_length
from .errors import InvalidParameterError
from .state import State
from .state_space import StateSpace

logger = logging.getLogger(__name__)

OPERATIONS = ("distance", "path", "controls")
FIELDNAMES = ["start", "goal", "computation_time", "path_length"]


@dataclass(frozen=True)
class Statistic:
    start: State
    goal: State
    computation_time: float
    path_length: float


def random_state(
    rng: np.random.Generator,
    region_x: float = 20.0,
    region_y: float = 20.0,
    region_theta: float = 2.0 * math.pi,
) -> State:
    """Uniform state centred on the origin with zero curvature."""
    x = rng.uniform(-0.5 * region_x, 0.5 * region_x)
    y = rng.uniform(-0.5 * region_y, 0.5 * region_y)
    theta = rng.uniform(-0.5 * region_theta, 0.5 * region_theta)
    return State(float(x), float(y), float(theta))


def random_pairs(rng: np.random.Generator, count: int, **region) -> Tuple[List[State], List[State]]:
    starts = [random_state(rng, **region) for _ in range(count)]
    goals = [random_state(rng, **region) for _ in range(count)]
    return starts, goals


def sampled_length(path: Sequence[State]) -> float:
    return sum(math.hypot(b.x - a.x, b.y - a.y) for a, b in zip(path, path[1:]))


def _length_of(operation: str, result) -> float:
    if operation == "distance":
        return float(result)
    if operation == "controls":
        return path_length(result)
    return sampled_length(result)


def run_benchmark(
    state_space: StateSpace,
    starts: Sequence[State],
    goals: Sequence[State],
    operation: str = "distance",
    progress: Optional[Callable[[Iterable], Iterable]] = None,
) -> List[Statistic]:
    """Time `operation` of `state_space` on every (start, goal) pair."""
    if operation not in OPERATIONS:
        raise InvalidParameterError(f"operation must be one of {OPERATIONS}, got {operation!r}")
    if len(starts) != len(goals):
        raise InvalidParameterError("starts and goals differ in size")
    query = getattr(state_space, operation)
    pairs: Iterable = zip(starts, goals)
    if progress is not None:
        pairs = progress(pairs)
    stats = []
    for start, goal in pairs:
        t0 = time.perf_counter()
        result = query(start, goal)
        elapsed = time.perf_counter() - t0
        stats.append(Statistic(start, goal, elapsed, _length_of(operation, result)))
    logger.debug("%s %s: %d queries", state_space.kind.value, operation, len(stats))
    return stats


def summarize(stats: Sequence[Statistic]) -> Tuple[float, float]:
    """Mean and standard deviation of the computation times, in seconds."""
    if not stats:
        return 0.0, 0.0
    times = np.array([s.computation_time for s in stats], dtype=float)
    return float(times.mean()), float(times.std())


def format_state(state: State) -> str:
    return f"{state.x} {state.y} {state.theta} {state.kappa} {state.d}"


def write_stats(path: Union[str, Path], stats: Iterable[Statistic]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        for s in stats:
            writer.writerow(
                {
                    "start": format_state(s.start),
                    "goal": format_state(s.goal),
                    "computation_time": s.computation_time,
                    "path_length": s.path_length,
                }
            )
    return path
