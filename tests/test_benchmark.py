import csv

import numpy as np
import pytest

from pathsteer import DubinsStateSpace, InvalidParameterError, ReedsSheppStateSpace, SteeringParams
from pathsteer.benchmark import FIELDNAMES, random_pairs, random_state, run_benchmark, summarize, write_stats


def test_random_state_is_seeded_and_bounded():
    a = random_state(np.random.default_rng(3))
    b = random_state(np.random.default_rng(3))
    assert a == b
    assert -10.0 <= a.x <= 10.0 and -10.0 <= a.y <= 10.0
    assert a.kappa == 0.0 and a.d == 0


def test_run_benchmark_and_write_csv(tmp_path):
    starts, goals = random_pairs(np.random.default_rng(0), 5)
    state_space = ReedsSheppStateSpace(SteeringParams())
    stats = run_benchmark(state_space, starts, goals, "distance")
    assert len(stats) == 5
    for s, start, goal in zip(stats, starts, goals):
        assert s.start == start and s.goal == goal
        assert s.computation_time >= 0.0
        assert s.path_length == pytest.approx(state_space.distance(start, goal))

    mean, std = summarize(stats)
    assert mean >= 0.0 and std >= 0.0

    path = write_stats(tmp_path / "out" / "reeds_shepp_stats.csv", stats)
    with path.open(newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == FIELDNAMES
    assert len(rows) == 6
    assert len(rows[1][0].split()) == 5


@pytest.mark.parametrize("operation", ["path", "controls"])
def test_path_and_controls_lengths(operation):
    starts, goals = random_pairs(np.random.default_rng(1), 3)
    state_space = DubinsStateSpace(SteeringParams())
    stats = run_benchmark(state_space, starts, goals, operation)
    for s in stats:
        assert s.path_length == pytest.approx(state_space.distance(s.start, s.goal), rel=2e-3)


def test_run_benchmark_rejects_bad_input():
    state_space = DubinsStateSpace()
    with pytest.raises(InvalidParameterError):
        run_benchmark(state_space, [], [], "fly")
    starts, goals = random_pairs(np.random.default_rng(2), 2)
    with pytest.raises(ValueError):
        run_benchmark(state_space, starts, goals[:1])


def test_summarize_empty():
    assert summarize([]) == (0.0, 0.0)
