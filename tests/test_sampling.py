import math

import pytest

from pathsteer.controls import reverse_controls, segment_controls, simplify_controls
from pathsteer.errors import InvalidParameterError
from pathsteer.sampling import end_state, integrate, interpolate
from pathsteer.state import Control, State


def test_partial_step_closes_segment():
    path = integrate(State(0.0, 0.0, 0.0), [Control(1.05, 0.0, 0.0)], 0.1)
    assert len(path) == 12
    assert path[-1].x == pytest.approx(1.05)
    assert all(s.d == 1 for s in path)
    assert path[-2].x == pytest.approx(1.0)


def test_curvature_jump_repeats_pose():
    controls = [Control(1.0, 1.0, 0.0), Control(-1.0, -1.0, 0.0)]
    path = integrate(State(0.0, 0.0, 0.0), controls, 0.1)
    jumps = [
        (a, b)
        for a, b in zip(path, path[1:])
        if (a.x, a.y, a.theta) == (b.x, b.y, b.theta) and a.kappa != b.kappa
    ]
    assert len(jumps) == 1
    before, after = jumps[0]
    assert (before.kappa, after.kappa) == (1.0, -1.0)
    assert after.d == -1


def test_empty_controls_give_start_only():
    start = State(1.0, 2.0, 3.0)
    path = integrate(start, [], 0.1)
    assert len(path) == 1
    assert (path[0].x, path[0].y, path[0].theta) == (1.0, 2.0, 3.0)


def test_bad_discretization():
    with pytest.raises(InvalidParameterError):
        integrate(State(0.0, 0.0, 0.0), [Control(1.0, 0.0)], 0.0)


def test_headings_stay_wrapped():
    path = integrate(State(0.0, 0.0, 3.0), [Control(2.0 * math.pi, 1.0, 0.0)], 0.05)
    assert all(-math.pi < s.theta <= math.pi for s in path)


def test_clothoid_curvature_grows_linearly():
    path = integrate(State(0.0, 0.0, 0.0), [Control(1.0, 0.0, 0.5)], 0.1)
    assert path[-1].kappa == pytest.approx(0.5)
    for a, b in zip(path, path[1:]):
        assert b.kappa - a.kappa == pytest.approx(0.05, abs=1e-9)


def test_interpolate_halfway_and_clamped():
    start = State(0.0, 0.0, 0.0)
    controls = [Control(2.0, 0.0, 0.0)]
    assert interpolate(start, controls, 0.5).x == pytest.approx(1.0)
    assert interpolate(start, controls, 2.0).x == pytest.approx(2.0)
    assert interpolate(start, controls, -1.0).x == 0.0


def test_interpolate_end_matches_end_state():
    start = State(1.0, -1.0, 0.4)
    controls = [Control(0.7, 0.0, 1.0), Control(1.2, 0.7, 0.0), Control(-0.5, 0.0, 0.0)]
    end = end_state(start, controls)
    last = interpolate(start, controls, 1.0)
    assert (last.x, last.y, last.theta) == pytest.approx((end.x, end.y, end.theta))


def test_reversed_controls_drive_back_to_start():
    start = State(0.5, 0.5, -0.3)
    controls = [Control(0.7, 0.0, 1.0), Control(-1.2, 0.7, 0.0), Control(0.4, 0.7, -1.75)]
    end = end_state(start, controls)
    back = end_state(end, reverse_controls(controls))
    assert (back.x, back.y) == pytest.approx((start.x, start.y), abs=1e-9)
    assert math.cos(back.theta - start.theta) == pytest.approx(1.0)


def test_simplify_merges_and_drops():
    controls = [Control(1.0, 1.0), Control(0.0, 0.0), Control(0.5, 1.0), Control(-0.5, 1.0)]
    assert simplify_controls(controls) == [Control(1.5, 1.0), Control(-0.5, 1.0)]


def test_segment_controls_scale_curvature():
    controls = segment_controls(("L", "S", "R"), (1.0, -2.0, 0.5), 0.5)
    assert controls == [Control(1.0, 0.5), Control(-2.0, 0.0), Control(0.5, -0.5)]
    with pytest.raises(InvalidParameterError):
        segment_controls(("L", "X"), (1.0, 1.0), 1.0)
