import math

import numpy as np
import pytest

from pathsteer import (
    CCDubinsStateSpace,
    CCReedsSheppStateSpace,
    DubinsStateSpace,
    HC00ReedsSheppStateSpace,
    HC0pmReedsSheppStateSpace,
    HCpm0ReedsSheppStateSpace,
    HCpmpmReedsSheppStateSpace,
    InvalidParameterError,
    ReedsSheppStateSpace,
    State,
    StateSpaceKind,
    SteeringParams,
    make_state_space,
)
from pathsteer.benchmark import random_state, sampled_length

PARAMS = SteeringParams(kappa_max=1.0, sigma_max=1.0, discretization=0.1)

ZERO_CURVATURE_KINDS = [
    StateSpaceKind.DUBINS,
    StateSpaceKind.REEDS_SHEPP,
    StateSpaceKind.CC_DUBINS,
    StateSpaceKind.CC_REEDS_SHEPP,
    StateSpaceKind.HC00_REEDS_SHEPP,
]
SYMMETRIC_KINDS = [
    StateSpaceKind.REEDS_SHEPP,
    StateSpaceKind.CC_REEDS_SHEPP,
    StateSpaceKind.HC00_REEDS_SHEPP,
]


def _pairs(seed, count=6):
    rng = np.random.default_rng(seed)
    return [(random_state(rng), random_state(rng)) for _ in range(count)]


def _rigid(state, angle, tx, ty):
    c, s = math.cos(angle), math.sin(angle)
    return State(c * state.x - s * state.y + tx, s * state.x + c * state.y + ty, state.theta + angle, state.kappa)


@pytest.mark.parametrize("kind", list(StateSpaceKind))
def test_factory_builds_every_kind(kind):
    state_space = make_state_space(kind, PARAMS)
    assert state_space.kind is kind
    assert state_space.params is PARAMS
    assert make_state_space(kind.value).kind is kind


def test_factory_rejects_unknown_kind():
    with pytest.raises(InvalidParameterError):
        make_state_space("bicycle")


def test_invalid_params_rejected():
    with pytest.raises(InvalidParameterError):
        SteeringParams(kappa_max=0.0)
    with pytest.raises(ValueError):
        SteeringParams(sigma_max=-1.0)
    with pytest.raises(InvalidParameterError):
        SteeringParams(discretization=float("nan"))


@pytest.mark.parametrize("kind", ZERO_CURVATURE_KINDS)
def test_same_state_has_zero_distance(kind):
    state_space = make_state_space(kind, PARAMS)
    a = State(1.0, 2.0, 0.3)
    assert state_space.distance(a, a) == pytest.approx(0.0, abs=1e-9)
    path = state_space.path(a, a)
    assert len(path) == 1
    assert (path[0].x, path[0].y) == (1.0, 2.0)


def test_same_state_with_maximum_curvature():
    state_space = HCpmpmReedsSheppStateSpace(PARAMS)
    a = State(1.0, 2.0, 0.3, 1.0)
    assert state_space.distance(a, a) == 0.0
    assert state_space.controls(a, a) == []


@pytest.mark.parametrize("kind", ZERO_CURVATURE_KINDS)
def test_straight_ahead(kind):
    state_space = make_state_space(kind, PARAMS)
    start = State(0.0, 0.0, 0.0)
    goal = State(10.0, 0.0, 0.0)
    assert state_space.distance(start, goal) == pytest.approx(10.0)
    controls = state_space.controls(start, goal)
    assert len(controls) == 1
    assert controls[0].kappa == 0.0 and controls[0].sigma == 0.0
    assert controls[0].delta_s == pytest.approx(10.0)
    path = state_space.path(start, goal)
    assert path[-1].x == pytest.approx(10.0)
    assert all(abs(s.y) < 1e-12 for s in path)


def test_turnaround_reeds_shepp_not_longer_than_dubins():
    start = State(0.0, 0.0, 0.0)
    goal = State(0.0, 0.0, math.pi)
    dubins = DubinsStateSpace(PARAMS).distance(start, goal)
    reeds_shepp = ReedsSheppStateSpace(PARAMS).distance(start, goal)
    assert 0.0 < dubins < math.inf
    assert reeds_shepp <= dubins + 1e-9
    path = DubinsStateSpace(PARAMS).path(start, goal)
    assert len(path) > 1
    assert all(s.d == 1 for s in path)


@pytest.mark.parametrize("kind", ZERO_CURVATURE_KINDS)
def test_path_reaches_goal_and_matches_distance(kind):
    state_space = make_state_space(kind, PARAMS)
    for start, goal in _pairs(1):
        distance = state_space.distance(start, goal)
        path = state_space.path(start, goal)
        last = path[-1]
        assert (last.x, last.y) == pytest.approx((goal.x, goal.y), abs=1e-5)
        assert math.cos(last.theta - goal.theta) == pytest.approx(1.0, abs=1e-9)
        # chords of arcs sampled every 0.1 m are shorter than the arcs by < 0.05 %
        assert sampled_length(path) == pytest.approx(distance, rel=2e-3)
        assert sampled_length(path) <= distance + 1e-9


@pytest.mark.parametrize("kind", list(StateSpaceKind))
def test_curvature_is_bounded(kind):
    state_space = make_state_space(kind, PARAMS)
    for start, goal in _pairs(2, count=4):
        for s in state_space.path(start, goal):
            assert abs(s.kappa) <= PARAMS.kappa_max + 1e-6


@pytest.mark.parametrize("kind", [StateSpaceKind.CC_DUBINS, StateSpaceKind.CC_REEDS_SHEPP])
def test_curvature_rate_is_bounded(kind):
    state_space = make_state_space(kind, PARAMS)
    bound = PARAMS.sigma_max * PARAMS.discretization + 1e-6
    for start, goal in _pairs(3):
        path = state_space.path(start, goal)
        assert path[0].kappa == 0.0
        assert abs(path[-1].kappa) < 1e-6
        for a, b in zip(path, path[1:]):
            assert abs(b.kappa - a.kappa) <= bound


@pytest.mark.parametrize("kind", SYMMETRIC_KINDS)
def test_distance_is_symmetric(kind):
    state_space = make_state_space(kind, PARAMS)
    for a, b in _pairs(4):
        assert state_space.distance(a, b) == pytest.approx(state_space.distance(b, a), abs=1e-5)


def test_hc_pm_distance_is_symmetric():
    state_space = HCpmpmReedsSheppStateSpace(PARAMS)
    for a, b in _pairs(5, count=4):
        a = State(a.x, a.y, a.theta, 1.0)
        b = State(b.x, b.y, b.theta, -1.0)
        assert state_space.distance(a, b) == pytest.approx(state_space.distance(b, a), abs=1e-5)


def test_hc0pm_mirrors_hcpm0():
    zero_pm = HC0pmReedsSheppStateSpace(PARAMS)
    pm_zero = HCpm0ReedsSheppStateSpace(PARAMS)
    for a, b in _pairs(6, count=4):
        b = State(b.x, b.y, b.theta, 1.0)
        assert zero_pm.distance(a, b) == pytest.approx(pm_zero.distance(b, a), abs=1e-5)


@pytest.mark.parametrize("kind", list(StateSpaceKind))
def test_distance_invariant_under_rigid_motion(kind):
    state_space = make_state_space(kind, PARAMS)
    for a, b in _pairs(7, count=3):
        moved_a = _rigid(a, 0.8, 3.0, -2.0)
        moved_b = _rigid(b, 0.8, 3.0, -2.0)
        assert state_space.distance(moved_a, moved_b) == pytest.approx(state_space.distance(a, b), abs=1e-5)


@pytest.mark.parametrize("kind", [StateSpaceKind.DUBINS, StateSpaceKind.CC_REEDS_SHEPP])
def test_path_moves_with_rigid_motion(kind):
    state_space = make_state_space(kind, PARAMS)
    a, b = State(0.0, 0.0, 0.0), State(4.0, 3.0, 1.2)
    path = state_space.path(a, b)
    moved = state_space.path(_rigid(a, -1.1, 2.0, 5.0), _rigid(b, -1.1, 2.0, 5.0))
    assert len(moved) == len(path)
    for s, m in zip(path, moved):
        expected = _rigid(s, -1.1, 2.0, 5.0)
        assert (m.x, m.y) == pytest.approx((expected.x, expected.y), abs=1e-6)
        assert math.cos(m.theta - expected.theta) == pytest.approx(1.0, abs=1e-9)


@pytest.mark.parametrize("kind", list(StateSpaceKind))
def test_queries_are_idempotent(kind):
    state_space = make_state_space(kind, PARAMS)
    a, b = State(-1.0, 2.0, 0.5), State(3.0, -4.0, -2.0)
    assert state_space.distance(a, b) == state_space.distance(a, b)
    assert state_space.controls(a, b) == state_space.controls(a, b)
    assert state_space.path(a, b) == state_space.path(a, b)


@pytest.mark.parametrize("cls", [DubinsStateSpace, CCDubinsStateSpace])
def test_backward_only_variants(cls):
    forward = cls(PARAMS)
    backward = cls(SteeringParams(forwards=False))
    a, b = State(0.0, 0.0, 0.0), State(-4.0, 2.0, 1.0)
    controls = backward.controls(a, b)
    assert controls and all(c.delta_s < 0.0 for c in controls)
    last = backward.path(a, b)[-1]
    assert (last.x, last.y) == pytest.approx((b.x, b.y), abs=1e-5)
    # driving backward from a to b is driving forward from b to a
    assert backward.distance(a, b) == pytest.approx(forward.distance(b, a))


def test_reeds_shepp_can_reverse():
    controls = ReedsSheppStateSpace(PARAMS).controls(State(0.0, 0.0, 0.0), State(-3.0, 0.0, 0.0))
    assert len(controls) == 1
    assert controls[0].delta_s == pytest.approx(-3.0)


def test_interpolate_through_facade():
    state_space = CCReedsSheppStateSpace(PARAMS)
    a, b = State(0.0, 0.0, 0.0), State(3.0, 2.0, 1.0)
    controls = state_space.controls(a, b)
    end = state_space.interpolate(a, controls, 1.0)
    assert (end.x, end.y) == pytest.approx((b.x, b.y), abs=1e-5)
    middle = state_space.interpolate(a, controls, 0.5)
    assert 0.0 < math.hypot(middle.x, middle.y) < state_space.distance(a, b)


def test_default_params():
    state_space = HC00ReedsSheppStateSpace()
    assert state_space.params == SteeringParams()
    assert "HC00ReedsSheppStateSpace" in repr(state_space)


@pytest.mark.parametrize("name", ["kappa_max", "sigma_max", "discretization"])
def test_boolean_params_rejected(name):
    with pytest.raises(InvalidParameterError):
        SteeringParams(**{name: True})
