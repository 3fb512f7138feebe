import math

import pytest

from pathsteer.geometry import (
    CanonicalFrame,
    _clothoid_pair_chord,
    elementary_sharpness,
    end_of_circular_arc,
    end_of_clothoid,
    fresnel,
)
from pathsteer.state import State


def _integrate_clothoid(x, y, theta, kappa, sigma, direction, length, steps=4000):
    h = length / steps
    for i in range(steps):
        s = (i + 0.5) * h
        heading = theta + direction * (kappa * s + 0.5 * sigma * s * s)
        x += direction * h * math.cos(heading)
        y += direction * h * math.sin(heading)
    return x, y


def test_fresnel_limits():
    s, c = fresnel(0.0)
    assert (s, c) == (0.0, 0.0)
    s, c = fresnel(1e6)
    assert s == pytest.approx(0.5, abs=1e-5)
    assert c == pytest.approx(0.5, abs=1e-5)


@pytest.mark.parametrize(
    "kappa,sigma,direction",
    [(0.0, 1.0, 1), (0.3, -0.7, 1), (0.2, -0.7, -1), (-0.5, 0.4, -1), (1.0, -2.0, 1)],
)
def test_end_of_clothoid_matches_numerical_integration(kappa, sigma, direction):
    x, y, theta, kappa_f = end_of_clothoid(1.0, 2.0, 0.3, kappa, sigma, direction, 1.5)
    ex, ey = _integrate_clothoid(1.0, 2.0, 0.3, kappa, sigma, direction, 1.5)
    assert x == pytest.approx(ex, abs=1e-6)
    assert y == pytest.approx(ey, abs=1e-6)
    expected_theta = 0.3 + direction * (kappa * 1.5 + 0.5 * sigma * 1.5 * 1.5)
    assert math.cos(theta - expected_theta) == pytest.approx(1.0)
    assert kappa_f == pytest.approx(kappa + sigma * 1.5)


def test_half_circle_arc():
    x, y, theta = end_of_circular_arc(0.0, 0.0, 0.0, 1.0, 1, math.pi)
    assert x == pytest.approx(0.0, abs=1e-12)
    assert y == pytest.approx(2.0)
    assert abs(theta) == pytest.approx(math.pi)


def test_canonical_frame_round_trip():
    frame = CanonicalFrame(State(3.0, -1.0, 2.0))
    goal = State(-4.0, 5.0, -2.5, 0.3, 1)
    local = frame.to_local(goal)
    back = frame.to_world(local)
    assert (back.x, back.y) == pytest.approx((goal.x, goal.y))
    assert math.cos(back.theta - goal.theta) == pytest.approx(1.0)
    assert (back.kappa, back.d) == (goal.kappa, goal.d)
    assert math.hypot(local.x, local.y) == pytest.approx(math.hypot(7.0, 6.0))


def test_canonical_frame_puts_origin_at_zero():
    start = State(1.0, 2.0, 0.7)
    local = CanonicalFrame(start).to_local(start)
    assert (local.x, local.y, local.theta) == pytest.approx((0.0, 0.0, 0.0), abs=1e-12)


def test_elementary_sharpness_recovers_pair():
    delta, sigma = 0.5, 0.8
    length = math.sqrt(delta / sigma)
    chord = _clothoid_pair_chord(delta, length)
    assert elementary_sharpness(delta, chord) == pytest.approx(sigma, rel=1e-8)


@pytest.mark.parametrize("delta,chord", [(0.0, 1.0), (4.6, 1.0), (1.0, 0.0), (-0.2, 1.0)])
def test_elementary_sharpness_rejects_degenerate_input(delta, chord):
    assert elementary_sharpness(delta, chord) is None
