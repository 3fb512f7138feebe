"""
Turning circles of the curvature-continuous state spaces.

A turn that starts with zero curvature first follows a clothoid of maximum
sharpness until it reaches the maximum curvature, so the configurations it
can start from do not lie on the circle of radius 1/kappa but on an outer
circle of radius `radius`, with their heading tilted by `mu` away from the
tangent. Configurations with maximum curvature lie on the inner circle.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..common import EPSILON, TWO_PI, twopify
from ..controls import arc_control, clothoid_control, path_length, straight_control
from ..geometry import elementary_sharpness, end_of_clothoid, global_frame_change
from ..state import Control, State


@dataclass(frozen=True)
class CircleParams:
    kappa: float
    sigma: float
    radius: float
    mu: float
    sin_mu: float
    cos_mu: float
    delta_min: float  # deflection of one clothoid from zero to maximum curvature

    @classmethod
    def from_limits(cls, kappa: float, sigma: float) -> "CircleParams":
        length = kappa / sigma
        x_i, y_i, theta_i, _ = end_of_clothoid(0.0, 0.0, 0.0, 0.0, sigma, 1, length)
        xc = x_i - math.sin(theta_i) / kappa
        yc = y_i + math.cos(theta_i) / kappa
        radius = math.hypot(xc, yc)
        mu = math.atan(abs(xc / yc))
        return cls(kappa, sigma, radius, mu, math.sin(mu), math.cos(mu), 0.5 * kappa * kappa / sigma)

    @property
    def clothoid_length(self) -> float:
        return self.kappa / self.sigma

    @property
    def inner_radius(self) -> float:
        return 1.0 / self.kappa


@dataclass(frozen=True)
class TurningCircle:
    xc: float
    yc: float
    left: bool
    forward: bool

    def same_as(self, other: "TurningCircle") -> bool:
        return (
            self.left == other.left
            and self.forward == other.forward
            and math.hypot(self.xc - other.xc, self.yc - other.yc) < EPSILON
        )

    def deflection(self, theta_from: float, theta_to: float) -> float:
        """Heading change in the turning sense of the circle, in [0, 2*pi)."""
        if self.left == self.forward:
            delta = twopify(theta_to - theta_from)
        else:
            delta = twopify(theta_from - theta_to)
        if delta > TWO_PI - EPSILON:
            return 0.0
        return delta


def placement(params: CircleParams, left: bool, forward: bool, at_start: bool, zero: bool) -> Tuple[float, float]:
    """Centre of a turn expressed in the frame of one of its end configurations.

    `at_start` selects the configuration where the turn begins (otherwise where it
    ends) and `zero` whether that configuration has zero curvature (otherwise the
    maximum curvature of the turn).
    """
    l = 1.0 if left else -1.0
    if not zero:
        return 0.0, l / params.kappa
    f = 1.0 if forward == at_start else -1.0
    return f * params.radius * params.sin_mu, l * params.radius * params.cos_mu


def circle_at(
    params: CircleParams, q: State, left: bool, forward: bool, at_start: bool, zero: bool
) -> TurningCircle:
    ox, oy = placement(params, left, forward, at_start, zero)
    xc, yc = global_frame_change(q.x, q.y, q.theta, ox, oy)
    return TurningCircle(xc, yc, left, forward)


def _direction(circle: TurningCircle) -> int:
    return 1 if circle.forward else -1


def _elementary_controls(
    params: CircleParams, circle: TurningCircle, delta: float, chord: float
) -> Optional[List[Control]]:
    sigma0 = elementary_sharpness(delta, chord)
    if sigma0 is None:
        return None
    # the pair must respect both limits of the state space
    if sigma0 > params.sigma * (1.0 + 1e-9) or math.sqrt(delta * sigma0) > params.kappa * (1.0 + 1e-9):
        return None
    length = math.sqrt(delta / sigma0)
    sigma = sigma0 if circle.left else -sigma0
    d = _direction(circle)
    return [
        clothoid_control(0.0, sigma, length, d),
        clothoid_control(sigma * length, -sigma, length, d),
    ]


def turn_controls(
    params: CircleParams,
    circle: TurningCircle,
    q_from: State,
    q_to: State,
    zero_from: bool,
    zero_to: bool,
) -> List[Control]:
    """Controls of the turn on `circle` between two configurations placed on it.

    Zero-to-zero turns are CC-turns, zero-to-max and max-to-zero turns are
    HC-turns and max-to-max turns are plain arcs.
    """
    delta = circle.deflection(q_from.theta, q_to.theta)
    d = _direction(circle)
    kappa = params.kappa if circle.left else -params.kappa
    sigma = params.sigma if circle.left else -params.sigma
    length_min = params.clothoid_length

    if not zero_from and not zero_to:
        return [arc_control(kappa, delta / params.kappa, d)]

    if zero_from and zero_to:
        if delta < EPSILON:
            return [straight_control(2.0 * params.radius * params.sin_mu, d)]
        delta_arc = delta - 2.0 * params.delta_min
        if delta_arc < -EPSILON:
            delta_arc += TWO_PI
        delta_arc = max(delta_arc, 0.0)
        default = [
            clothoid_control(0.0, sigma, length_min, d),
            arc_control(kappa, delta_arc / params.kappa, d),
            clothoid_control(kappa, -sigma, length_min, d),
        ]
        if delta < 2.0 * params.delta_min:
            chord = math.hypot(q_to.x - q_from.x, q_to.y - q_from.y)
            elementary = _elementary_controls(params, circle, delta, chord)
            if elementary is not None and path_length(elementary) < path_length(default):
                return elementary
        return default

    delta_arc = delta - params.delta_min
    if delta_arc < -EPSILON:
        delta_arc += TWO_PI
    delta_arc = max(delta_arc, 0.0)
    if zero_from:
        return [clothoid_control(0.0, sigma, length_min, d), arc_control(kappa, delta_arc / params.kappa, d)]
    return [arc_control(kappa, delta_arc / params.kappa, d), clothoid_control(kappa, -sigma, length_min, d)]
