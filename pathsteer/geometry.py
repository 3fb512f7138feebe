"""
Closed-form segment geometry shared by every solver.

Clothoids are evaluated with the Fresnel integrals
    S(z) = int_0^z sin(pi t^2 / 2) dt,  C(z) = int_0^z cos(pi t^2 / 2) dt
so a clothoid of any sharpness reduces to two Fresnel evaluations.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from scipy.optimize import newton
from scipy.special import fresnel as _scipy_fresnel

from .common import EPSILON, sign, wrap_angle
from .state import State

SQRT_PI = math.sqrt(math.pi)

# Beyond this total deflection a symmetric clothoid pair has no positive chord.
ELEMENTARY_DEFLECTION_LIMIT = 4.5948

CLOSURE_MAX_ITER = 20
CLOSURE_TOL = 1e-12


def fresnel(z: float) -> Tuple[float, float]:
    """Return (S(z), C(z))."""
    s, c = _scipy_fresnel(z)
    return float(s), float(c)


def end_of_straight_line(
    x: float, y: float, theta: float, direction: int, length: float
) -> Tuple[float, float]:
    return x + direction * length * math.cos(theta), y + direction * length * math.sin(theta)


def end_of_circular_arc(
    x: float, y: float, theta: float, kappa: float, direction: int, length: float
) -> Tuple[float, float, float]:
    theta_f = theta + direction * kappa * length
    x_f = x + (math.sin(theta_f) - math.sin(theta)) / kappa
    y_f = y + (math.cos(theta) - math.cos(theta_f)) / kappa
    return x_f, y_f, wrap_angle(theta_f)


def end_of_clothoid(
    x: float,
    y: float,
    theta: float,
    kappa: float,
    sigma: float,
    direction: int,
    length: float,
) -> Tuple[float, float, float, float]:
    """End configuration after driving `length` metres along a clothoid.

    Completing the square of the heading polynomial turns the position
    integrals into differences of Fresnel integrals.
    """
    abs_sigma = abs(sigma)
    sgn_sigma = sign(sigma)
    scale = 1.0 / math.sqrt(math.pi * abs_sigma)
    k1 = theta - 0.5 * direction * kappa * kappa / sigma
    k2 = scale * (abs_sigma * length + sgn_sigma * kappa)
    k3 = scale * sgn_sigma * kappa
    s2, c2 = fresnel(k2)
    s3, c3 = fresnel(k3)
    dc = c2 - c3
    ds = s2 - s3
    factor = SQRT_PI / math.sqrt(abs_sigma)
    cos_k1 = math.cos(k1)
    sin_k1 = math.sin(k1)
    x_f = x + factor * (direction * cos_k1 * dc - sgn_sigma * sin_k1 * ds)
    y_f = y + factor * (direction * sin_k1 * dc + sgn_sigma * cos_k1 * ds)
    theta_f = wrap_angle(theta + direction * (kappa * length + 0.5 * sigma * length * length))
    return x_f, y_f, theta_f, kappa + sigma * length


def global_frame_change(x: float, y: float, theta: float, local_x: float, local_y: float) -> Tuple[float, float]:
    """Express a point given in the frame (x, y, theta) in the world frame."""
    c = math.cos(theta)
    s = math.sin(theta)
    return x + c * local_x - s * local_y, y + s * local_x + c * local_y


def local_frame_change(x: float, y: float, theta: float, global_x: float, global_y: float) -> Tuple[float, float]:
    """Express a world point in the frame (x, y, theta)."""
    c = math.cos(theta)
    s = math.sin(theta)
    dx = global_x - x
    dy = global_y - y
    return c * dx + s * dy, -s * dx + c * dy


@dataclass(frozen=True)
class CanonicalFrame:
    """Rigid frame with `origin` at (0, 0) and heading zero.

    Path length and curvature are invariant under this isometry, which is what
    lets every word formula depend on the relative goal only.
    """

    origin: State

    def to_local(self, state: State) -> State:
        o = self.origin
        x, y = local_frame_change(o.x, o.y, o.theta, state.x, state.y)
        return State(x, y, wrap_angle(state.theta - o.theta), state.kappa, state.d)

    def to_world(self, state: State) -> State:
        o = self.origin
        x, y = global_frame_change(o.x, o.y, o.theta, state.x, state.y)
        return State(x, y, wrap_angle(state.theta + o.theta), state.kappa, state.d)


def d1(alpha: float) -> float:
    """Half-chord of a unit-sharpness clothoid of deflection `alpha`, projected on its bisector."""
    s, c = fresnel(math.sqrt(2.0 * alpha / math.pi))
    return math.cos(alpha) * c + math.sin(alpha) * s


def _clothoid_pair_chord(delta: float, length: float) -> float:
    sigma = delta / (length * length)
    x, y, theta, kappa = end_of_clothoid(0.0, 0.0, 0.0, 0.0, sigma, 1, length)
    x, y, _, _ = end_of_clothoid(x, y, theta, kappa, -sigma, 1, length)
    return math.hypot(x, y)


def elementary_sharpness(delta: float, chord: float) -> Optional[float]:
    """Curvature rate of the symmetric clothoid pair turning by `delta` over `chord`.

    Solves the closure equation for the clothoid length with a bounded Newton
    iteration seeded by the closed-form estimate. Returns None when no such
    pair exists or the iteration does not converge.
    """
    if not (EPSILON < delta < ELEMENTARY_DEFLECTION_LIMIT) or chord < EPSILON:
        return None
    half_chord = d1(0.5 * delta)
    if half_chord <= EPSILON:
        return None
    guess = chord / (2.0 * math.sqrt(math.pi / delta) * half_chord)

    def closure(length):
        return _clothoid_pair_chord(delta, length) - chord

    def closure_prime(length):
        # the chord scales linearly with the length at fixed deflection
        return _clothoid_pair_chord(delta, length) / length

    length, info = newton(
        closure,
        guess,
        fprime=closure_prime,
        tol=CLOSURE_TOL,
        maxiter=CLOSURE_MAX_ITER,
        full_output=True,
        disp=False,
    )
    length = float(length)
    if not info.converged or not math.isfinite(length) or length <= 0.0:
        return None
    return delta / (length * length)
