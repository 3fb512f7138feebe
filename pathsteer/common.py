import math
from typing import Tuple

# Tolerance used for every geometric equality test in the package.
EPSILON = 1e-6

TWO_PI = 2.0 * math.pi
HALF_PI = 0.5 * math.pi


def wrap_angle(angle: float) -> float:
    """Wrap angle to (-pi, pi]."""
    a = math.fmod(angle, TWO_PI)
    if a <= -math.pi:
        a += TWO_PI
    elif a > math.pi:
        a -= TWO_PI
    return a


def twopify(angle: float) -> float:
    """Wrap angle to [0, 2*pi)."""
    a = math.fmod(angle, TWO_PI)
    if a < 0.0:
        a += TWO_PI
    if a >= TWO_PI:
        a = 0.0
    return a


def heading_diff(a: float, b: float) -> float:
    """Smallest signed difference a-b."""
    return wrap_angle(a - b)


def sign(v: float) -> int:
    if v > 0.0:
        return 1
    if v < 0.0:
        return -1
    return 0


def polar(x: float, y: float) -> Tuple[float, float]:
    return math.hypot(x, y), math.atan2(y, x)


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))
