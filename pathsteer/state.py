import math
from dataclasses import dataclass
from typing import Tuple

from .common import sign
from .errors import InvalidParameterError


@dataclass(frozen=True)
class SteeringParams:
    """Immutable configuration shared by every query of a state space.

    `sigma_max` is ignored by the plain Dubins and Reeds-Shepp variants.
    `forwards` only matters for the single-direction variants (Dubins, CC-Dubins).
    """

    kappa_max: float = 1.0
    sigma_max: float = 1.0
    discretization: float = 0.1
    forwards: bool = True

    def __post_init__(self):
        for name in ("kappa_max", "sigma_max", "discretization"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidParameterError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0.0:
                raise InvalidParameterError(f"{name} must be finite and > 0, got {value!r}")

    @property
    def turning_radius(self) -> float:
        return 1.0 / self.kappa_max


@dataclass(frozen=True)
class State:
    x: float
    y: float
    theta: float
    kappa: float = 0.0
    d: int = 0  # +1 forward, -1 backward, 0 stationary

    def as_tuple(self) -> Tuple[float, float, float]:
        return self.x, self.y, self.theta


@dataclass(frozen=True)
class Control:
    """One drivable segment: constant curvature rate over a signed arc length.

    `kappa` is the curvature at the beginning of the segment and `sigma` the
    curvature rate per travelled metre, so a clothoid ends at
    `kappa + sigma * |delta_s|` whichever way it is driven.
    """

    delta_s: float
    kappa: float
    sigma: float = 0.0

    @property
    def direction(self) -> int:
        return sign(self.delta_s)

    @property
    def length(self) -> float:
        return abs(self.delta_s)

    @property
    def final_kappa(self) -> float:
        return self.kappa + self.sigma * abs(self.delta_s)

    def reversed(self) -> "Control":
        """Same geometry driven in the opposite sense."""
        return Control(-self.delta_s, self.final_kappa, -self.sigma)


@dataclass(frozen=True)
class Candidate:
    """An instantiated word: its name, total length and drivable controls."""

    word: str
    length: float
    controls: Tuple[Control, ...]

    def reversed(self) -> "Candidate":
        return Candidate(self.word, self.length, tuple(c.reversed() for c in reversed(self.controls)))
