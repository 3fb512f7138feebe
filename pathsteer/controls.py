from typing import Iterable, List, Sequence

from .errors import InvalidParameterError
from .state import Control

# Segments shorter than this carry no motion and are dropped.
ZERO_LENGTH = 1e-10

_SEGMENT_CURVATURE_SIGN = {"L": 1.0, "R": -1.0, "S": 0.0}


def straight_control(length: float, direction: int) -> Control:
    return Control(direction * length, 0.0, 0.0)


def arc_control(kappa: float, length: float, direction: int) -> Control:
    return Control(direction * length, kappa, 0.0)


def clothoid_control(kappa: float, sigma: float, length: float, direction: int) -> Control:
    return Control(direction * length, kappa, sigma)


def segment_controls(types: Sequence[str], lengths: Sequence[float], kappa_max: float) -> List[Control]:
    """Controls of a plain (arc/straight) word; `lengths` are signed metres."""
    if len(types) != len(lengths):
        raise InvalidParameterError("Segment types and lengths differ in size")
    controls = []
    for seg_type, length in zip(types, lengths):
        try:
            kappa = _SEGMENT_CURVATURE_SIGN[seg_type] * kappa_max
        except KeyError:
            raise InvalidParameterError(f"Unknown segment type: {seg_type!r}") from None
        controls.append(Control(float(length), kappa, 0.0))
    return simplify_controls(controls)


def reverse_controls(controls: Sequence[Control]) -> List[Control]:
    """Controls driving the same geometry from its end back to its start."""
    return [c.reversed() for c in reversed(controls)]


def simplify_controls(controls: Iterable[Control]) -> List[Control]:
    """Drop empty segments and fuse neighbours of identical constant curvature and direction."""
    out: List[Control] = []
    for control in controls:
        if control.length <= ZERO_LENGTH:
            continue
        if out:
            prev = out[-1]
            if (
                prev.sigma == 0.0
                and control.sigma == 0.0
                and prev.kappa == control.kappa
                and prev.direction == control.direction
            ):
                out[-1] = Control(prev.delta_s + control.delta_s, prev.kappa, 0.0)
                continue
        out.append(control)
    return out


def path_length(controls: Iterable[Control]) -> float:
    return sum(c.length for c in controls)
