import math
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from ..common import EPSILON, heading_diff, polar
from ..geometry import end_of_circular_arc, end_of_straight_line


@dataclass(frozen=True)
class ReedsSheppPath:
    """
    Reeds–Shepp path consisting of L/R/S segments.

    `segment_lengths` are signed arc lengths (meters). A negative value means the
    segment is traversed in reverse.
    """

    segment_types: Tuple[str, ...]
    segment_lengths: Tuple[float, ...]
    total_length: float


def _mod2pi(angle: float) -> float:
    """
    Wrap to [-pi, pi] (matching the convention used by many RS implementations).

    Unlike `wrap_angle()` this keeps +pi as +pi (instead of mapping it to -pi),
    which matters for path family feasibility checks.
    """
    v = math.fmod(angle, 2.0 * math.pi)
    if v < -math.pi:
        v += 2.0 * math.pi
    elif v > math.pi:
        v -= 2.0 * math.pi
    return v


Word = Tuple[bool, List[float], List[str]]


def _lsl(x: float, y: float, phi: float) -> Word:
    u, t = polar(x - math.sin(phi), y - 1.0 + math.cos(phi))
    if 0.0 <= t <= math.pi:
        v = _mod2pi(phi - t)
        if 0.0 <= v <= math.pi:
            return True, [t, u, v], ["L", "S", "L"]
    return False, [], []


def _lsr(x: float, y: float, phi: float) -> Word:
    u1, t1 = polar(x + math.sin(phi), y - 1.0 - math.cos(phi))
    u1 = u1 * u1
    if u1 >= 4.0:
        u = math.sqrt(u1 - 4.0)
        theta = math.atan2(2.0, u)
        t = _mod2pi(t1 + theta)
        v = _mod2pi(t - phi)
        if t >= 0.0 and v >= 0.0:
            return True, [t, u, v], ["L", "S", "R"]
    return False, [], []


def _lrl(x: float, y: float, phi: float) -> Word:
    zeta = x - math.sin(phi)
    eta = y - 1.0 + math.cos(phi)
    u1, theta = polar(zeta, eta)
    if u1 <= 4.0:
        a = math.acos(0.25 * u1)
        t = _mod2pi(a + theta + math.pi / 2.0)
        u = _mod2pi(math.pi - 2.0 * a)
        v = _mod2pi(phi - t - u)
        return True, [t, -u, v], ["L", "R", "L"]
    return False, [], []


def _lrl2(x: float, y: float, phi: float) -> Word:
    zeta = x - math.sin(phi)
    eta = y - 1.0 + math.cos(phi)
    u1, theta = polar(zeta, eta)
    if u1 <= 4.0:
        a = math.acos(0.25 * u1)
        t = _mod2pi(a + theta + math.pi / 2.0)
        u = _mod2pi(math.pi - 2.0 * a)
        v = _mod2pi(-phi + t + u)
        return True, [t, -u, -v], ["L", "R", "L"]
    return False, [], []


def _lrl3(x: float, y: float, phi: float) -> Word:
    zeta = x - math.sin(phi)
    eta = y - 1.0 + math.cos(phi)
    u1, theta = polar(zeta, eta)
    if EPSILON < u1 <= 4.0:
        u = math.acos(1.0 - (u1 * u1) * 0.125)
        a = math.asin(max(-1.0, min(1.0, 2.0 * math.sin(u) / u1)))
        t = _mod2pi(-a + theta + math.pi / 2.0)
        v = _mod2pi(t - u - phi)
        return True, [t, u, -v], ["L", "R", "L"]
    return False, [], []


def _lrlr(x: float, y: float, phi: float) -> Word:
    zeta = x + math.sin(phi)
    eta = y - 1.0 - math.cos(phi)
    u1, theta = polar(zeta, eta)
    # Solutions for (2 < u1 <= 4) are considered sub-optimal in the source paper.
    if u1 <= 2.0:
        a = math.acos((u1 + 2.0) * 0.25)
        t = _mod2pi(theta + a + math.pi / 2.0)
        u = _mod2pi(a)
        v = _mod2pi(phi - t + 2.0 * u)
        if t >= 0.0 and u >= 0.0 and v >= 0.0:
            return True, [t, u, -u, -v], ["L", "R", "L", "R"]
    return False, [], []


def _lrlr2(x: float, y: float, phi: float) -> Word:
    zeta = x + math.sin(phi)
    eta = y - 1.0 - math.cos(phi)
    u1, theta = polar(zeta, eta)
    u2 = (20.0 - u1 * u1) / 16.0
    if EPSILON < u1 and 0.0 <= u2 <= 1.0:
        u = math.acos(u2)
        a = math.asin(max(-1.0, min(1.0, 2.0 * math.sin(u) / u1)))
        t = _mod2pi(theta + a + math.pi / 2.0)
        v = _mod2pi(t - phi)
        if t >= 0.0 and v >= 0.0:
            return True, [t, -u, -u, v], ["L", "R", "L", "R"]
    return False, [], []


def _lrs_l(x: float, y: float, phi: float) -> Word:
    zeta = x - math.sin(phi)
    eta = y - 1.0 + math.cos(phi)
    u1, theta = polar(zeta, eta)
    if u1 >= 2.0:
        u = math.sqrt(u1 * u1 - 4.0) - 2.0
        a = math.atan2(2.0, math.sqrt(u1 * u1 - 4.0))
        t = _mod2pi(theta + a + math.pi / 2.0)
        v = _mod2pi(t - phi + math.pi / 2.0)
        if t >= 0.0 and v >= 0.0:
            return True, [t, -math.pi / 2.0, -u, -v], ["L", "R", "S", "L"]
    return False, [], []


def _ls_r_l(x: float, y: float, phi: float) -> Word:
    zeta = x - math.sin(phi)
    eta = y - 1.0 + math.cos(phi)
    u1, theta = polar(zeta, eta)
    if u1 >= 2.0:
        u = math.sqrt(u1 * u1 - 4.0) - 2.0
        a = math.atan2(math.sqrt(u1 * u1 - 4.0), 2.0)
        t = _mod2pi(theta - a + math.pi / 2.0)
        v = _mod2pi(t - phi - math.pi / 2.0)
        if t >= 0.0 and v >= 0.0:
            return True, [t, u, math.pi / 2.0, -v], ["L", "S", "R", "L"]
    return False, [], []


def _lrs_r(x: float, y: float, phi: float) -> Word:
    zeta = x + math.sin(phi)
    eta = y - 1.0 - math.cos(phi)
    u1, theta = polar(zeta, eta)
    if u1 >= 2.0:
        t = _mod2pi(theta + math.pi / 2.0)
        u = u1 - 2.0
        v = _mod2pi(phi - t - math.pi / 2.0)
        if t >= 0.0 and v >= 0.0:
            return True, [t, -math.pi / 2.0, -u, -v], ["L", "R", "S", "R"]
    return False, [], []


def _lsl_r(x: float, y: float, phi: float) -> Word:
    zeta = x + math.sin(phi)
    eta = y - 1.0 - math.cos(phi)
    u1, theta = polar(zeta, eta)
    if u1 >= 2.0:
        t = _mod2pi(theta)
        u = u1 - 2.0
        v = _mod2pi(phi - t - math.pi / 2.0)
        if t >= 0.0 and v >= 0.0:
            return True, [t, u, math.pi / 2.0, -v], ["L", "S", "L", "R"]
    return False, [], []


def _lrs_lr(x: float, y: float, phi: float) -> Word:
    zeta = x + math.sin(phi)
    eta = y - 1.0 - math.cos(phi)
    u1, theta = polar(zeta, eta)
    if u1 >= 4.0:
        u = math.sqrt(u1 * u1 - 4.0) - 4.0
        a = math.atan2(2.0, math.sqrt(u1 * u1 - 4.0))
        t = _mod2pi(theta + a + math.pi / 2.0)
        v = _mod2pi(t - phi)
        if t >= 0.0 and v >= 0.0:
            return True, [t, -math.pi / 2.0, -u, -math.pi / 2.0, v], ["L", "R", "S", "L", "R"]
    return False, [], []


def _timeflip(lengths: Sequence[float]) -> List[float]:
    return [-float(v) for v in lengths]


def _reflect(types: Sequence[str]) -> List[str]:
    out: List[str] = []
    for t in types:
        if t == "L":
            out.append("R")
        elif t == "R":
            out.append("L")
        else:
            out.append("S")
    return out


_PATH_FNS: Tuple[Callable[[float, float, float], Word], ...] = (
    _lsl,
    _lsr,
    _lrl,
    _lrl2,
    _lrl3,
    _lrlr,
    _lrlr2,
    _lrs_l,
    _lrs_r,
    _ls_r_l,
    _lsl_r,
    _lrs_lr,
)


def reeds_shepp_words(x: float, y: float, phi: float) -> Iterator[Tuple[Tuple[str, ...], Tuple[float, ...]]]:
    """
    Yield every feasible word for the normalised goal (x, y, phi), start at the origin.

    Each base formula is tried as is, time-flipped, reflected and both, in that
    order, giving 48 families. Lengths are signed and normalised by the turning radius.
    """
    for fn in _PATH_FNS:
        # original
        ok, lengths, types = fn(x, y, phi)
        if ok:
            yield tuple(types), tuple(lengths)

        # timeflip
        ok, lengths, types = fn(-x, y, -phi)
        if ok:
            yield tuple(types), tuple(_timeflip(lengths))

        # reflect
        ok, lengths, types = fn(x, -y, -phi)
        if ok:
            yield tuple(_reflect(types)), tuple(lengths)

        # timeflip + reflect
        ok, lengths, types = fn(-x, -y, phi)
        if ok:
            yield tuple(_reflect(types)), tuple(_timeflip(lengths))


def word_end(types: Sequence[str], lengths: Sequence[float]) -> Tuple[float, float, float]:
    """Normalised end pose of a word driven from the origin."""
    x = y = theta = 0.0
    for seg_type, length in zip(types, lengths):
        direction = 1 if length >= 0.0 else -1
        if seg_type == "S":
            x, y = end_of_straight_line(x, y, theta, direction, abs(length))
        else:
            kappa = 1.0 if seg_type == "L" else -1.0
            x, y, theta = end_of_circular_arc(x, y, theta, kappa, direction, abs(length))
    return x, y, theta


def word_reaches(types: Sequence[str], lengths: Sequence[float], x: float, y: float, phi: float) -> bool:
    ex, ey, etheta = word_end(types, lengths)
    return math.hypot(ex - x, ey - y) < EPSILON and abs(heading_diff(etheta, phi)) < EPSILON


def shortest_word(x: float, y: float, phi: float) -> Optional[Tuple[Tuple[str, ...], Tuple[float, ...]]]:
    """Shortest word reaching the normalised goal; first family wins ties."""
    candidates = []
    for order, (types, lengths) in enumerate(reeds_shepp_words(x, y, phi)):
        if not all(math.isfinite(v) for v in lengths):
            continue
        candidates.append((sum(abs(v) for v in lengths), order, types, lengths))
    candidates.sort(key=lambda c: (c[0], c[1]))
    best = None
    for total, order, types, lengths in candidates:
        if best is not None and total > best[0] + EPSILON:
            break
        if not word_reaches(types, lengths, x, y, phi):
            continue
        # keep catalogue order among words of numerically equal length
        if best is None or order < best[1]:
            best = (total, order, types, lengths)
    if best is None:
        return None
    return best[2], best[3]


def reeds_shepp_shortest_path(
    start: Tuple[float, float, float],
    goal: Tuple[float, float, float],
    turning_radius: float,
) -> Optional[ReedsSheppPath]:
    """
    Compute the shortest Reeds–Shepp path between `start` and `goal`.

    Returns None when no candidate families apply (should be rare).
    """
    turning_radius = float(turning_radius)
    if not math.isfinite(turning_radius) or turning_radius <= 0.0:
        raise ValueError("turning_radius must be finite and > 0")

    max_curvature = 1.0 / turning_radius
    sx, sy, syaw = start
    gx, gy, gyaw = goal

    dx = gx - sx
    dy = gy - sy
    c = math.cos(syaw)
    s = math.sin(syaw)

    x = (c * dx + s * dy) * max_curvature
    y = (-s * dx + c * dy) * max_curvature
    phi = _mod2pi(gyaw - syaw)

    best = shortest_word(x, y, phi)
    if best is None:
        return None
    types, lengths = best
    return ReedsSheppPath(
        segment_types=types,
        segment_lengths=tuple(v / max_curvature for v in lengths),
        total_length=sum(abs(v) for v in lengths) / max_curvature,
    )
