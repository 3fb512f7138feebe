"""
Word families of the curvature-continuous state spaces.

`T` is a turn, `S` a straight segment and `c` a cusp. For a start circle and a
goal circle each family yields the chains of circles that may connect them;
the intermediate circles are placed geometrically and every chain is checked
by the evaluator.
"""

import math
from typing import Callable, Dict, Iterator, List, Tuple

from ..common import EPSILON, HALF_PI
from .chain import TANGENT, Chain, ChainEvaluator, straight_link
from .circle import TurningCircle

FAMILIES = (
    "E",
    "S",
    "T",
    "TT",
    "TcT",
    "TcTcT",
    "TcTT",
    "TTcT",
    "TST",
    "TSTcT",
    "TcTST",
    "TcTSTcT",
    "TTcTT",
    "TcTTcT",
    "TTT",
    "TcST",
    "TScT",
    "TcScT",
)

# Cusp-free subset driven in a single direction.
FORWARD_FAMILIES = ("E", "S", "T", "TT", "TST", "TTT")

_ROOTS = (1, -1)

Point = Tuple[float, float]
ChainGenerator = Callable[[ChainEvaluator, TurningCircle, TurningCircle], Iterator[Chain]]


def _prototype(left: bool, forward: bool) -> TurningCircle:
    return TurningCircle(0.0, 0.0, left, forward)


def _moved(circle: TurningCircle, point: Point) -> TurningCircle:
    return TurningCircle(point[0], point[1], circle.left, circle.forward)


def circle_intersections(c1: TurningCircle, c2: TurningCircle, r1: float, r2: float) -> List[Point]:
    """Points at distance `r1` from the centre of `c1` and `r2` from the centre of `c2`."""
    dx = c2.xc - c1.xc
    dy = c2.yc - c1.yc
    d = math.hypot(dx, dy)
    if d < EPSILON or d > r1 + r2 + EPSILON or d < abs(r1 - r2) - EPSILON:
        return []
    a = (r1 * r1 - r2 * r2 + d * d) / (2.0 * d)
    h = math.sqrt(max(r1 * r1 - a * a, 0.0))
    ex, ey = dx / d, dy / d
    bx, by = c1.xc + a * ex, c1.yc + a * ey
    return [(bx - h * ey, by + h * ex), (bx + h * ey, by - h * ex)]


def symmetric_pair(c1: TurningCircle, c2: TurningCircle, r: float, middle: float) -> List[Tuple[Point, Point]]:
    """Two points `middle` apart, each at distance `r` from one end, placed symmetrically."""
    dx = c2.xc - c1.xc
    dy = c2.yc - c1.yc
    d = math.hypot(dx, dy)
    if d < EPSILON:
        return []
    h_sq = r * r - 0.25 * (d - middle) ** 2
    if h_sq < 0.0:
        return []
    ex, ey = dx / d, dy / d
    mx, my = 0.5 * (c1.xc + c2.xc), 0.5 * (c1.yc + c2.yc)
    pairs = []
    for h in (math.sqrt(h_sq), -math.sqrt(h_sq)):
        ox, oy = -h * ey, h * ex
        pairs.append(
            (
                (mx - 0.5 * middle * ex + ox, my - 0.5 * middle * ey + oy),
                (mx + 0.5 * middle * ex + ox, my + 0.5 * middle * ey + oy),
            )
        )
    return pairs


def _around(center: TurningCircle, radius: float, phi: float) -> List[Point]:
    # perpendicular placements first, then along the line of centres
    angles = (phi + HALF_PI, phi - HALF_PI, phi, phi + math.pi)
    return [(center.xc + radius * math.cos(a), center.yc + radius * math.sin(a)) for a in angles]


def _t(ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle) -> Iterator[Chain]:
    if c1.same_as(c2):
        yield Chain("T", (c1,), ())


def _tt(ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle) -> Iterator[Chain]:
    if c1.forward == c2.forward and c1.left != c2.left:
        yield Chain("TT", (c1, c2), (TANGENT,))


def _tct(ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle) -> Iterator[Chain]:
    if c1.forward != c2.forward and c1.left != c2.left:
        yield Chain("TcT", (c1, c2), (TANGENT,))


def _three_circles(
    family: str, ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle, left: bool, forward: bool
) -> Iterator[Chain]:
    proto = _prototype(left, forward)
    r1 = ev.tangent_distance(c1, proto)
    r2 = ev.tangent_distance(proto, c2)
    for point in circle_intersections(c1, c2, r1, r2):
        yield Chain(family, (c1, _moved(proto, point), c2), (TANGENT, TANGENT))


def _tctct(ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle) -> Iterator[Chain]:
    if c1.forward == c2.forward and c1.left == c2.left:
        yield from _three_circles("TcTcT", ev, c1, c2, not c1.left, not c1.forward)


def _tctt(ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle) -> Iterator[Chain]:
    if c1.left == c2.left and c1.forward != c2.forward:
        yield from _three_circles("TcTT", ev, c1, c2, not c1.left, c2.forward)


def _ttct(ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle) -> Iterator[Chain]:
    if c1.left == c2.left and c1.forward != c2.forward:
        yield from _three_circles("TTcT", ev, c1, c2, not c1.left, c1.forward)


def _ttt(ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle) -> Iterator[Chain]:
    if c1.forward == c2.forward and c1.left == c2.left:
        yield from _three_circles("TTT", ev, c1, c2, not c1.left, c1.forward)


def _four_circles(
    family: str, ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle, first: TurningCircle, second: TurningCircle
) -> Iterator[Chain]:
    r = ev.tangent_distance(c1, first)
    if abs(r - ev.tangent_distance(second, c2)) > EPSILON:
        return
    middle = ev.tangent_distance(first, second)
    for pa, pb in symmetric_pair(c1, c2, r, middle):
        yield Chain(family, (c1, _moved(first, pa), _moved(second, pb), c2), (TANGENT, TANGENT, TANGENT))


def _ttctt(ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle) -> Iterator[Chain]:
    if c1.forward != c2.forward and c1.left != c2.left:
        first = _prototype(not c1.left, c1.forward)
        second = _prototype(c1.left, not c1.forward)
        yield from _four_circles("TTcTT", ev, c1, c2, first, second)


def _tcttct(ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle) -> Iterator[Chain]:
    if c1.forward == c2.forward and c1.left != c2.left:
        first = _prototype(not c1.left, not c1.forward)
        second = _prototype(c1.left, not c1.forward)
        yield from _four_circles("TcTTcT", ev, c1, c2, first, second)


def _straight(family: str, c1: TurningCircle, c2: TurningCircle, forward: bool) -> Iterator[Chain]:
    for root in _ROOTS:
        yield Chain(family, (c1, c2), (straight_link(forward, root),))


def _tst(ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle) -> Iterator[Chain]:
    if c1.forward == c2.forward:
        yield from _straight("TST", c1, c2, c1.forward)


def _tcst(ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle) -> Iterator[Chain]:
    if c1.forward != c2.forward:
        yield from _straight("TcST", c1, c2, c2.forward)


def _tsct(ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle) -> Iterator[Chain]:
    if c1.forward != c2.forward:
        yield from _straight("TScT", c1, c2, c1.forward)


def _tcsct(ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle) -> Iterator[Chain]:
    if c1.forward == c2.forward:
        yield from _straight("TcScT", c1, c2, not c1.forward)


def _line_angle(c1: TurningCircle, c2: TurningCircle) -> float:
    return math.atan2(c2.yc - c1.yc, c2.xc - c1.xc)


def _tstct(ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle) -> Iterator[Chain]:
    if c1.forward == c2.forward:
        return
    proto = _prototype(not c2.left, c1.forward)
    radius = ev.tangent_distance(proto, c2)
    for point in _around(c2, radius, _line_angle(c1, c2)):
        middle = _moved(proto, point)
        for root in _ROOTS:
            yield Chain("TSTcT", (c1, middle, c2), (straight_link(c1.forward, root), TANGENT))


def _tctst(ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle) -> Iterator[Chain]:
    if c1.forward == c2.forward:
        return
    proto = _prototype(not c1.left, c2.forward)
    radius = ev.tangent_distance(c1, proto)
    for point in _around(c1, radius, _line_angle(c1, c2)):
        middle = _moved(proto, point)
        for root in _ROOTS:
            yield Chain("TcTST", (c1, middle, c2), (TANGENT, straight_link(c2.forward, root)))


def _tctstct(ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle) -> Iterator[Chain]:
    if c1.forward != c2.forward:
        return
    first = _prototype(not c1.left, not c1.forward)
    second = _prototype(not c2.left, not c2.forward)
    r1 = ev.tangent_distance(c1, first)
    r2 = ev.tangent_distance(second, c2)
    phi = _line_angle(c1, c2)
    for a in (phi + HALF_PI, phi - HALF_PI):
        for b in (phi + HALF_PI, phi - HALF_PI):
            ma = _moved(first, (c1.xc + r1 * math.cos(a), c1.yc + r1 * math.sin(a)))
            mb = _moved(second, (c2.xc + r2 * math.cos(b), c2.yc + r2 * math.sin(b)))
            for root in _ROOTS:
                yield Chain(
                    "TcTSTcT",
                    (c1, ma, mb, c2),
                    (TANGENT, straight_link(not c1.forward, root), TANGENT),
                )


CHAIN_GENERATORS: Dict[str, ChainGenerator] = {
    "T": _t,
    "TT": _tt,
    "TcT": _tct,
    "TcTcT": _tctct,
    "TcTT": _tctt,
    "TTcT": _ttct,
    "TST": _tst,
    "TSTcT": _tstct,
    "TcTST": _tctst,
    "TcTSTcT": _tctstct,
    "TTcTT": _ttctt,
    "TcTTcT": _tcttct,
    "TTT": _ttt,
    "TcST": _tcst,
    "TScT": _tsct,
    "TcScT": _tcsct,
}


def chains(family: str, ev: ChainEvaluator, c1: TurningCircle, c2: TurningCircle) -> Iterator[Chain]:
    """Chains of `family` from start circle `c1` to goal circle `c2`."""
    generator = CHAIN_GENERATORS.get(family)
    if generator is None:
        raise ValueError(f"Family {family!r} has no circle chains")
    return generator(ev, c1, c2)
