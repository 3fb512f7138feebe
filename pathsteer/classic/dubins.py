import math
from typing import Callable, Iterator, List, Optional, Tuple

from ..common import EPSILON, TWO_PI, twopify
from .reeds_shepp import word_reaches

Word = Tuple[bool, List[float], List[str]]


def _lsl(d: float, alpha: float, beta: float) -> Word:
    sa, sb, ca, cb = math.sin(alpha), math.sin(beta), math.cos(alpha), math.cos(beta)
    p_sq = 2.0 + d * d - 2.0 * math.cos(alpha - beta) + 2.0 * d * (sa - sb)
    if p_sq < 0.0:
        return False, [], []
    tmp = math.atan2(cb - ca, d + sa - sb)
    return True, [twopify(tmp - alpha), math.sqrt(p_sq), twopify(beta - tmp)], ["L", "S", "L"]


def _rsr(d: float, alpha: float, beta: float) -> Word:
    sa, sb, ca, cb = math.sin(alpha), math.sin(beta), math.cos(alpha), math.cos(beta)
    p_sq = 2.0 + d * d - 2.0 * math.cos(alpha - beta) + 2.0 * d * (sb - sa)
    if p_sq < 0.0:
        return False, [], []
    tmp = math.atan2(ca - cb, d - sa + sb)
    return True, [twopify(alpha - tmp), math.sqrt(p_sq), twopify(tmp - beta)], ["R", "S", "R"]


def _lsr(d: float, alpha: float, beta: float) -> Word:
    sa, sb, ca, cb = math.sin(alpha), math.sin(beta), math.cos(alpha), math.cos(beta)
    p_sq = -2.0 + d * d + 2.0 * math.cos(alpha - beta) + 2.0 * d * (sa + sb)
    if p_sq < 0.0:
        return False, [], []
    p = math.sqrt(p_sq)
    tmp = math.atan2(-ca - cb, d + sa + sb) - math.atan2(-2.0, p)
    return True, [twopify(tmp - alpha), p, twopify(tmp - beta)], ["L", "S", "R"]


def _rsl(d: float, alpha: float, beta: float) -> Word:
    sa, sb, ca, cb = math.sin(alpha), math.sin(beta), math.cos(alpha), math.cos(beta)
    p_sq = -2.0 + d * d + 2.0 * math.cos(alpha - beta) - 2.0 * d * (sa + sb)
    if p_sq < 0.0:
        return False, [], []
    p = math.sqrt(p_sq)
    tmp = math.atan2(ca + cb, d - sa - sb) - math.atan2(2.0, p)
    return True, [twopify(alpha - tmp), p, twopify(beta - tmp)], ["R", "S", "L"]


def _rlr(d: float, alpha: float, beta: float) -> Word:
    sa, sb, ca, cb = math.sin(alpha), math.sin(beta), math.cos(alpha), math.cos(beta)
    tmp = (6.0 - d * d + 2.0 * math.cos(alpha - beta) + 2.0 * d * (sa - sb)) / 8.0
    if abs(tmp) > 1.0:
        return False, [], []
    phi = math.atan2(ca - cb, d - sa + sb)
    p = twopify(TWO_PI - math.acos(tmp))
    t = twopify(alpha - phi + 0.5 * p)
    return True, [t, p, twopify(alpha - beta - t + p)], ["R", "L", "R"]


def _lrl(d: float, alpha: float, beta: float) -> Word:
    sa, sb, ca, cb = math.sin(alpha), math.sin(beta), math.cos(alpha), math.cos(beta)
    tmp = (6.0 - d * d + 2.0 * math.cos(alpha - beta) + 2.0 * d * (sb - sa)) / 8.0
    if abs(tmp) > 1.0:
        return False, [], []
    phi = math.atan2(ca - cb, d + sa - sb)
    p = twopify(TWO_PI - math.acos(tmp))
    t = twopify(-alpha - phi + 0.5 * p)
    return True, [t, p, twopify(beta - alpha - t + p)], ["L", "R", "L"]


_PATH_FNS: Tuple[Callable[[float, float, float], Word], ...] = (_lsl, _lsr, _rsl, _rsr, _rlr, _lrl)


def dubins_words(x: float, y: float, phi: float) -> Iterator[Tuple[Tuple[str, ...], Tuple[float, ...]]]:
    """
    Yield the feasible forward words for the normalised goal (x, y, phi), start at the origin.

    The formulas are written in the frame aligned with the start-goal chord, where the
    start heading is `alpha` and the goal heading `beta`.
    """
    d = math.hypot(x, y)
    chord = math.atan2(y, x) if d > EPSILON else 0.0
    alpha = twopify(-chord)
    beta = twopify(phi - chord)
    for fn in _PATH_FNS:
        ok, lengths, types = fn(d, alpha, beta)
        if ok:
            yield tuple(types), tuple(lengths)


def shortest_word(x: float, y: float, phi: float) -> Optional[Tuple[Tuple[str, ...], Tuple[float, ...]]]:
    """Shortest forward word reaching the normalised goal; first word wins ties."""
    best = None
    best_total = math.inf
    for types, lengths in dubins_words(x, y, phi):
        total = sum(lengths)
        if total < best_total - EPSILON and word_reaches(types, lengths, x, y, phi):
            best = (types, lengths)
            best_total = total
    return best
