"""
Evaluation of circle chains.

A chain is an ordered list of turning circles joined either by a tangent
(the vehicle leaves one circle exactly where it enters the next) or by a
straight segment. Once the circles are fixed every junction configuration
follows from closed-form geometry, and so do the turns on each circle.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..common import EPSILON, heading_diff
from ..controls import path_length, simplify_controls, straight_control
from ..geometry import global_frame_change
from ..sampling import end_state
from ..state import Candidate, Control, State
from .circle import CircleParams, TurningCircle, placement, turn_controls

logger = logging.getLogger(__name__)

# Re-integrated candidates must land this close to the goal.
GOAL_TOLERANCE = 1e-5


@dataclass(frozen=True)
class Link:
    """Connection between two consecutive circles of a chain.

    A straight link is driven forward or backward; `root` picks one of the two
    straight lines compatible with the pair of circles.
    """

    straight: bool = False
    forward: bool = True
    root: int = 1


TANGENT = Link()


def straight_link(forward: bool, root: int) -> Link:
    return Link(True, forward, root)


@dataclass(frozen=True)
class Chain:
    family: str
    circles: Tuple[TurningCircle, ...]
    links: Tuple[Link, ...]


@dataclass(frozen=True)
class Endpoint:
    """Start or goal of a query together with its curvature state."""

    state: State
    zero: bool


class ChainEvaluator:
    def __init__(self, params: CircleParams, cusp_zero: bool):
        self.params = params
        self.cusp_zero = cusp_zero

    def junction_zero(self, cusp: bool) -> bool:
        return not cusp or self.cusp_zero

    def tangent_distance(self, first: TurningCircle, second: TurningCircle) -> float:
        """Centre distance at which `second` can be entered where `first` is left."""
        zero = self.junction_zero(first.forward != second.forward)
        o1 = placement(self.params, first.left, first.forward, False, zero)
        o2 = placement(self.params, second.left, second.forward, True, zero)
        return math.hypot(o2[0] - o1[0], o2[1] - o1[1])

    def tangent_junction(self, first: TurningCircle, second: TurningCircle) -> Optional[Tuple[State, bool]]:
        zero = self.junction_zero(first.forward != second.forward)
        o1 = placement(self.params, first.left, first.forward, False, zero)
        o2 = placement(self.params, second.left, second.forward, True, zero)
        dx = second.xc - first.xc
        dy = second.yc - first.yc
        distance = math.hypot(dx, dy)
        if abs(distance - math.hypot(o2[0] - o1[0], o2[1] - o1[1])) > EPSILON:
            return None
        theta = math.atan2(dy, dx) - math.atan2(o2[1] - o1[1], o2[0] - o1[0])
        x, y = global_frame_change(first.xc, first.yc, theta, -o1[0], -o1[1])
        return State(x, y, theta), zero

    def straight_junctions(
        self, first: TurningCircle, second: TurningCircle, link: Link
    ) -> Optional[Tuple[State, bool, State, bool, float]]:
        zero1 = self.junction_zero(first.forward != link.forward)
        zero2 = self.junction_zero(second.forward != link.forward)
        o1 = placement(self.params, first.left, first.forward, False, zero1)
        o2 = placement(self.params, second.left, second.forward, True, zero2)
        off_x = o2[0] - o1[0]
        off_y = o2[1] - o1[1]
        dx = second.xc - first.xc
        dy = second.yc - first.yc
        distance = math.hypot(dx, dy)
        if distance < EPSILON:
            return None
        disc = distance * distance - off_y * off_y
        if disc < 0.0:
            return None
        along = link.root * math.sqrt(disc)
        fs = 1 if link.forward else -1
        length = fs * (along - off_x)
        if length < -EPSILON:
            return None
        length = max(length, 0.0)
        theta = math.atan2(dy, dx) - math.atan2(off_y, along)
        x1, y1 = global_frame_change(first.xc, first.yc, theta, -o1[0], -o1[1])
        x2 = x1 + fs * length * math.cos(theta)
        y2 = y1 + fs * length * math.sin(theta)
        return State(x1, y1, theta), zero1, State(x2, y2, theta), zero2, length

    def controls(self, chain: Chain, start: Endpoint, goal: Endpoint) -> Optional[List[Control]]:
        """Controls driving along `chain` from `start` to `goal`, None if the geometry does not close."""
        # configurations where each circle is entered and left, with their curvature state
        entries: List[Tuple[State, bool]] = [(start.state, start.zero)]
        exits: List[Tuple[State, bool]] = []
        straights: List[Optional[Control]] = []
        for first, second, link in zip(chain.circles, chain.circles[1:], chain.links):
            if link.straight:
                junctions = self.straight_junctions(first, second, link)
                if junctions is None:
                    return None
                q1, zero1, q2, zero2, length = junctions
                exits.append((q1, zero1))
                entries.append((q2, zero2))
                straights.append(straight_control(length, 1 if link.forward else -1))
            else:
                junction = self.tangent_junction(first, second)
                if junction is None:
                    return None
                exits.append(junction)
                entries.append(junction)
                straights.append(None)
        exits.append((goal.state, goal.zero))

        controls: List[Control] = []
        for i, circle in enumerate(chain.circles):
            (q_from, zero_from), (q_to, zero_to) = entries[i], exits[i]
            controls.extend(turn_controls(self.params, circle, q_from, q_to, zero_from, zero_to))
            if i < len(straights) and straights[i] is not None:
                controls.append(straights[i])
        return simplify_controls(controls)

    def instantiate(
        self, chain: Chain, start: Endpoint, goal: Endpoint, goal_kappa: float, bound: float = math.inf
    ) -> Optional[Candidate]:
        """Candidate of `chain` if it closes on the goal and is shorter than `bound`."""
        controls = self.controls(chain, start, goal)
        if controls is None:
            logger.debug("%s: circles are not tangent", chain.family)
            return None
        length = path_length(controls)
        if length >= bound - EPSILON:
            return None
        if not reaches(start.state, controls, goal.state, goal_kappa):
            logger.debug("%s: chain does not close on the goal", chain.family)
            return None
        return Candidate(chain.family, length, tuple(controls))


def reaches(start: State, controls: Sequence[Control], goal: State, goal_kappa: float) -> bool:
    """True when driving `controls` from `start` ends on `goal` with curvature `goal_kappa`."""
    if not controls:
        return (
            math.hypot(goal.x - start.x, goal.y - start.y) < GOAL_TOLERANCE
            and abs(heading_diff(goal.theta, start.theta)) < GOAL_TOLERANCE
        )
    end = end_state(start, controls)
    return (
        math.hypot(goal.x - end.x, goal.y - end.y) < GOAL_TOLERANCE
        and abs(heading_diff(goal.theta, end.theta)) < GOAL_TOLERANCE
        and abs(controls[-1].final_kappa - goal_kappa) < GOAL_TOLERANCE
    )
