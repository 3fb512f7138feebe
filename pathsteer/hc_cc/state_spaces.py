"""
Curvature-continuous state spaces.

CC-Dubins and CC-Reeds-Shepp paths start and end with zero curvature and
never jump in curvature. The hybrid-curvature (HC) Reeds-Shepp variants
allow a jump at cusps, where the vehicle stands still, and differ in the
curvature required at the path endpoints: zero or +/- kappa_max. Their
cusps are tried both at maximum and at zero curvature.
"""

import logging
import math
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from ..common import EPSILON, heading_diff
from ..controls import straight_control
from ..errors import CurvatureContractError, NoAdmissiblePathError
from ..geometry import CanonicalFrame
from ..state import Candidate, State, SteeringParams
from ..state_space import StateSpace, StateSpaceKind
from .chain import GOAL_TOLERANCE, ChainEvaluator, Endpoint
from .circle import CircleParams, TurningCircle, circle_at
from .families import FAMILIES, FORWARD_FAMILIES, chains

logger = logging.getLogger(__name__)

_BOTH_SIGNS = (True, False)


class CurvatureContinuousStateSpace(StateSpace):
    families: Tuple[str, ...] = FAMILIES
    directions: Tuple[bool, ...] = (True, False)
    # curvature states tried at cusps, in order: maximum curvature, zero
    cusp_zero: Tuple[bool, ...] = (False, True)
    start_zero = True
    goal_zero = True

    def __init__(self, params: Optional[SteeringParams] = None):
        super().__init__(params)
        self.circle_params = CircleParams.from_limits(self.params.kappa_max, self.params.sigma_max)
        self.evaluators = tuple(ChainEvaluator(self.circle_params, zero) for zero in self.cusp_zero)

    def _lefts(self, which: str, kappa: float, zero: bool) -> Tuple[bool, ...]:
        """Turning senses allowed by the curvature supplied at one endpoint."""
        kappa_max = self.params.kappa_max
        if zero:
            if abs(kappa) > EPSILON:
                raise CurvatureContractError(self.kind.value, which, kappa, "0")
            return _BOTH_SIGNS
        if abs(kappa) <= EPSILON:
            return _BOTH_SIGNS
        if abs(kappa - kappa_max) <= EPSILON:
            return (True,)
        if abs(kappa + kappa_max) <= EPSILON:
            return (False,)
        raise CurvatureContractError(self.kind.value, which, kappa, f"0 or +/-{kappa_max}")

    def _endpoint_kappa(self, left: bool, zero: bool) -> float:
        if zero:
            return 0.0
        return self.params.kappa_max if left else -self.params.kappa_max

    def _same_state(
        self, qs: State, qg: State, start_lefts: Sequence[bool], goal_lefts: Sequence[bool]
    ) -> Optional[Candidate]:
        if math.hypot(qg.x, qg.y) >= GOAL_TOLERANCE or abs(qg.theta) >= GOAL_TOLERANCE:
            return None
        if self.start_zero != self.goal_zero:
            return None
        if not self.start_zero and not set(start_lefts) & set(goal_lefts):
            return None
        return Candidate("E", 0.0, ())

    def _straight(self, qg: State) -> Optional[Candidate]:
        if not (self.start_zero and self.goal_zero):
            return None
        if abs(qg.y) >= EPSILON or abs(heading_diff(qg.theta, 0.0)) >= EPSILON:
            return None
        direction = 1 if qg.x > 0.0 else -1
        if abs(qg.x) < EPSILON or (direction > 0) not in self.directions:
            return None
        return Candidate("S", abs(qg.x), (straight_control(abs(qg.x), direction),))

    def _circles(self, q: State, lefts: Sequence[bool], at_start: bool, zero: bool) -> List[TurningCircle]:
        return [
            circle_at(self.circle_params, q, left, forward, at_start, zero)
            for left in lefts
            for forward in self.directions
        ]

    def _chain_candidates(
        self,
        family: str,
        start_circles: Sequence[TurningCircle],
        goal_circles: Sequence[TurningCircle],
        start_end: Endpoint,
        goal_end: Endpoint,
        bound: Callable[[], float],
    ) -> Iterator[Optional[Candidate]]:
        # cusp curvature only matters to families with a cusp
        evaluators = self.evaluators if "c" in family else self.evaluators[:1]
        for c1 in start_circles:
            for c2 in goal_circles:
                goal_kappa = self._endpoint_kappa(c2.left, self.goal_zero)
                for evaluator in evaluators:
                    for chain in chains(family, evaluator, c1, c2):
                        yield evaluator.instantiate(chain, start_end, goal_end, goal_kappa, bound())

    def _solve(self, start: State, goal: State) -> Candidate:
        start_lefts = self._lefts("start", start.kappa, self.start_zero)
        goal_lefts = self._lefts("goal", goal.kappa, self.goal_zero)
        qs = State(0.0, 0.0, 0.0, start.kappa)
        qg = CanonicalFrame(start).to_local(goal)
        start_end = Endpoint(qs, self.start_zero)
        goal_end = Endpoint(qg, self.goal_zero)
        start_circles = self._circles(qs, start_lefts, True, self.start_zero)
        goal_circles = self._circles(qg, goal_lefts, False, self.goal_zero)

        best: Optional[Candidate] = None

        def bound() -> float:
            return best.length if best is not None else math.inf

        for family in self.families:
            if family == "E":
                found = iter([self._same_state(qs, qg, start_lefts, goal_lefts)])
            elif family == "S":
                found = iter([self._straight(qg)])
            else:
                found = self._chain_candidates(family, start_circles, goal_circles, start_end, goal_end, bound)
            for candidate in found:
                if candidate is not None and candidate.length < bound() - EPSILON:
                    best = candidate
        if best is None:
            raise NoAdmissiblePathError(f"{self.kind.value}: no admissible path from {start} to {goal}")
        logger.debug("%s word %s, length %.6f", self.kind.value, best.word, best.length)
        return best

    def solve(self, start: State, goal: State) -> Candidate:
        return self._solve(start, goal)


class CCDubinsStateSpace(CurvatureContinuousStateSpace):
    """Curvature-continuous Dubins paths, driven forward (or backward with `forwards=False`)."""

    kind = StateSpaceKind.CC_DUBINS
    families = FORWARD_FAMILIES
    directions = (True,)
    cusp_zero = (True,)

    def solve(self, start: State, goal: State) -> Candidate:
        if self.params.forwards:
            return self._solve(start, goal)
        return self._solve(goal, start).reversed()


class CCReedsSheppStateSpace(CurvatureContinuousStateSpace):
    kind = StateSpaceKind.CC_REEDS_SHEPP
    cusp_zero = (True,)


class HC00ReedsSheppStateSpace(CurvatureContinuousStateSpace):
    kind = StateSpaceKind.HC00_REEDS_SHEPP


class HC0pmReedsSheppStateSpace(CurvatureContinuousStateSpace):
    kind = StateSpaceKind.HC0PM_REEDS_SHEPP
    goal_zero = False


class HCpm0ReedsSheppStateSpace(CurvatureContinuousStateSpace):
    kind = StateSpaceKind.HCPM0_REEDS_SHEPP
    start_zero = False


class HCpmpmReedsSheppStateSpace(CurvatureContinuousStateSpace):
    kind = StateSpaceKind.HCPMPM_REEDS_SHEPP
    start_zero = False
    goal_zero = False
