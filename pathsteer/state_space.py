"""
State spaces: the query interface shared by every steering variant.

A state space owns an immutable `SteeringParams` and answers three queries
between two configurations: the length of the shortest admissible path, the
controls that drive it and the path sampled every `discretization` metres.
Nothing is cached between calls.
"""

import enum
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .classic import dubins
from .classic.reeds_shepp import reeds_shepp_shortest_path
from .controls import path_length, segment_controls
from .errors import InvalidParameterError, NoAdmissiblePathError
from .geometry import CanonicalFrame
from .sampling import integrate, interpolate
from .state import Candidate, Control, State, SteeringParams

logger = logging.getLogger(__name__)


class StateSpaceKind(enum.Enum):
    DUBINS = "dubins"
    REEDS_SHEPP = "reeds_shepp"
    CC_DUBINS = "cc_dubins"
    CC_REEDS_SHEPP = "cc_reeds_shepp"
    HC00_REEDS_SHEPP = "hc00_reeds_shepp"
    HC0PM_REEDS_SHEPP = "hc0pm_reeds_shepp"
    HCPM0_REEDS_SHEPP = "hcpm0_reeds_shepp"
    HCPMPM_REEDS_SHEPP = "hcpmpm_reeds_shepp"


class StateSpace(ABC):
    kind: StateSpaceKind

    def __init__(self, params: Optional[SteeringParams] = None):
        self.params = params if params is not None else SteeringParams()

    @abstractmethod
    def solve(self, start: State, goal: State) -> Candidate:
        """Shortest admissible candidate from `start` to `goal`."""

    def distance(self, start: State, goal: State) -> float:
        return self.solve(start, goal).length

    def controls(self, start: State, goal: State) -> List[Control]:
        return list(self.solve(start, goal).controls)

    def path(self, start: State, goal: State) -> List[State]:
        return self.integrate(start, self.controls(start, goal))

    def integrate(self, start: State, controls: Sequence[Control]) -> List[State]:
        return integrate(start, controls, self.params.discretization)

    def interpolate(self, start: State, controls: Sequence[Control], t: float) -> State:
        return interpolate(start, controls, t)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.params!r})"


class DubinsStateSpace(StateSpace):
    """Forward-only (or, with `forwards=False`, backward-only) arcs and straights."""

    kind = StateSpaceKind.DUBINS

    def _solve_forward(self, start: State, goal: State) -> Candidate:
        kappa = self.params.kappa_max
        local = CanonicalFrame(start).to_local(goal)
        best = dubins.shortest_word(local.x * kappa, local.y * kappa, local.theta)
        if best is None:
            raise NoAdmissiblePathError(f"no Dubins word reaches {goal}")
        types, lengths = best
        controls = segment_controls(types, [v / kappa for v in lengths], kappa)
        word = "".join(types)
        logger.debug("Dubins word %s, length %.6f", word, path_length(controls))
        return Candidate(word, path_length(controls), tuple(controls))

    def solve(self, start: State, goal: State) -> Candidate:
        if self.params.forwards:
            return self._solve_forward(start, goal)
        return self._solve_forward(goal, start).reversed()


class ReedsSheppStateSpace(StateSpace):
    kind = StateSpaceKind.REEDS_SHEPP

    def solve(self, start: State, goal: State) -> Candidate:
        rs = reeds_shepp_shortest_path(start.as_tuple(), goal.as_tuple(), self.params.turning_radius)
        if rs is None:
            raise NoAdmissiblePathError(f"no Reeds-Shepp word reaches {goal}")
        controls = segment_controls(rs.segment_types, rs.segment_lengths, self.params.kappa_max)
        word = "".join(rs.segment_types)
        logger.debug("Reeds-Shepp word %s, length %.6f", word, rs.total_length)
        return Candidate(word, path_length(controls), tuple(controls))


def make_state_space(kind: StateSpaceKind, params: Optional[SteeringParams] = None) -> StateSpace:
    """Build the state space of `kind`."""
    from .hc_cc.state_spaces import (
        CCDubinsStateSpace,
        CCReedsSheppStateSpace,
        HC00ReedsSheppStateSpace,
        HC0pmReedsSheppStateSpace,
        HCpm0ReedsSheppStateSpace,
        HCpmpmReedsSheppStateSpace,
    )

    classes = {
        StateSpaceKind.DUBINS: DubinsStateSpace,
        StateSpaceKind.REEDS_SHEPP: ReedsSheppStateSpace,
        StateSpaceKind.CC_DUBINS: CCDubinsStateSpace,
        StateSpaceKind.CC_REEDS_SHEPP: CCReedsSheppStateSpace,
        StateSpaceKind.HC00_REEDS_SHEPP: HC00ReedsSheppStateSpace,
        StateSpaceKind.HC0PM_REEDS_SHEPP: HC0pmReedsSheppStateSpace,
        StateSpaceKind.HCPM0_REEDS_SHEPP: HCpm0ReedsSheppStateSpace,
        StateSpaceKind.HCPMPM_REEDS_SHEPP: HCpmpmReedsSheppStateSpace,
    }
    try:
        cls = classes[StateSpaceKind(kind)]
    except ValueError:
        raise InvalidParameterError(f"Unknown state space kind: {kind!r}") from None
    return cls(params)
