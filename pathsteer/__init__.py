"""
Analytic steering functions for car-like robots with bounded curvature.
Exports state spaces:
- DubinsStateSpace, ReedsSheppStateSpace
- CCDubinsStateSpace, CCReedsSheppStateSpace
- HC00ReedsSheppStateSpace, HC0pmReedsSheppStateSpace, HCpm0ReedsSheppStateSpace, HCpmpmReedsSheppStateSpace
"""

from .errors import CurvatureContractError, InvalidParameterError, NoAdmissiblePathError, SteeringError
from .state import Candidate, Control, State, SteeringParams
from .state_space import DubinsStateSpace, ReedsSheppStateSpace, StateSpace, StateSpaceKind, make_state_space
from .hc_cc import (
    CCDubinsStateSpace,
    CCReedsSheppStateSpace,
    HC00ReedsSheppStateSpace,
    HC0pmReedsSheppStateSpace,
    HCpm0ReedsSheppStateSpace,
    HCpmpmReedsSheppStateSpace,
)

__all__ = [
    "StateSpace",
    "StateSpaceKind",
    "make_state_space",
    "DubinsStateSpace",
    "ReedsSheppStateSpace",
    "CCDubinsStateSpace",
    "CCReedsSheppStateSpace",
    "HC00ReedsSheppStateSpace",
    "HC0pmReedsSheppStateSpace",
    "HCpm0ReedsSheppStateSpace",
    "HCpmpmReedsSheppStateSpace",
    "SteeringParams",
    "State",
    "Control",
    "Candidate",
    "SteeringError",
    "InvalidParameterError",
    "NoAdmissiblePathError",
    "CurvatureContractError",
]
