"""Curvature-continuous (CC) and hybrid-curvature (HC) steering."""

from .state_spaces import (
    CCDubinsStateSpace,
    CCReedsSheppStateSpace,
    CurvatureContinuousStateSpace,
    HC00ReedsSheppStateSpace,
    HC0pmReedsSheppStateSpace,
    HCpm0ReedsSheppStateSpace,
    HCpmpmReedsSheppStateSpace,
)

__all__ = [
    "CurvatureContinuousStateSpace",
    "CCDubinsStateSpace",
    "CCReedsSheppStateSpace",
    "HC00ReedsSheppStateSpace",
    "HC0pmReedsSheppStateSpace",
    "HCpm0ReedsSheppStateSpace",
    "HCpmpmReedsSheppStateSpace",
]
