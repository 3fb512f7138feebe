class SteeringError(Exception):
    """Base class for every error raised by pathsteer."""


class InvalidParameterError(SteeringError, ValueError):
    """A state-space parameter or call argument is out of range."""


class NoAdmissiblePathError(SteeringError):
    """No word of the catalogue yields an admissible path."""


class CurvatureContractError(NoAdmissiblePathError):
    """Start or goal curvature is incompatible with the variant's endpoint curvature."""

    def __init__(self, variant: str, which: str, kappa: float, expected: str):
        self.variant = variant
        self.which = which
        self.kappa = kappa
        super().__init__(f"{variant}: {which} curvature {kappa!r} is not allowed, expected {expected}")
