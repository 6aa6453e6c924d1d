"""Exceptions raised by geoecef"""

__all__ = ['InvalidEllipsoidError', 'NonConvergenceError']


class InvalidEllipsoidError(ValueError):
    """Raised when an ellipsoid descriptor cannot be turned into a valid ellipsoid"""


class NonConvergenceError(ValueError):
    """
    Raised when the ECEF -> geodetic iteration does not settle within its
    iteration limit. No estimate is returned in that case.

    Attributes:
        iterations: (int)
            The number of refinements performed before giving up

        tolerance: (float)
            The height tolerance (meters) that was not met

        residual: (float)
            The largest change in height (meters) on the final refinement
    """

    def __init__(self, iterations: int, tolerance: float, residual: float):
        self.iterations = iterations
        self.tolerance = tolerance
        self.residual = residual
        super().__init__(
            f'Geodetic conversion did not converge after {iterations} iterations '
            f'(last height change {residual} m, tolerance {tolerance} m)'
        )

    def __reduce__(self):
        return self.__class__, (self.iterations, self.tolerance, self.residual)
