"""Exception taxonomy for smcmc.

Every failure of the interval engine and the ESS calculator is reported as
one of these classes so callers can tell a degenerate density apart from an
indefinite correlation matrix or a chain that is too short. Nothing in the
core falls back to a default value when one of these conditions is met.
"""

from __future__ import annotations

import numpy as np


class SmcmcError(Exception):
    """Base class for all smcmc-specific exceptions."""


class DimensionMismatchError(SmcmcError, ValueError):
    """Chains or components disagree in width, or there is nothing to estimate."""


class DegenerateDensityError(SmcmcError):
    """Kernel density is zero at a quantile point, so 1/f is undefined."""

    def __init__(self, message: str, component: int | None = None, level: float | None = None):
        super().__init__(message)
        self.component = component
        self.level = level


class NonPositiveDefiniteError(SmcmcError, np.linalg.LinAlgError):
    """Correlation matrix of the joint estimator is not positive semidefinite."""


class InvalidParameterError(SmcmcError, ValueError):
    """A tuning parameter (alpha, epsilon, batch size, levels) is out of range."""


class InsufficientDataError(SmcmcError):
    """Chains are too short for the requested batch size."""


class DataIOError(SmcmcError):
    """Chain loading/saving errors (files, formats, permissions)."""


__all__ = [
    "DataIOError",
    "DegenerateDensityError",
    "DimensionMismatchError",
    "InsufficientDataError",
    "InvalidParameterError",
    "NonPositiveDefiniteError",
    "SmcmcError",
]
