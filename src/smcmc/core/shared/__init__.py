"""Shared types and exceptions."""

from smcmc.core.shared.exceptions import (
    DataIOError,
    DegenerateDensityError,
    DimensionMismatchError,
    InsufficientDataError,
    InvalidParameterError,
    NonPositiveDefiniteError,
    SmcmcError,
)
from smcmc.core.shared.typing import FloatArray, IntArray, SeedLike

__all__ = [
    "DataIOError",
    "DegenerateDensityError",
    "DimensionMismatchError",
    "FloatArray",
    "InsufficientDataError",
    "IntArray",
    "InvalidParameterError",
    "NonPositiveDefiniteError",
    "SeedLike",
    "SmcmcError",
]
