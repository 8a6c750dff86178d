"""Shared typing aliases used across smcmc."""

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

FloatArray = npt.NDArray[np.float64]
IntArray = npt.NDArray[np.int_]
BoolArray = npt.NDArray[np.bool_]

ArrayLike = npt.ArrayLike
QuantileLevels = Sequence[float]
SeedLike = int | np.random.Generator | None
