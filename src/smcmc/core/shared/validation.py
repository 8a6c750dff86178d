"""Argument checks shared by the numerical modules."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from smcmc.core.shared.exceptions import InvalidParameterError
from smcmc.core.shared.typing import FloatArray


def require_open_unit(name: str, value: float) -> float:
    """Return ``value`` as float if it lies strictly inside (0, 1)."""
    value = float(value)
    if not np.isfinite(value) or not 0.0 < value < 1.0:
        msg = f"{name} must lie in (0, 1), got {value!r}"
        raise InvalidParameterError(msg)
    return value


def quantile_levels(levels: Iterable[float] | None) -> FloatArray:
    """Validate quantile levels, keeping the caller's order.

    Duplicates are allowed (their intervals come out identical) but every
    level has to be inside (0, 1).
    """
    if levels is None:
        return np.empty(0, dtype=np.float64)
    arr = np.atleast_1d(np.asarray(list(levels), dtype=np.float64))
    for q in arr:
        require_open_unit("quantile level", q)
    return arr


def require_batch_size(b: int, n_rows: int) -> int:
    """Check ``1 <= b <= n_rows`` and that ``b`` is integral."""
    if isinstance(b, bool) or int(b) != b:
        msg = f"batch size must be an integer, got {b!r}"
        raise InvalidParameterError(msg)
    b = int(b)
    if b < 1 or b > n_rows:
        msg = f"batch size must be in [1, {n_rows}], got {b}"
        raise InvalidParameterError(msg)
    return b


__all__ = ["quantile_levels", "require_batch_size", "require_open_unit"]
