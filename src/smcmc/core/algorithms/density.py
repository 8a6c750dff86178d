"""Empirical quantiles and kernel density values at quantile points.

The density at a quantile converts the variance of the indicator process
1{X <= x_q} into the variance of the quantile estimator itself (Bahadur
representation), so it has to be evaluated exactly at the quantile point.
"""

from __future__ import annotations

import numpy as np
from scipy.stats import gaussian_kde

from smcmc.core.algorithms.batch_means import as_matrix
from smcmc.core.shared.exceptions import DegenerateDensityError
from smcmc.core.shared.typing import ArrayLike, FloatArray
from smcmc.core.shared.validation import quantile_levels

_TINY = np.finfo(np.float64).tiny


def empirical_quantiles(x: ArrayLike, levels: ArrayLike) -> FloatArray:
    """Type-7 (linear interpolation) quantiles of every column.

    Args:
        x: Draws of shape (N,) or (N, p)
        levels: Quantile levels in (0, 1)

    Returns:
        Array of shape (len(levels), p); row i holds level ``levels[i]``
    """
    y = as_matrix(x)
    q = quantile_levels(np.atleast_1d(levels))
    if q.size == 0:
        return np.empty((0, y.shape[1]), dtype=np.float64)
    return np.atleast_2d(np.quantile(y, q, axis=0, method="linear")).reshape(len(q), y.shape[1])


def silverman_bandwidth(sample: ArrayLike) -> float:
    """Silverman's rule of thumb, 0.9 min(sd, IQR/1.34) n^(-1/5).

    When the interquartile range is zero but the sample still varies the
    standard deviation is used instead.
    """
    values = np.asarray(sample, dtype=np.float64).ravel()
    sd = float(np.std(values, ddof=1))
    q25, q75 = np.quantile(values, [0.25, 0.75])
    spread = min(sd, (q75 - q25) / 1.34)
    if spread <= 0:
        spread = sd if sd > 0 else abs(values[0]) or 1.0
    return 0.9 * spread * values.size ** (-0.2)


def _kde(values: FloatArray, component: int | None = None) -> gaussian_kde:
    if values.size < 2 or np.ptp(values) == 0:
        msg = "component has zero spread; its density at a quantile is undefined"
        if component is not None:
            msg = f"component {component + 1} has zero spread; its density at a quantile is undefined"
        raise DegenerateDensityError(msg, component=component)
    sd = float(np.std(values, ddof=1))
    return gaussian_kde(values, bw_method=silverman_bandwidth(values) / sd)


def kernel_density(sample: ArrayLike) -> gaussian_kde:
    """Gaussian KDE of a 1-D sample with the Silverman bandwidth."""
    return _kde(np.asarray(sample, dtype=np.float64).ravel())


def kernel_density_at(sample: ArrayLike, point: float) -> float:
    """Gaussian kernel density estimate of ``sample`` evaluated at ``point``."""
    values = np.asarray(sample, dtype=np.float64).ravel()
    density = float(_kde(values)(np.array([point]))[0])
    if not np.isfinite(density) or density <= _TINY:
        msg = f"kernel density is numerically zero at {point!r}"
        raise DegenerateDensityError(msg)
    return density


def quantile_densities(x: ArrayLike, quantiles: FloatArray, levels: ArrayLike | None = None) -> FloatArray:
    """Density of each column evaluated at its own quantiles.

    Args:
        x: Draws of shape (N, p)
        quantiles: Array of shape (|Q|, p) from :func:`empirical_quantiles`
        levels: Quantile levels, only used in error messages

    Returns:
        Array of shape (|Q|, p) of strictly positive densities

    Raises:
        DegenerateDensityError: If a component is constant or a density is zero
    """
    y = as_matrix(x)
    quantiles = np.atleast_2d(quantiles)
    levels_arr = None if levels is None else np.atleast_1d(levels)
    out = np.empty_like(quantiles, dtype=np.float64)

    for j in range(y.shape[1]):
        kde = _kde(y[:, j], component=j)
        values = kde(quantiles[:, j])
        for i, value in enumerate(values):
            if not np.isfinite(value) or value <= _TINY:
                level = None if levels_arr is None else float(levels_arr[i])
                msg = (
                    f"kernel density of component {j + 1} is numerically zero at its "
                    f"quantile {quantiles[i, j]:.6g}"
                )
                if level is not None:
                    msg += f" (level {level:g})"
                raise DegenerateDensityError(msg, component=j, level=level)
        out[:, j] = values

    return out


__all__ = [
    "empirical_quantiles",
    "kernel_density",
    "kernel_density_at",
    "quantile_densities",
    "silverman_bandwidth",
]
