"""Calibration of a single critical value for simultaneous intervals.

Given the joint covariance Σ of the sqrt(n)-scaled target vector, every
interval has the form  estimate_i ± z* σ_i / sqrt(n). The critical value z*
is chosen so that, under the limiting model W ~ N(0, R) with R the
correlation matrix of Σ,

    P(max_i |W_i| <= z*) = 1 - alpha.

The default method estimates that quantile from Monte Carlo draws of W. The
analytic method searches for z* by bisection on the multivariate normal
probability of the box [-z, z]^k; it is only used when asked for.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

import numpy as np
from scipy.stats import multivariate_normal, norm

from smcmc.core.shared.exceptions import (
    DimensionMismatchError,
    InvalidParameterError,
    NonPositiveDefiniteError,
)
from smcmc.core.shared.typing import ArrayLike, FloatArray, SeedLike
from smcmc.core.shared.validation import require_open_unit

logger = logging.getLogger(__name__)

CalibrationMethod = Literal["monte_carlo", "analytic"]

DEFAULT_DRAWS = 20_000
DEFAULT_TOLERANCE = 1e-3
EIGEN_TOLERANCE = 1e-10
_MAX_BISECTIONS = 100


@dataclass(frozen=True)
class Calibration:
    """Calibrated critical value and the scales it multiplies.

    Attributes:
        critical_value: z* shared by every interval
        std_devs: sqrt(diag Σ) for each entry of the target vector
        correlation: Correlation matrix R derived from Σ
        method: ``"monte_carlo"`` or ``"analytic"``
        n_draws: Monte Carlo draws used (None for the analytic method)
    """

    critical_value: float
    std_devs: FloatArray
    correlation: FloatArray
    method: CalibrationMethod
    n_draws: int | None = None


def correlation_from_covariance(sigma: ArrayLike) -> tuple[FloatArray, FloatArray]:
    """Split Σ into its correlation matrix R and standard deviations.

    Raises:
        DimensionMismatchError: If Σ is not square
        NonPositiveDefiniteError: If a variance is zero, negative or not finite
    """
    cov = np.atleast_2d(np.asarray(sigma, dtype=np.float64))
    if cov.ndim != 2 or cov.shape[0] != cov.shape[1]:
        msg = f"covariance matrix must be square, got shape {cov.shape}"
        raise DimensionMismatchError(msg)

    variances = np.diag(cov)
    bad = np.flatnonzero(~np.isfinite(variances) | (variances <= 0))
    if bad.size:
        msg = (
            "covariance has zero, negative or non-finite variance at "
            f"position(s) {bad.tolist()}; the correlation matrix is undefined"
        )
        raise NonPositiveDefiniteError(msg)

    sd = np.sqrt(variances)
    corr = cov / np.outer(sd, sd)
    corr = 0.5 * (corr + corr.T)
    np.fill_diagonal(corr, 1.0)
    return corr, sd


def correlation_factor(corr: ArrayLike, tol: float = EIGEN_TOLERANCE) -> FloatArray:
    """Return L with L @ L.T == corr.

    The lower Cholesky factor is used whenever it exists. A correlation
    matrix that is only positive semidefinite (e.g. repeated quantile levels)
    has no Cholesky factor; its exact symmetric factor V diag(sqrt(λ)) is
    used instead, provided no eigenvalue is below ``-tol * max(1, λ_max)``.

    Raises:
        NonPositiveDefiniteError: If ``corr`` is not finite or is indefinite
    """
    r = np.atleast_2d(np.asarray(corr, dtype=np.float64))
    if not np.all(np.isfinite(r)):
        msg = "correlation matrix contains non-finite entries"
        raise NonPositiveDefiniteError(msg)

    try:
        return np.linalg.cholesky(r)
    except np.linalg.LinAlgError:
        pass

    eigvals, eigvecs = np.linalg.eigh(r)
    threshold = -tol * max(1.0, float(eigvals[-1]))
    if eigvals[0] < threshold:
        msg = (
            f"correlation matrix is not positive semidefinite "
            f"(smallest eigenvalue {eigvals[0]:.3e})"
        )
        raise NonPositiveDefiniteError(msg)

    logger.info(
        "correlation matrix is singular (smallest eigenvalue %.3e); using its symmetric factor",
        eigvals[0],
    )
    return eigvecs * np.sqrt(np.clip(eigvals, 0.0, None))


def _require_draws(n_draws: int) -> int:
    if isinstance(n_draws, bool) or int(n_draws) != n_draws or n_draws < 1:
        msg = f"number of Monte Carlo draws must be a positive integer, got {n_draws!r}"
        raise InvalidParameterError(msg)
    return int(n_draws)


def sup_statistics(corr: ArrayLike, n_draws: int = DEFAULT_DRAWS, rng: SeedLike = None) -> FloatArray:
    """Draw max_i |W_i| for ``n_draws`` independent W ~ N(0, corr)."""
    factor = correlation_factor(corr)
    n_draws = _require_draws(n_draws)
    generator = np.random.default_rng(rng)
    z = generator.standard_normal((n_draws, factor.shape[0]))
    return np.max(np.abs(z @ factor.T), axis=1)


def monte_carlo_critical_value(
    corr: ArrayLike,
    alpha: float,
    n_draws: int = DEFAULT_DRAWS,
    rng: SeedLike = None,
) -> float:
    """Empirical (1 - alpha) quantile of the sup statistic.

    Results vary with the random stream; pass an integer seed or a
    ``numpy.random.Generator`` for reproducible values.
    """
    alpha = require_open_unit("alpha", alpha)
    sups = sup_statistics(corr, n_draws, rng)
    return float(np.quantile(sups, 1.0 - alpha, method="linear"))


def box_probability(corr: FloatArray, z: float, rng: SeedLike = None) -> float:
    """P(|W_i| <= z for all i) for W ~ N(0, corr)."""
    k = corr.shape[0]
    if k == 1:
        return float(2.0 * norm.cdf(z) - 1.0)
    dist = multivariate_normal(mean=np.zeros(k), cov=corr, allow_singular=True, seed=rng)
    return float(dist.cdf(np.full(k, z), lower_limit=np.full(k, -z)))


def analytic_critical_value(
    corr: ArrayLike,
    alpha: float,
    tol: float = DEFAULT_TOLERANCE,
    rng: SeedLike = None,
) -> float:
    """Critical value by bisection on the multivariate normal box probability.

    The search starts between the unadjusted quantile z_{1-alpha/2} and the
    Bonferroni quantile z_{1-alpha/(2k)} and stops once the bracketing
    probabilities differ by less than ``tol``. The upper end of the bracket
    is returned, so the coverage is at least 1 - alpha up to the accuracy
    of the probability evaluation.
    """
    alpha = require_open_unit("alpha", alpha)
    if not tol > 0:
        msg = f"tolerance must be positive, got {tol!r}"
        raise InvalidParameterError(msg)

    r = np.atleast_2d(np.asarray(corr, dtype=np.float64))
    correlation_factor(r)
    k = r.shape[0]
    target = 1.0 - alpha

    z_low = float(norm.ppf(1.0 - alpha / 2.0))
    z_high = float(norm.ppf(1.0 - alpha / (2.0 * k)))
    if k == 1:
        return z_low

    generator = np.random.default_rng(rng)
    p_low = box_probability(r, z_low, generator)
    p_high = box_probability(r, z_high, generator)

    for _ in range(_MAX_BISECTIONS):
        if p_high - p_low <= tol:
            break
        z_mid = 0.5 * (z_low + z_high)
        p_mid = box_probability(r, z_mid, generator)
        if p_mid >= target:
            z_high, p_high = z_mid, p_mid
        else:
            z_low, p_low = z_mid, p_mid

    logger.debug("analytic calibration: z*=%.5f, P(box)=%.5f", z_high, p_high)
    return z_high


def calibrate(
    sigma: ArrayLike,
    alpha: float,
    *,
    method: CalibrationMethod = "monte_carlo",
    n_draws: int = DEFAULT_DRAWS,
    rng: SeedLike = None,
    tol: float = DEFAULT_TOLERANCE,
) -> Calibration:
    """Calibrate the simultaneous critical value for covariance ``sigma``.

    Args:
        sigma: Joint covariance of the sqrt(n)-scaled estimators, shape (k, k)
        alpha: 1 - simultaneous confidence level, in (0, 1)
        method: ``"monte_carlo"`` (default) or ``"analytic"``
        n_draws: Monte Carlo sample size
        rng: Seed or generator for the random draws
        tol: Probability tolerance of the analytic bisection

    Returns:
        Calibration holding z*, the standard deviations and R
    """
    alpha = require_open_unit("alpha", alpha)
    corr, sd = correlation_from_covariance(sigma)

    if method == "monte_carlo":
        z_star = monte_carlo_critical_value(corr, alpha, n_draws, rng)
        draws: int | None = _require_draws(n_draws)
    elif method == "analytic":
        z_star = analytic_critical_value(corr, alpha, tol, rng)
        draws = None
    else:
        msg = f"unknown calibration method {method!r}; use 'monte_carlo' or 'analytic'"
        raise InvalidParameterError(msg)

    logger.debug("calibrated z*=%.5f for k=%d, alpha=%g (%s)", z_star, corr.shape[0], alpha, method)
    return Calibration(
        critical_value=z_star,
        std_devs=sd,
        correlation=corr,
        method=method,
        n_draws=draws,
    )


def simultaneous_bounds(
    estimate: ArrayLike,
    calibration: Calibration,
    n: int,
) -> tuple[FloatArray, FloatArray]:
    """Lower and upper bounds, estimate ± z* σ_i / sqrt(n)."""
    est = np.asarray(estimate, dtype=np.float64)
    if est.shape != calibration.std_devs.shape:
        msg = f"estimate has shape {est.shape}, calibration expects {calibration.std_devs.shape}"
        raise DimensionMismatchError(msg)
    if n < 1:
        msg = f"sample size must be positive, got {n}"
        raise InvalidParameterError(msg)
    half_width = calibration.critical_value * calibration.std_devs / np.sqrt(n)
    return est - half_width, est + half_width


__all__ = [
    "DEFAULT_DRAWS",
    "DEFAULT_TOLERANCE",
    "Calibration",
    "CalibrationMethod",
    "analytic_critical_value",
    "box_probability",
    "calibrate",
    "correlation_factor",
    "correlation_from_covariance",
    "monte_carlo_critical_value",
    "simultaneous_bounds",
    "sup_statistics",
]
