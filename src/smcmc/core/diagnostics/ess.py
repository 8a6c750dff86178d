"""Effective sample size and Gelman-Rubin diagnostics from batch means.

Both diagnostics are read off the same covariance estimates that drive the
simultaneous intervals, which gives a one-to-one relation between them:

    univariate:    G-R_j = sqrt(1 + m / ESS_j)
    multivariate:  G-R   = sqrt((n - 1) / n + m / ESS)

with m chains of length n. The minimum ESS for a confidence region of
relative volume ``epsilon`` at level 1 - alpha follows Vats, Flegal & Jones
(2019), and the multivariate Gelman-Rubin statistic Vats & Knudson (2021).

References:
    - Vats, Flegal & Jones (2019): "Multivariate output analysis for Markov
      chain Monte Carlo", Biometrika 106(2), 321-337
    - Vats & Knudson (2021): "Revisiting the Gelman-Rubin diagnostic",
      Statistical Science 36(4), 518-529
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from scipy.special import gammaln
from scipy.stats import chi2

from smcmc.core.algorithms.batch_means import batch_means_covariance, log_determinant
from smcmc.core.shared.exceptions import (
    InsufficientDataError,
    InvalidParameterError,
    NonPositiveDefiniteError,
)
from smcmc.core.shared.typing import FloatArray
from smcmc.core.shared.validation import require_open_unit


def average_chain_variance(blocks: Sequence[FloatArray]) -> FloatArray:
    """Mean over chains of each component's within-chain sample variance."""
    if any(block.shape[0] < 2 for block in blocks):
        msg = "every chain needs at least 2 draws to estimate its variance"
        raise InsufficientDataError(msg)
    return np.mean([np.var(block, axis=0, ddof=1) for block in blocks], axis=0)


def average_chain_covariance(blocks: Sequence[FloatArray]) -> FloatArray:
    """Mean over chains of the within-chain sample covariance matrix."""
    if any(block.shape[0] < 2 for block in blocks):
        msg = "every chain needs at least 2 draws to estimate its covariance"
        raise InsufficientDataError(msg)
    return np.mean([np.atleast_2d(np.cov(block, rowvar=False)) for block in blocks], axis=0)


def univariate_ess(blocks: Sequence[FloatArray], stacked: FloatArray, b: int) -> FloatArray:
    """Per-component ESS, s_j / MCSE_j^2 (not yet floored).

    Args:
        blocks: Per-chain pieces of the stacked array
        stacked: Stacked draws of shape (N, p)
        b: Batch size

    Returns:
        Array of shape (p,)
    """
    within = average_chain_variance(blocks)
    mc_var = np.diag(batch_means_covariance(stacked, b)) / stacked.shape[0]
    zero = np.flatnonzero(mc_var <= 0)
    if zero.size:
        msg = (
            f"component(s) {(zero + 1).tolist()} have zero Monte Carlo variance; "
            "their effective sample size is undefined"
        )
        raise NonPositiveDefiniteError(msg)
    return within / mc_var


def gelman_rubin(ess: FloatArray | float, n_chains: int) -> FloatArray | float:
    """Univariate Gelman-Rubin statistic from ESS, sqrt(1 + m / ESS)."""
    return np.sqrt(1.0 + n_chains / np.asarray(ess, dtype=np.float64))


def pooled_multivariate_ess(blocks: Sequence[FloatArray], stacked: FloatArray, b: int) -> float:
    """Multivariate ESS with the averaged within-chain covariance.

    ESS = N (det Λ / det Σ)^(1/p), with Λ the mean of the per-chain sample
    covariances and Σ the batch-means covariance of the stacked draws.
    """
    n_rows, p = stacked.shape
    within = average_chain_covariance(blocks)
    sigma = batch_means_covariance(stacked, b)
    log_ratio = log_determinant(within, "within-chain covariance") - log_determinant(
        sigma, "batch-means covariance"
    )
    return float(n_rows * np.exp(log_ratio / p))


def multivariate_gelman_rubin(ess: float, n_samples: int, n_chains: int) -> float:
    """Multivariate Gelman-Rubin statistic, sqrt((n - 1)/n + m / ESS)."""
    return float(np.sqrt((n_samples - 1) / n_samples + n_chains / ess))


def minimum_ess(alpha: float = 0.05, epsilon: float = 0.10) -> int:
    """Minimum univariate ESS, ceil(4 pi chi2_{1,1-alpha} / (Gamma(1/2)^2 epsilon^2))."""
    alpha = require_open_unit("alpha", alpha)
    epsilon = require_open_unit("epsilon", epsilon)
    value = 4.0 * math.pi * chi2.ppf(1.0 - alpha, df=1) / (math.gamma(0.5) ** 2 * epsilon**2)
    return int(math.ceil(value))


def minimum_multivariate_ess(p: int, alpha: float = 0.05, epsilon: float = 0.10) -> int:
    """Minimum multivariate ESS for a p-dimensional region.

    ceil(2^(2/p) pi chi2_{p,1-alpha} / ((p Gamma(p/2))^(2/p) epsilon^2)),
    evaluated on the log scale so large p does not overflow.
    """
    alpha = require_open_unit("alpha", alpha)
    epsilon = require_open_unit("epsilon", epsilon)
    if p < 1:
        msg = f"dimension must be positive, got {p}"
        raise InvalidParameterError(msg)
    log_value = (
        (2.0 / p) * math.log(2.0)
        + math.log(math.pi)
        + math.log(chi2.ppf(1.0 - alpha, df=p))
        - (2.0 / p) * (math.log(p) + gammaln(p / 2.0))
        - 2.0 * math.log(epsilon)
    )
    return int(math.ceil(math.exp(log_value)))


__all__ = [
    "average_chain_covariance",
    "average_chain_variance",
    "gelman_rubin",
    "minimum_ess",
    "minimum_multivariate_ess",
    "multivariate_gelman_rubin",
    "pooled_multivariate_ess",
    "univariate_ess",
]
