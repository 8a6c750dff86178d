"""Batch-means estimation of the asymptotic covariance of a sample mean.

For a stationary sequence Y_1..Y_N the batch-means estimator splits the
sequence into a = floor(N / b) contiguous blocks of length b. When the
blocks are long compared with the autocorrelation time their means are
roughly independent, so b times their sample covariance estimates the
long-run covariance Σ in  sqrt(N) (Ybar - mu) -> N(0, Σ).

Remainder convention: the trailing N - a*b rows are dropped, both for the
block means and for the grand mean the blocks are centred on.

References:
    - Jones, Haran, Caffo & Neath (2006): "Fixed-width output analysis for
      Markov chain Monte Carlo"
    - Vats, Flegal & Jones (2019): "Multivariate output analysis for Markov
      chain Monte Carlo"
    - Liu, Vats & Flegal (2021): "Batch size selection for variance
      estimators in MCMC"
"""

from __future__ import annotations

import logging

import numpy as np

from smcmc.core.shared.exceptions import (
    InsufficientDataError,
    InvalidParameterError,
    NonPositiveDefiniteError,
)
from smcmc.core.shared.typing import ArrayLike, FloatArray
from smcmc.core.shared.validation import require_batch_size

logger = logging.getLogger(__name__)

BATCH_METHODS = ("sqrt", "cuberoot", "ar1")


def as_matrix(x: ArrayLike) -> FloatArray:
    """Return ``x`` as a 2-D float array with one row per draw."""
    arr = np.asarray(x, dtype=np.float64)
    if arr.ndim == 1:
        arr = arr[:, np.newaxis]
    if arr.ndim != 2:
        msg = f"expected a vector or a matrix, got array with shape {arr.shape}"
        raise InvalidParameterError(msg)
    return arr


def _ar1_ratio(x: FloatArray) -> float:
    """Average |Γ/Σ| over components under an AR(1) fit.

    With lag-1 autocorrelation rho, the long-run variance is
    Σ = γ0 (1 + rho) / (1 - rho) and Γ = 2 Σ_k k γ_k = 2 γ0 rho / (1 - rho)^2,
    so |Γ/Σ| = 2|rho| / (1 - rho^2).
    """
    centered = x - x.mean(axis=0)
    gamma0 = np.mean(centered**2, axis=0)
    gamma1 = np.mean(centered[1:] * centered[:-1], axis=0)
    ratios = []
    for g0, g1 in zip(gamma0, gamma1, strict=True):
        if g0 <= 0:
            continue
        rho = np.clip(g1 / g0, -0.999, 0.999)
        ratios.append((2.0 * abs(rho) / (1.0 - rho**2)) ** (2.0 / 3.0))
    return float(np.mean(ratios)) if ratios else 0.0


def batch_size(chain: ArrayLike, method: str = "sqrt") -> int:
    """Recommend a batch length for one chain.

    Args:
        chain: Array of shape (n,) or (n, p)
        method: ``"sqrt"`` (floor of sqrt(n)), ``"cuberoot"`` (floor of n^(1/3))
            or ``"ar1"`` (optimal batch-means rule under an AR(1) approximation)

    Returns:
        Batch size in [1, n // 2], so there are always at least two batches
    """
    x = as_matrix(chain)
    n = x.shape[0]
    if n < 2:
        msg = f"need at least 2 draws to choose a batch size, got {n}"
        raise InsufficientDataError(msg)

    if method == "sqrt":
        b = int(np.floor(np.sqrt(n)))
    elif method == "cuberoot":
        b = int(np.floor(np.cbrt(n)))
    elif method == "ar1":
        b = int(np.ceil((1.5 * n) ** (1.0 / 3.0) * _ar1_ratio(x)))
    else:
        msg = f"unknown batch size method {method!r}; choose from {', '.join(BATCH_METHODS)}"
        raise InvalidParameterError(msg)

    return int(min(max(b, 1), n // 2))


def batch_means_covariance(x: ArrayLike, b: int) -> FloatArray:
    """Batch-means estimate of the long-run covariance of ``x``.

    Args:
        x: Sequence of shape (N,) or (N, k)
        b: Batch length, 1 <= b <= N. ``b = 1`` gives the ordinary sample
            covariance, which is the right choice for i.i.d. draws.

    Returns:
        Symmetric (k, k) matrix estimating N * Cov(sample mean)
    """
    y = as_matrix(x)
    n_rows, k = y.shape
    b = require_batch_size(b, n_rows)

    n_batches = n_rows // b
    if n_batches < 2:
        msg = f"batch size {b} leaves {n_batches} batch(es) out of {n_rows} rows; need at least 2"
        raise InsufficientDataError(msg)

    used = y[: n_batches * b]
    block_means = used.reshape(n_batches, b, k).mean(axis=1)
    centered = block_means - used.mean(axis=0)
    sigma = b * (centered.T @ centered) / (n_batches - 1)

    logger.debug(
        "batch means: %d rows, %d columns, b=%d, a=%d (%d rows dropped)",
        n_rows,
        k,
        b,
        n_batches,
        n_rows - n_batches * b,
    )
    return 0.5 * (sigma + sigma.T)


def monte_carlo_standard_errors(x: ArrayLike, b: int) -> FloatArray:
    """Monte Carlo standard error of each column mean, sqrt(Σ_jj / N)."""
    y = as_matrix(x)
    sigma = batch_means_covariance(y, b)
    return np.sqrt(np.diag(sigma) / y.shape[0])


def log_determinant(matrix: FloatArray, label: str = "matrix") -> float:
    """Log-determinant of a covariance matrix that must be positive definite."""
    sign, logdet = np.linalg.slogdet(np.atleast_2d(matrix))
    if sign <= 0 or not np.isfinite(logdet):
        msg = f"{label} is singular or indefinite; its log-determinant is undefined"
        raise NonPositiveDefiniteError(msg)
    return float(logdet)


def multivariate_ess(x: ArrayLike, b: int) -> float:
    """Multivariate effective sample size of Vats, Flegal & Jones (2019).

    ESS = N (det S / det Σ)^(1/p) with S the sample covariance of ``x`` and
    Σ its batch-means covariance.
    """
    y = as_matrix(x)
    n_rows, p = y.shape
    sigma = batch_means_covariance(y, b)
    sample_cov = np.atleast_2d(np.cov(y, rowvar=False))
    log_ratio = log_determinant(sample_cov, "sample covariance") - log_determinant(
        sigma, "batch-means covariance"
    )
    return float(n_rows * np.exp(log_ratio / p))


__all__ = [
    "BATCH_METHODS",
    "as_matrix",
    "batch_means_covariance",
    "batch_size",
    "log_determinant",
    "monte_carlo_standard_errors",
    "multivariate_ess",
]
