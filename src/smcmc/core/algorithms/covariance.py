"""Joint asymptotic covariance of mean and quantile estimators.

The target vector is ordered as

    (mean_1, ..., mean_p, xi_{q1,1}, ..., xi_{q1,p}, xi_{q2,1}, ..., xi_{q2,p}, ...)

i.e. the p means first (when requested) followed by the quantiles in
quantile-major, component-minor order. The same ordering is used for the
point estimates, the covariance matrix and the interval bounds.

Quantiles enter through the indicator process 1{X_ij <= xi_{q,j}}: one call
to the batch-means estimator on [X | indicators] gives the joint covariance
of means and indicator means, and the delta method rescales each quantile
row and column by 1 / f_j(xi_{q,j}).

Reference:
    Robertson, Flegal, Vats & Jones (2021): "Assessing and visualizing
    simultaneous simulation error", JCGS 30(2), 324-334.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from smcmc.core.algorithms.batch_means import as_matrix, batch_means_covariance
from smcmc.core.algorithms.density import empirical_quantiles, quantile_densities
from smcmc.core.shared.exceptions import DimensionMismatchError
from smcmc.core.shared.typing import ArrayLike, FloatArray
from smcmc.core.shared.validation import quantile_levels

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JointCovariance:
    """Covariance of the sqrt(N)-scaled target vector and its ingredients.

    Attributes:
        sigma: Delta-method covariance, diag(scale) @ sigma_raw @ diag(scale)
        sigma_raw: Batch-means covariance of [X | indicators] (or indicators only)
        scale: 1 for mean entries, 1/density for quantile entries
        estimate: Point estimates in target-vector order
        mean_estimate: Column means of X, shape (p,)
        quantile_estimate: Empirical quantiles, shape (|Q|, p)
        densities: Kernel density at each quantile, shape (|Q|, p)
        include_means: Whether the means are part of the target vector
    """

    sigma: FloatArray
    sigma_raw: FloatArray
    scale: FloatArray
    estimate: FloatArray
    mean_estimate: FloatArray
    quantile_estimate: FloatArray
    densities: FloatArray
    include_means: bool

    @property
    def n_dim(self) -> int:
        return int(self.mean_estimate.shape[0])

    @property
    def n_levels(self) -> int:
        return int(self.quantile_estimate.shape[0])

    @property
    def size(self) -> int:
        return int(self.estimate.shape[0])


def indicator_matrix(x: FloatArray, quantiles: FloatArray) -> FloatArray:
    """Indicators 1{X_ij <= xi_{q,j}} in quantile-major column order.

    Args:
        x: Draws of shape (N, p)
        quantiles: Array of shape (|Q|, p)

    Returns:
        Array of shape (N, |Q| * p); column ``i * p + j`` belongs to level i
        and component j
    """
    n_levels, p = quantiles.shape
    # (N, 1, p) <= (1, |Q|, p) -> (N, |Q|, p), flattened row-major keeps level-major order
    below = x[:, np.newaxis, :] <= quantiles[np.newaxis, :, :]
    return below.reshape(x.shape[0], n_levels * p).astype(np.float64)


def assemble_joint_covariance(
    x: ArrayLike,
    levels: ArrayLike,
    batch_size: int,
    include_means: bool = True,
) -> JointCovariance:
    """Build the delta-method covariance of means and quantiles.

    Args:
        x: Stacked draws of shape (N, p)
        levels: Quantile levels in (0, 1); may be empty when means are included
        batch_size: Batch length for the batch-means estimator (1 for i.i.d.)
        include_means: Put the p means in front of the quantiles

    Returns:
        JointCovariance for the target vector

    Raises:
        DimensionMismatchError: If there is nothing to estimate
        DegenerateDensityError: If a density at a quantile is zero
    """
    y = as_matrix(x)
    q = quantile_levels(np.atleast_1d(levels) if levels is not None else None)
    p = y.shape[1]

    if q.size == 0 and not include_means:
        msg = "no quantile levels given and means excluded: nothing to estimate"
        raise DimensionMismatchError(msg)

    mean_estimate = y.mean(axis=0)
    quantiles = empirical_quantiles(y, q)

    if q.size:
        densities = quantile_densities(y, quantiles, q)
        indicators = indicator_matrix(y, quantiles)
    else:
        densities = np.empty((0, p), dtype=np.float64)
        indicators = np.empty((y.shape[0], 0), dtype=np.float64)

    if include_means:
        joint = np.hstack([y, indicators])
        scale = np.concatenate([np.ones(p), 1.0 / densities.ravel()])
        estimate = np.concatenate([mean_estimate, quantiles.ravel()])
    else:
        joint = indicators
        scale = 1.0 / densities.ravel()
        estimate = quantiles.ravel()

    sigma_raw = batch_means_covariance(joint, batch_size)
    sigma = sigma_raw * scale[:, np.newaxis] * scale[np.newaxis, :]
    sigma = 0.5 * (sigma + sigma.T)

    logger.debug(
        "joint covariance: p=%d, |Q|=%d, means=%s, size=%d, b=%d",
        p,
        q.size,
        include_means,
        estimate.size,
        batch_size,
    )

    return JointCovariance(
        sigma=sigma,
        sigma_raw=sigma_raw,
        scale=scale,
        estimate=estimate,
        mean_estimate=mean_estimate,
        quantile_estimate=quantiles,
        densities=densities,
        include_means=include_means,
    )


__all__ = ["JointCovariance", "assemble_joint_covariance", "indicator_matrix"]
