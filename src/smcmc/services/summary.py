"""Per-component and multivariate summary of a chain set."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from smcmc.core.algorithms.batch_means import monte_carlo_standard_errors
from smcmc.core.algorithms.density import empirical_quantiles
from smcmc.core.diagnostics.ess import (
    average_chain_variance,
    gelman_rubin,
    minimum_ess,
    minimum_multivariate_ess,
    multivariate_gelman_rubin,
    pooled_multivariate_ess,
    univariate_ess,
)
from smcmc.core.domain.chains import ChainSource, StackingOptions, as_chain_set
from smcmc.core.results.summary import ComponentStatistics, SummaryStatistics
from smcmc.core.shared.validation import quantile_levels as validate_levels
from smcmc.core.shared.validation import require_open_unit

logger = logging.getLogger(__name__)


def compute_summary_statistics(
    source: ChainSource,
    epsilon: float = 0.10,
    alpha: float = 0.05,
    quantile_levels: Sequence[float] = (0.1, 0.9),
    *,
    stacking: StackingOptions | None = None,
) -> SummaryStatistics:
    """Means, MCSEs, quantiles, ESS and Gelman-Rubin for every component.

    ESS values are based on estimation of the means and are floored;
    Gelman-Rubin values use the unfloored ESS. A component is flagged as
    adequate when its ESS reaches the minimum ESS for a confidence region
    of relative volume ``epsilon`` at level 1 - alpha.

    Args:
        source: ChainSet or one of the raw input variants
        epsilon: Relative precision, in (0, 1)
        alpha: 1 - confidence level, in (0, 1)
        quantile_levels: Levels reported for each component
        stacking: Batch size options used when ``source`` is a raw variant

    Returns:
        SummaryStatistics
    """
    epsilon = require_open_unit("epsilon", epsilon)
    alpha = require_open_unit("alpha", alpha)
    levels = validate_levels(quantile_levels)
    chain_set = as_chain_set(source, stacking)

    stacked = chain_set.stacked
    blocks = chain_set.stacked_blocks()
    b = chain_set.batch_size
    m = chain_set.n_chains
    n = chain_set.n_samples
    p = chain_set.n_dim

    logger.info("Summary: %d chain(s) of %d draws, p=%d, b=%d", m, n, p, b)

    means = stacked.mean(axis=0)
    mcse = monte_carlo_standard_errors(stacked, b)
    sd = np.sqrt(average_chain_variance(blocks))
    quantiles = empirical_quantiles(stacked, levels)
    ess_raw = univariate_ess(blocks, stacked, b)
    gr = gelman_rubin(ess_raw, m)

    min_ess = minimum_ess(alpha, epsilon)
    min_multi = minimum_multivariate_ess(p, alpha, epsilon)

    multi_raw = pooled_multivariate_ess(blocks, stacked, b)
    multi_gr = multivariate_gelman_rubin(multi_raw, n, m)

    components = []
    for j, name in enumerate(chain_set.varnames):
        ess_j = int(math.floor(ess_raw[j]))
        components.append(
            ComponentStatistics(
                name=name,
                mean=float(means[j]),
                mcse=float(mcse[j]),
                sd=float(sd[j]),
                quantiles={float(q): float(quantiles[i, j]) for i, q in enumerate(levels)},
                ess=ess_j,
                gelman_rubin=float(gr[j]),
                adequate=ess_j >= min_ess,
            )
        )

    logger.info("Multivariate ESS = %d (minimum %d), G-R = %.5f", int(multi_raw), min_multi, multi_gr)

    return SummaryStatistics(
        n_samples=n,
        n_dim=p,
        n_chains=m,
        batch_size=b,
        stacked_rows=chain_set.n_stacked,
        components=components,
        multivariate_ess=int(math.floor(multi_raw)),
        multivariate_gelman_rubin=multi_gr,
        minimum_ess=min_ess,
        minimum_multivariate_ess=min_multi,
        epsilon=epsilon,
        alpha=alpha,
        quantile_levels=tuple(float(q) for q in levels),
    )


__all__ = ["compute_summary_statistics"]
