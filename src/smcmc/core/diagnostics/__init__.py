"""MCMC diagnostics derived from batch-means covariance estimates.

The module includes:
- Effective sample size and Gelman-Rubin statistics (univariate and multivariate)
- Minimum ESS thresholds for a target precision
- Globally-centered autocorrelation functions

For visualization, use the `smcmc.plotting` module.
"""

from smcmc.core.diagnostics.autocorrelation import (
    AutocorrelationResult,
    default_max_lag,
    globally_centered_acf,
)
from smcmc.core.diagnostics.ess import (
    average_chain_covariance,
    average_chain_variance,
    gelman_rubin,
    minimum_ess,
    minimum_multivariate_ess,
    multivariate_gelman_rubin,
    pooled_multivariate_ess,
    univariate_ess,
)

__all__ = [
    "AutocorrelationResult",
    "average_chain_covariance",
    "average_chain_variance",
    "default_max_lag",
    "gelman_rubin",
    "globally_centered_acf",
    "minimum_ess",
    "minimum_multivariate_ess",
    "multivariate_gelman_rubin",
    "pooled_multivariate_ess",
    "univariate_ess",
]
