"""Numerical building blocks of the simultaneous interval engine."""

from smcmc.core.algorithms.batch_means import (
    batch_means_covariance,
    batch_size,
    monte_carlo_standard_errors,
    multivariate_ess,
)
from smcmc.core.algorithms.calibration import (
    Calibration,
    analytic_critical_value,
    calibrate,
    correlation_factor,
    correlation_from_covariance,
    monte_carlo_critical_value,
    simultaneous_bounds,
)
from smcmc.core.algorithms.covariance import (
    JointCovariance,
    assemble_joint_covariance,
    indicator_matrix,
)
from smcmc.core.algorithms.density import (
    empirical_quantiles,
    kernel_density_at,
    quantile_densities,
    silverman_bandwidth,
)
from smcmc.core.algorithms.stacking import StackedChains, stack_chains

__all__ = [
    "Calibration",
    "JointCovariance",
    "StackedChains",
    "analytic_critical_value",
    "assemble_joint_covariance",
    "batch_means_covariance",
    "batch_size",
    "calibrate",
    "correlation_factor",
    "correlation_from_covariance",
    "empirical_quantiles",
    "indicator_matrix",
    "kernel_density_at",
    "monte_carlo_critical_value",
    "monte_carlo_standard_errors",
    "multivariate_ess",
    "quantile_densities",
    "silverman_bandwidth",
    "simultaneous_bounds",
    "stack_chains",
]
