"""smcmc - Simultaneous confidence intervals and diagnostics for MCMC output.

Public API:
    - compute_simultaneous_ci: Joint intervals for means and quantiles
    - compute_summary_statistics: MCSE, ESS and Gelman-Rubin summary
    - ReportService: Configuration-driven run with output files

Inputs:
    - ChainSet: Canonical chain container
    - SingleChain, ChainList, RawMatrix, IidSample: Raw input variants

Configuration:
    - SmcmcConfig: Main configuration object
"""

import contextlib
from importlib import metadata

__version__ = "0.1.0"

with contextlib.suppress(metadata.PackageNotFoundError):
    __version__ = metadata.version(__name__)

from smcmc.core.domain.chains import (
    ChainList,
    ChainSet,
    IidSample,
    RawMatrix,
    SingleChain,
    StackingOptions,
    as_chain_set,
)
from smcmc.core.domain.config import SmcmcConfig
from smcmc.core.results import ComponentStatistics, SimultaneousIntervals, SummaryStatistics
from smcmc.core.shared.exceptions import (
    DegenerateDensityError,
    DimensionMismatchError,
    InsufficientDataError,
    InvalidParameterError,
    NonPositiveDefiniteError,
    SmcmcError,
)
from smcmc.services import (
    ReportOutput,
    ReportService,
    compute_simultaneous_ci,
    compute_summary_statistics,
)

__all__ = [
    "__version__",
    # Services
    "compute_simultaneous_ci",
    "compute_summary_statistics",
    "ReportService",
    "ReportOutput",
    # Inputs
    "ChainSet",
    "ChainList",
    "IidSample",
    "RawMatrix",
    "SingleChain",
    "StackingOptions",
    "as_chain_set",
    # Results
    "ComponentStatistics",
    "SimultaneousIntervals",
    "SummaryStatistics",
    # Configuration
    "SmcmcConfig",
    # Errors
    "SmcmcError",
    "DegenerateDensityError",
    "DimensionMismatchError",
    "InsufficientDataError",
    "InvalidParameterError",
    "NonPositiveDefiniteError",
]
