"""Public operations on chain sets.

- compute_simultaneous_ci: simultaneous intervals for means and quantiles
- compute_summary_statistics: MCSE, ESS and Gelman-Rubin summary
- ReportService: both of the above driven by an SmcmcConfig, with output files
"""

from smcmc.services.intervals import compute_simultaneous_ci
from smcmc.services.report import ReportOutput, ReportService
from smcmc.services.summary import compute_summary_statistics

__all__ = [
    "ReportOutput",
    "ReportService",
    "compute_simultaneous_ci",
    "compute_summary_statistics",
]
