"""Matplotlib figures for chain sets and simultaneous intervals."""

from smcmc.plotting.diagnostics import (
    add_box_intervals,
    add_intervals,
    plot_autocorrelation,
    plot_density,
    plot_overview,
    plot_trace,
    save_diagnostic_plots,
    thin_indices,
)
from smcmc.plotting.layout import DEFAULT_LAYOUT, PlotLayout

__all__ = [
    "DEFAULT_LAYOUT",
    "PlotLayout",
    "add_box_intervals",
    "add_intervals",
    "plot_autocorrelation",
    "plot_density",
    "plot_overview",
    "plot_trace",
    "save_diagnostic_plots",
    "thin_indices",
]
