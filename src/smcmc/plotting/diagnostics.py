"""Visualization functions for chain sets and simultaneous intervals.

This module contains only plotting functions that consume chain sets and
pre-computed results from the services. Layout is passed explicitly via
:class:`PlotLayout`; no global matplotlib state is modified.

All functions return matplotlib Figure objects for flexible usage.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle

from smcmc.core.algorithms.density import kernel_density
from smcmc.core.diagnostics.autocorrelation import globally_centered_acf
from smcmc.core.domain.chains import ChainSet
from smcmc.core.results.intervals import SimultaneousIntervals, level_label
from smcmc.core.shared.exceptions import InvalidParameterError
from smcmc.core.shared.typing import ArrayLike, FloatArray, IntArray, SeedLike
from smcmc.plotting.layout import DEFAULT_LAYOUT, PlotLayout

logger = logging.getLogger(__name__)

MAX_OVERVIEW_COMPONENTS = 12
OVERVIEW_PAGE_COMPONENTS = 4
_GRID_POINTS = 512


def _panels(n_panels: int, layout: PlotLayout) -> tuple[Figure, list[Axes]]:
    n_rows, n_cols = layout.grid(n_panels)
    fig, axes = plt.subplots(
        n_rows,
        n_cols,
        figsize=layout.figsize(n_rows, n_cols),
        dpi=layout.dpi,
        squeeze=False,
    )
    flat = list(axes.flatten())
    for ax in flat[n_panels:]:
        ax.set_visible(False)
    return fig, flat[:n_panels]


def thin_indices(n: int, max_points: int = 1000, rng: SeedLike = None) -> IntArray:
    """Sorted draw indices to plot, at most ``max_points`` of them.

    The first and last draws are always kept; the rest are sampled without
    replacement.
    """
    if max_points < 2:
        msg = f"max_points must be at least 2, got {max_points}"
        raise InvalidParameterError(msg)
    if n <= max_points:
        return np.arange(n)
    generator = np.random.default_rng(rng)
    interior = generator.choice(np.arange(1, n - 1), size=max_points - 2, replace=False)
    return np.sort(np.concatenate(([0, n - 1], interior)))


def plot_trace(
    chain_set: ChainSet,
    which: Sequence[int] | None = None,
    layout: PlotLayout | None = None,
    max_points: int = 1000,
    fast: bool = True,
    rng: SeedLike = None,
) -> Figure:
    """Create trace plots showing every chain of each selected component.

    Args:
        chain_set: Chains to plot
        which: Component indices; all components by default
        layout: Figure layout
        max_points: Largest number of draws plotted per chain when ``fast``
        fast: Thin long chains to ``max_points`` draws
        rng: Seed or generator for the thinning

    Returns:
        Matplotlib Figure object
    """
    layout = layout or DEFAULT_LAYOUT
    components = chain_set.select(which)
    fig, axes = _panels(len(components), layout)
    generator = np.random.default_rng(rng)

    index_sets = [
        thin_indices(chain.shape[0], max_points, generator) if fast else np.arange(chain.shape[0])
        for chain in chain_set.chains
    ]

    for ax, j in zip(axes, components, strict=True):
        for c, (chain, idx) in enumerate(zip(chain_set.chains, index_sets, strict=True)):
            ax.plot(
                idx + 1,
                chain[idx, j],
                color=layout.chain_color(c),
                alpha=0.9,
                linewidth=0.6,
                label=f"Chain {c + 1}",
            )
        ax.set_ylabel(chain_set.varnames[j], fontsize=9)
        ax.set_xlabel("Iteration", fontsize=9)
        ax.tick_params(labelsize=8)

    if chain_set.n_chains > 1 and axes:
        axes[0].legend(fontsize=8, loc="best")

    fig.suptitle(
        f"Trace plots ({chain_set.n_chains} chain(s), {chain_set.n_samples} samples)",
        fontsize=12,
    )
    fig.tight_layout()
    return fig


def plot_autocorrelation(
    chain_set: ChainSet,
    which: Sequence[int] | None = None,
    layout: PlotLayout | None = None,
    max_lag: int | None = None,
) -> Figure:
    """Per-chain and combined globally-centered autocorrelations.

    Returns:
        Matplotlib Figure object
    """
    layout = layout or DEFAULT_LAYOUT
    components = chain_set.select(which)
    fig, axes = _panels(len(components), layout)

    for ax, j in zip(axes, components, strict=True):
        acf = globally_centered_acf(chain_set.component(j), max_lag=max_lag)
        for curve in acf.individual:
            ax.plot(acf.lags, curve, color=layout.acf_chain_color, alpha=0.5, linewidth=1)
        ax.vlines(acf.lags, 0, acf.combined, color=layout.acf_combined_color, linewidth=1.5)
        ax.axhline(0, color="black", linewidth=0.5)

        n = chain_set.n_samples
        low, high = acf.bounds
        ax.set_ylim(min(-1.96 / np.sqrt(n), low) - 0.05, max(high, 1.0) + 0.05)
        ax.set_ylabel(chain_set.varnames[j], fontsize=9)
        ax.set_xlabel("Lag", fontsize=9)
        ax.tick_params(labelsize=8)

    fig.suptitle("Autocorrelation (globally centered)", fontsize=12)
    fig.tight_layout()
    return fig


def _is_constant(sample: FloatArray) -> bool:
    return bool(np.ptp(sample) == 0.0)


def _draw_density(ax: Axes, sample: FloatArray, pad: bool = True):
    """Plot the kernel density of ``sample`` and return it.

    A constant sample has no density; it is drawn as a unit spike and None
    is returned.
    """
    if _is_constant(sample):
        ax.vlines([float(sample[0])], 0, 1, color="black", linewidth=1.5)
        return None
    kde = kernel_density(sample)
    margin = 3 * kde.factor * float(np.std(sample, ddof=1)) if pad else 0.0
    grid = np.linspace(sample.min() - margin, sample.max() + margin, _GRID_POINTS)
    ax.plot(grid, kde(grid), color="black", linewidth=1)
    return kde


def _shade(
    ax: Axes,
    kde,
    lower: float,
    upper: float,
    color: tuple[float, float, float, float],
) -> None:
    grid = np.linspace(lower, upper, 128)
    ax.fill_between(grid, 0, kde(grid), color=color, linewidth=0)


def add_intervals(
    ax: Axes,
    sample: ArrayLike,
    intervals: SimultaneousIntervals,
    component: int,
    layout: PlotLayout | None = None,
) -> None:
    """Shade the simultaneous intervals of one component under its density.

    The mean band uses ``layout.mean_color`` and each quantile band uses
    ``layout.quantile_color``; a vertical segment marks every estimate.
    """
    layout = layout or DEFAULT_LAYOUT
    sample = np.asarray(sample, dtype=np.float64)
    if _is_constant(sample):
        return
    kde = kernel_density(sample)

    if intervals.lower_mean is not None and intervals.upper_mean is not None:
        _shade(
            ax,
            kde,
            float(intervals.lower_mean[component]),
            float(intervals.upper_mean[component]),
            layout.band(layout.mean_color),
        )
    for i in range(intervals.quantile_levels.size):
        _shade(
            ax,
            kde,
            float(intervals.lower_quantile[i, component]),
            float(intervals.upper_quantile[i, component]),
            layout.band(layout.quantile_color),
        )

    estimates = [float(intervals.mean_estimate[component])]
    estimates.extend(float(v) for v in intervals.quantile_estimate[:, component])
    heights = kde(np.asarray(estimates))
    ax.vlines(estimates, 0, heights, color="black", linewidth=1)


def plot_density(
    chain_set: ChainSet,
    intervals: SimultaneousIntervals | None = None,
    which: Sequence[int] | None = None,
    layout: PlotLayout | None = None,
    rug: bool = False,
) -> Figure:
    """Kernel density of each component, with interval bands when given.

    Constant components are drawn as a spike at their value, without bands.
    """
    layout = layout or DEFAULT_LAYOUT
    components = chain_set.select(which)
    fig, axes = _panels(len(components), layout)

    for ax, j in zip(axes, components, strict=True):
        sample = chain_set.stacked[:, j]
        _draw_density(ax, sample)

        if intervals is not None:
            add_intervals(ax, sample, intervals, j, layout)
        if rug:
            ax.plot(sample, np.zeros_like(sample), "|", color="black", alpha=0.3, markersize=6)

        ax.set_ylim(bottom=0)
        ax.set_xlabel(chain_set.varnames[j], fontsize=9)
        ax.set_ylabel("Density", fontsize=9)
        ax.tick_params(labelsize=8)

    title = "Density"
    if intervals is not None:
        title += f" with {intervals.confidence:.0%} simultaneous intervals"
    fig.suptitle(title, fontsize=12)
    fig.tight_layout()
    return fig


def add_box_intervals(
    ax: Axes,
    intervals: SimultaneousIntervals,
    components: Sequence[int],
    horizontal: bool = False,
    layout: PlotLayout | None = None,
) -> None:
    """Draw quantile bands over a boxplot, one box position per component.

    Box positions are 1, 2, ... in the order of ``components``, matching
    ``Axes.boxplot`` defaults.
    """
    layout = layout or DEFAULT_LAYOUT
    half = 0.2 * min(len(components), 2)
    color = layout.band(layout.quantile_color)

    for position, j in enumerate(components, start=1):
        if len(components) == 1:
            position = 1
        for i in range(intervals.quantile_levels.size):
            lo = float(intervals.lower_quantile[i, j])
            hi = float(intervals.upper_quantile[i, j])
            est = float(intervals.quantile_estimate[i, j])
            if horizontal:
                ax.add_patch(Rectangle((lo, position - half), hi - lo, 2 * half, color=color, linewidth=0))
                ax.plot([est, est], [position - half, position + half], color="black", linewidth=1)
            else:
                ax.add_patch(Rectangle((position - half, lo), 2 * half, hi - lo, color=color, linewidth=0))
                ax.plot([position - half, position + half], [est, est], color="black", linewidth=1)


def plot_overview(
    chain_set: ChainSet,
    intervals: SimultaneousIntervals | None = None,
    which: Sequence[int] | None = None,
    layout: PlotLayout | None = None,
) -> Figure:
    """Trace, ACF and density of each component stacked in three rows.

    Raises:
        InvalidParameterError: If more than 12 components are selected
    """
    layout = layout or DEFAULT_LAYOUT
    components = chain_set.select(which)
    if len(components) > MAX_OVERVIEW_COMPONENTS:
        msg = (
            f"overview shows at most {MAX_OVERVIEW_COMPONENTS} components, "
            f"got {len(components)}; pass `which` to select some"
        )
        raise InvalidParameterError(msg)

    width, height = layout.panel_size
    n_cols = len(components)
    fig, axes = plt.subplots(
        3,
        n_cols,
        figsize=(width * n_cols, height * 3),
        dpi=layout.dpi,
        squeeze=False,
    )
    indices = [thin_indices(chain.shape[0]) for chain in chain_set.chains]

    for col, j in enumerate(components):
        trace_ax, acf_ax, dens_ax = axes[:, col]

        for c, (chain, idx) in enumerate(zip(chain_set.chains, indices, strict=True)):
            trace_ax.plot(idx + 1, chain[idx, j], color=layout.chain_color(c), linewidth=0.6)
        trace_ax.set_title(chain_set.varnames[j], fontsize=10)

        acf = globally_centered_acf(chain_set.component(j))
        for curve in acf.individual:
            acf_ax.plot(acf.lags, curve, color=layout.acf_chain_color, alpha=0.5, linewidth=1)
        acf_ax.vlines(acf.lags, 0, acf.combined, color=layout.acf_combined_color, linewidth=1.5)
        acf_ax.axhline(0, color="black", linewidth=0.5)

        sample = chain_set.stacked[:, j]
        _draw_density(dens_ax, sample, pad=False)
        if intervals is not None:
            add_intervals(dens_ax, sample, intervals, j, layout)
        dens_ax.set_ylim(bottom=0)

        for ax in (trace_ax, acf_ax, dens_ax):
            ax.tick_params(labelsize=7)

    axes[0, 0].set_ylabel("Trace", fontsize=9)
    axes[1, 0].set_ylabel("ACF", fontsize=9)
    axes[2, 0].set_ylabel("Density", fontsize=9)
    title = "Overview"
    if intervals is not None:
        levels = ", ".join(level_label(q) for q in intervals.quantile_levels)
        title += f" ({intervals.confidence:.0%} simultaneous intervals; {levels})"
    fig.suptitle(title, fontsize=12)
    fig.tight_layout()
    return fig


def save_diagnostic_plots(
    chain_set: ChainSet,
    intervals: SimultaneousIntervals | None,
    output_path: Path,
    layout: PlotLayout | None = None,
) -> int:
    """Generate and save all diagnostic plots to a PDF file.

    Pages: trace plots, autocorrelations, densities with intervals, then
    overview pages of up to four components each. Interval bands are left
    out when ``intervals`` is None.

    Returns:
        Number of pages written
    """
    layout = layout or DEFAULT_LAYOUT
    output_path.parent.mkdir(parents=True, exist_ok=True)
    pages = 0

    with PdfPages(output_path) as pdf:
        builders = [
            lambda: plot_trace(chain_set, layout=layout),
            lambda: plot_autocorrelation(chain_set, layout=layout),
            lambda: plot_density(chain_set, intervals, layout=layout),
        ]
        for start in range(0, chain_set.n_dim, OVERVIEW_PAGE_COMPONENTS):
            chunk = list(range(start, min(start + OVERVIEW_PAGE_COMPONENTS, chain_set.n_dim)))
            builders.append(lambda chunk=chunk: plot_overview(chain_set, intervals, chunk, layout))

        for build in builders:
            fig = build()
            pdf.savefig(fig, bbox_inches="tight")
            plt.close(fig)
            pages += 1

    logger.info("saved %d diagnostic page(s) to %s", pages, output_path)
    return pages


__all__ = [
    "MAX_OVERVIEW_COMPONENTS",
    "add_box_intervals",
    "add_intervals",
    "plot_autocorrelation",
    "plot_density",
    "plot_overview",
    "plot_trace",
    "save_diagnostic_plots",
    "thin_indices",
]
