"""Rich tables for summaries and simultaneous intervals."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich import box
from rich.table import Table

from smcmc.core.results.intervals import level_label
from smcmc.io.writers.base import format_float, format_interval
from smcmc.ui.console import console

if TYPE_CHECKING:
    from smcmc.core.results.intervals import SimultaneousIntervals
    from smcmc.core.results.summary import SummaryStatistics

__all__ = [
    "create_table",
    "intervals_table",
    "print_summary",
    "summary_table",
]


def create_table(title: str | None = None, show_header: bool = True) -> Table:
    """Create a standard table with consistent styling.

    Args:
        title: Optional table title
        show_header: Whether to show table header

    Returns
    -------
        Configured Table instance
    """
    return Table(
        title=title,
        title_style="header" if title else None,
        box=box.ROUNDED,
        show_header=show_header,
        header_style="bold cyan",
        border_style="dim",
    )


def print_summary(items: dict[str, Any], title: str = "Summary") -> None:
    """Print a standard two-column summary table."""
    table = create_table(title, show_header=False)
    table.add_column("Item", style="metric")
    table.add_column("Value", style="value")

    for key, value in items.items():
        table.add_row(key, str(value))

    console.print(table)


def summary_table(summary: SummaryStatistics, precision: int = 4) -> Table:
    """Per-component summary with ``*`` marking an adequate ESS."""
    table = create_table(f"Summary ({summary.n_chains} chain(s), b = {summary.batch_size})")
    table.add_column("Component", style="key")
    for header in ("Mean", "MCSE", "SD"):
        table.add_column(header, justify="right")
    for level in summary.quantile_levels:
        table.add_column(level_label(level), justify="right")
    table.add_column("ESS", justify="right")
    table.add_column("G-R", justify="right")
    table.add_column("", justify="center")

    for comp in summary.components:
        quantiles = [format_float(comp.quantiles[q], precision) for q in summary.quantile_levels]
        table.add_row(
            comp.name,
            format_float(comp.mean, precision),
            format_float(comp.mcse, precision),
            format_float(comp.sd, precision),
            *quantiles,
            str(comp.ess),
            f"{comp.gelman_rubin:.5f}",
            "[success]*[/success]" if comp.adequate else "",
        )
    return table


def multivariate_rows(summary: SummaryStatistics) -> dict[str, str]:
    """Key/value rows describing the joint diagnostics."""
    marker = "[success]***[/success]" if summary.multivariate_adequate else ""
    return {
        "Samples per chain": str(summary.n_samples),
        "Chains": str(summary.n_chains),
        "Batch size": str(summary.batch_size),
        "Batches per chain": f"{summary.n_batches_per_chain:g}",
        "Multivariate ESS": f"{summary.multivariate_ess} {marker}".strip(),
        "Minimum ESS": str(summary.minimum_ess),
        "Minimum multivariate ESS": str(summary.minimum_multivariate_ess),
        "Multivariate G-R": f"{summary.multivariate_gelman_rubin:.5f}",
    }


def intervals_table(intervals: SimultaneousIntervals, precision: int = 4) -> Table:
    """One row per component and statistic with its simultaneous interval."""
    table = create_table(
        f"{intervals.confidence:.0%} simultaneous intervals (z* = {intervals.critical_value:.4f})"
    )
    table.add_column("Component", style="key")
    table.add_column("Statistic")
    table.add_column("Estimate", justify="right")
    table.add_column("Interval", justify="right", style="value")

    for row in intervals.to_frame().itertuples(index=False):
        table.add_row(
            row.component,
            row.statistic,
            format_float(row.estimate, precision),
            format_interval(row.lower, row.upper, precision),
        )
    return table
