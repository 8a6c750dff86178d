"""Plot command implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from smcmc.cli.callbacks import levels_callback, names_callback
from smcmc.cli.common import build_config, command_session, load_chain_set
from smcmc.core.shared.exceptions import DegenerateDensityError
from smcmc.services import ReportService
from smcmc.ui import success, warning


def plot_command(
    chains: Annotated[
        list[Path],
        typer.Argument(help="Chain files (.npy, .npz, .csv)", exists=True, dir_okay=False),
    ],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="PDF file to write", dir_okay=False),
    ] = Path("diagnostics.pdf"),
    quantiles: Annotated[
        str | None,
        typer.Option(
            "--quantiles",
            "-q",
            help="Comma-separated quantile levels, e.g. 0.1,0.9",
            callback=levels_callback,
        ),
    ] = None,
    alpha: Annotated[
        float | None,
        typer.Option("--alpha", "-a", help="1 - simultaneous confidence level"),
    ] = None,
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed", min=0)] = None,
    names: Annotated[
        str | None,
        typer.Option("--names", help="Comma-separated variable names", callback=names_callback),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="TOML configuration file", exists=True, dir_okay=False),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Echo log records")] = False,
) -> None:
    """Write trace, autocorrelation and density plots with intervals to a PDF.

    Examples
    --------
      $ smcmc plot chain1.npy chain2.npy --output report.pdf
    """
    import matplotlib

    matplotlib.use("Agg")

    from smcmc.plotting import save_diagnostic_plots

    with command_session("Plot", verbose):
        cfg = build_config(
            config,
            {"intervals": {"quantiles": quantiles, "alpha": alpha, "seed": seed}},
        )
        service = ReportService(cfg)
        chain_set = load_chain_set(chains, names, service)
        try:
            intervals = service.intervals(chain_set)
        except DegenerateDensityError as exc:
            warning(f"Plotting without intervals: {exc}")
            intervals = None
        pages = save_diagnostic_plots(chain_set, intervals, output)
        success(f"Wrote {pages} page(s) to [path]{output}[/path]")
