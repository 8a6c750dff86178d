"""Intervals command implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

import typer

from smcmc.cli.callbacks import levels_callback, names_callback
from smcmc.cli.common import build_config, command_session, load_chain_set
from smcmc.services import ReportService
from smcmc.ui import console, intervals_table, show_header, success


def intervals_command(
    chains: Annotated[
        list[Path],
        typer.Argument(help="Chain files (.npy, .npz, .csv)", exists=True, dir_okay=False),
    ],
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
    no_means: Annotated[
        bool,
        typer.Option("--no-means", help="Exclude the means from the simultaneous family"),
    ] = False,
    method: Annotated[
        str | None,
        typer.Option("--method", "-m", help="Calibration: monte_carlo or analytic"),
    ] = None,
    draws: Annotated[
        int | None,
        typer.Option("--draws", help="Monte Carlo draws for the critical value", min=1),
    ] = None,
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed", min=0)] = None,
    batch_size: Annotated[
        int | None,
        typer.Option("--batch-size", "-b", help="Fixed batch size", min=1),
    ] = None,
    names: Annotated[
        str | None,
        typer.Option("--names", help="Comma-separated variable names", callback=names_callback),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="TOML configuration file", exists=True, dir_okay=False),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Directory for interval files", file_okay=False),
    ] = None,
    output_format: Annotated[
        Literal["json", "csv"] | None,
        typer.Option("--format", "-f", help="Output format (default: all configured formats)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Echo log records")] = False,
    log_file: Annotated[Path | None, typer.Option("--log-file", help="Write a log file")] = None,
) -> None:
    """Compute simultaneous confidence intervals for means and quantiles.

    Examples
    --------
      $ smcmc intervals chain.npy --quantiles 0.05,0.5,0.95 --seed 1

      $ smcmc intervals a.csv b.csv --no-means -o results --format csv
    """
    with command_session("Intervals", verbose, log_file):
        cfg = build_config(
            config,
            {
                "intervals": {
                    "quantiles": quantiles,
                    "alpha": alpha,
                    "include_means": False if no_means else None,
                    "method": method,
                    "n_draws": draws,
                    "seed": seed,
                },
                "batching": {"batch_size": batch_size},
                "output": {"formats": [output_format] if output_format else None},
            },
        )
        service = ReportService(cfg)
        chain_set = load_chain_set(chains, names, service)
        result = service.intervals(chain_set)

        show_header("Simultaneous intervals")
        console.print(intervals_table(result))

        if output is not None:
            for path in service.write(None, result, output):
                success(f"Wrote [path]{path}[/path]")
