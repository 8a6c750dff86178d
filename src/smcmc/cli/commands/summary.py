"""Summary command implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from smcmc.cli.callbacks import levels_callback, names_callback
from smcmc.cli.common import build_config, command_session, load_chain_set
from smcmc.services import ReportService
from smcmc.ui import console, print_summary, show_header, success, summary_table, warning
from smcmc.ui.tables import multivariate_rows


def summary_command(
    chains: Annotated[
        list[Path],
        typer.Argument(help="Chain files (.npy, .npz, .csv)", exists=True, dir_okay=False),
    ],
    epsilon: Annotated[
        float | None,
        typer.Option("--epsilon", "-e", help="Relative precision for the minimum ESS"),
    ] = None,
    alpha: Annotated[
        float | None,
        typer.Option("--alpha", "-a", help="1 - confidence level"),
    ] = None,
    quantiles: Annotated[
        str | None,
        typer.Option(
            "--quantiles",
            "-q",
            help="Comma-separated quantile levels, e.g. 0.1,0.9",
            callback=levels_callback,
        ),
    ] = None,
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
        typer.Option("--output", "-o", help="Directory for summary files", file_okay=False),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Echo log records")] = False,
    log_file: Annotated[Path | None, typer.Option("--log-file", help="Write a log file")] = None,
) -> None:
    """Print means, MCSE, quantiles, ESS and Gelman-Rubin for each component.

    A single [green]*[/] marks components whose ESS reaches the minimum ESS;
    [green]***[/] marks an adequate multivariate ESS.

    Examples
    --------
      $ smcmc summary chain1.npy chain2.npy --epsilon 0.05
    """
    with command_session("Summary", verbose, log_file):
        cfg = build_config(
            config,
            {
                "summary": {"epsilon": epsilon, "alpha": alpha, "quantiles": quantiles},
                "batching": {"batch_size": batch_size},
            },
        )
        service = ReportService(cfg)
        chain_set = load_chain_set(chains, names, service)
        result = service.summarize(chain_set)

        show_header("Summary")
        console.print(summary_table(result))
        print_summary(multivariate_rows(result), title="Multivariate")
        for message in result.get_warnings():
            warning(message)

        if output is not None:
            for path in service.write(result, None, output):
                success(f"Wrote [path]{path}[/path]")
