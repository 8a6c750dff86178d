"""Init command implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from smcmc.io.config import generate_default_config
from smcmc.ui import console, error, info, success


def init_command(
    path: Annotated[
        Path,
        typer.Argument(
            help="Path for new configuration file",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = Path("smcmc.toml"),
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite existing file",
        ),
    ] = False,
) -> None:
    """Generate a default configuration file.

    Examples
    --------
      Create default config:
        $ smcmc init

      Overwrite existing config:
        $ smcmc init my_run.toml --force
    """
    if path.exists() and not force:
        error(f"File already exists: [path]{path}[/path]")
        info("Use [code]--force[/code] to overwrite")
        raise typer.Exit(1)

    path.write_text(generate_default_config())
    success(f"Created configuration file: [path]{path}[/path]")

    console.print("\n[bold cyan]Configuration includes:[/]")
    console.print("  [green]intervals[/]  quantile levels, alpha, calibration")
    console.print("  [green]summary[/]    epsilon and alpha of the minimum ESS")
    console.print("  [green]batching[/]   batch size rule")
    console.print("  [green]output[/]     formats and directories")
    console.print(f"\nRun: [cyan]smcmc intervals chain.npy --config {path.name}[/]")
