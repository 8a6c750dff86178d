"""Main Typer application for smcmc.

Creates the application and registers the commands from the commands/
subpackage.
"""

from typing import Annotated

import typer

from smcmc.cli.callbacks import version_callback
from smcmc.cli.commands import (
    info_command,
    init_command,
    intervals_command,
    plot_command,
    summary_command,
)

app = typer.Typer(
    name="smcmc",
    help="smcmc - Simultaneous confidence intervals and diagnostics for MCMC output",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """smcmc - Simulation error of MCMC output.

    Joint intervals for means and quantiles, effective sample sizes and
    Gelman-Rubin diagnostics from one or more chains.
    """


app.command(name="summary")(summary_command)
app.command(name="intervals")(intervals_command)
app.command(name="plot")(plot_command)
app.command(name="init")(init_command)
app.command(name="info")(info_command)
