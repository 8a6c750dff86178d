"""Info command implementation."""

from __future__ import annotations

import sys

from smcmc.ui import console


def info_command() -> None:
    """Show version information for smcmc and its numerical stack."""
    import matplotlib
    import numpy as np
    import pandas as pd
    import scipy

    from smcmc import __version__

    console.print("[bold]smcmc System Information[/bold]\n")
    console.print(f"[green]smcmc version:[/green] {__version__}")
    console.print(f"[green]Python version:[/green] {sys.version.split()[0]}")
    console.print(f"[green]NumPy version:[/green] {np.__version__}")
    console.print(f"[green]SciPy version:[/green] {scipy.__version__}")
    console.print(f"[green]pandas version:[/green] {pd.__version__}")
    console.print(f"[green]Matplotlib version:[/green] {matplotlib.__version__}")
