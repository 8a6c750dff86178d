"""Typer callbacks for CLI."""

import typer

from smcmc.ui import VERSION, console


def version_callback(value: bool | None) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"smcmc [bold]{VERSION}[/bold]")
        raise typer.Exit


def levels_callback(value: str | None) -> list[float] | None:
    """Parse a comma-separated list of quantile levels, e.g. ``0.1,0.9``."""
    if value is None:
        return None
    try:
        levels = [float(item) for item in value.split(",") if item.strip()]
    except ValueError as exc:
        msg = f"quantile levels must be numbers separated by commas, got {value!r}"
        raise typer.BadParameter(msg) from exc
    for q in levels:
        if not 0.0 < q < 1.0:
            msg = f"quantile levels must lie in (0, 1), got {q}"
            raise typer.BadParameter(msg)
    return levels


def names_callback(value: str | None) -> list[str] | None:
    """Parse comma-separated variable names."""
    if value is None:
        return None
    return [name.strip() for name in value.split(",")]
