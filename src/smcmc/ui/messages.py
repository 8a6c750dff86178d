"""UI messages and status indicators."""

from __future__ import annotations

from pathlib import Path

from rich.panel import Panel

from smcmc.ui.console import console, icon
from smcmc.ui.logging import log, log_section

__all__ = [
    "bullet",
    "error",
    "info",
    "show_error_with_details",
    "show_file_not_found",
    "show_header",
    "spacer",
    "success",
    "warning",
]


def show_header(text: str, do_log: bool = True) -> None:
    """Display a prominent section header."""
    rule = icon("separator") * 60
    console.print(f"[header]{rule}[/header]")
    console.print(f"[header]  {text}[/header]")
    console.print(f"[header]{rule}[/header]")
    if do_log:
        log_section(text)


def success(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Display a success message."""
    spaces = "  " * indent
    console.print(f"{spaces}[success]{icon('check')}[/success] {message}")
    if do_log:
        log(message)


def warning(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Display a warning message."""
    spaces = "  " * indent
    console.print(f"{spaces}[warning]{icon('warn')}[/warning]  {message}")
    if do_log:
        log(message, level="warning")


def error(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Display an error message."""
    spaces = "  " * indent
    console.print(f"{spaces}[error]{icon('error')}[/error] {message}")
    if do_log:
        log(message, level="error")


def info(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Display an info message."""
    spaces = "  " * indent
    console.print(f"{spaces}[dim]{icon('info')}[/dim] {message}")
    if do_log:
        log(message)


def bullet(message: str, indent: int = 1, style: str = "cyan") -> None:
    """Display a bullet point item."""
    spaces = "  " * indent
    console.print(f"{spaces}[{style}]{icon('bullet')}[/{style}] {message}")


def spacer() -> None:
    """Print an empty line for visual spacing."""
    console.print()


def show_error_with_details(
    context: str,
    err: Exception,
    suggestion: str | None = None,
) -> None:
    """Display an error with details in a panel."""
    error(f"{context} failed")
    console.print(
        Panel(
            f"[error]{type(err).__name__}[/error]: {err!s}",
            title="Error Details",
            border_style="red",
        )
    )
    if suggestion:
        info(f"Suggestion: {suggestion}")


def show_file_not_found(filepath: Path) -> None:
    """Show a file-not-found error listing candidate chain files nearby."""
    error(f"File not found: [path]{filepath}[/path]")

    parent = filepath.parent if filepath.parent.exists() else Path()
    pattern = f"*{filepath.suffix}" if filepath.suffix else "*"
    matching_files = sorted(parent.glob(pattern))
    if matching_files:
        console.print(f"\n[dim]Available {pattern} files in {parent}:[/dim]")
        for file in matching_files[:10]:
            console.print(f"  {icon('bullet')} [green]{file.name}[/]")
        if len(matching_files) > 10:
            console.print(f"  [dim]... and {len(matching_files) - 10} more[/]")
