"""Console configuration and theme for the smcmc UI.

This module provides the central console instance and theme used throughout
the command line interface.
"""

import os
import sys

from rich.console import Console
from rich.theme import Theme

from smcmc import __version__ as _PKG_VERSION

SMCMC_THEME = Theme(
    {
        # --- Semantic Status ---
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "info": "cyan",
        "neutral": "dim white",
        # --- UI Structure ---
        "header": "bold cyan",
        "subheader": "bold white",
        "panel.border": "blue",
        # --- Data & Values ---
        "key": "cyan",
        "value": "green",
        "metric": "bold green",
        "number": "green",
        "path": "blue underline",
        "code": "bold magenta",
        "dim": "dim",
        "emphasis": "bold",
    }
)

# Single console instance for entire application
console = Console(theme=SMCMC_THEME)

VERSION = _PKG_VERSION
REPO_URL = "https://github.com/smcmc/smcmc"


class Verbosity:
    """Verbosity levels for UI output."""

    QUIET = 0  # Errors only
    NORMAL = 1
    VERBOSE = 2  # Log records echoed to the console


_verbosity = Verbosity.NORMAL


def set_verbosity(level: int) -> None:
    """Set the global verbosity level.

    Args:
        level: Verbosity level (0=QUIET, 1=NORMAL, 2=VERBOSE)
    """
    global _verbosity
    _verbosity = level
    console.quiet = level == Verbosity.QUIET


def get_verbosity() -> int:
    """Get the current verbosity level."""
    return _verbosity


_EMOJI_DISABLED = os.getenv("SMCMC_NO_EMOJI", "").lower() in {"1", "true", "yes"}


def _supports_emoji() -> bool:
    if _EMOJI_DISABLED:
        return False
    enc = getattr(console, "encoding", None) or sys.getdefaultencoding()
    return enc is None or "utf" in enc.lower()


def icon(name: str) -> str:
    """Return a UI icon string based on terminal capabilities.

    Names: check, warn, error, info, bullet, separator
    """
    use_emoji = _supports_emoji()
    mapping = {
        "check": "✓" if use_emoji else "+",
        "warn": "⚠" if use_emoji else "!",
        "error": "✗" if use_emoji else "x",
        "info": "▸" if use_emoji else ">",
        "bullet": "‣" if use_emoji else "-",
        "separator": "━" if use_emoji else "-",
    }
    return mapping.get(name, mapping["bullet"])


def hr(width: int | None = None, style: str = "dim", char: str | None = None) -> str:
    """Return a horizontal rule string sized to the console width."""
    w = width or max(20, (console.width or 80) - 2)
    ch = char or icon("separator")
    return f"[{style}]{ch * w}[/{style}]"


__all__ = [
    "REPO_URL",
    "SMCMC_THEME",
    "VERSION",
    "Verbosity",
    "console",
    "get_verbosity",
    "hr",
    "icon",
    "set_verbosity",
]
