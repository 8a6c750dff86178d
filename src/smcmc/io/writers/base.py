"""Base writer interface and configuration.

This module defines the OutputWriter protocol and common configuration
for all output writers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from smcmc.core.results.intervals import SimultaneousIntervals
    from smcmc.core.results.summary import SummaryStatistics


@dataclass
class WriterConfig:
    """Configuration for output writers.

    Attributes
    ----------
        precision: Decimal precision for floating point values
        scientific_notation_threshold: Use scientific notation for values
            smaller than 10^(-threshold) or larger than 10^threshold
        include_comments: Include explanatory comments in outputs
        overwrite: Overwrite existing files
    """

    precision: int = 6
    scientific_notation_threshold: int = 4
    include_comments: bool = True
    overwrite: bool = True

    # Format-specific options
    csv_delimiter: str = ","
    json_indent: int = 2
    json_sort_keys: bool = False


@runtime_checkable
class OutputWriter(Protocol):
    """Protocol for output writers."""

    def write_intervals(self, intervals: SimultaneousIntervals, path: Path) -> None:
        """Write simultaneous intervals to a file."""
        ...

    def write_summary(self, summary: SummaryStatistics, path: Path) -> None:
        """Write a summary table to a file."""
        ...


def format_float(
    value: float,
    precision: int = 6,
    scientific_threshold: int = 4,
) -> str:
    """Format a float with appropriate notation.

    Uses scientific notation for very large or small values,
    fixed-point otherwise.

    Args:
        value: Value to format
        precision: Number of decimal places
        scientific_threshold: Use scientific notation if |log10(value)| > threshold

    Returns
    -------
        Formatted string
    """
    if value == 0:
        return f"{0:.{precision}f}"

    if math.isinf(value) or math.isnan(value):
        return str(value)

    log_val = math.log10(abs(value))
    if abs(log_val) > scientific_threshold:
        return f"{value:.{precision}e}"
    return f"{value:.{precision}f}"


def format_interval(
    lower: float,
    upper: float,
    precision: int = 6,
    scientific_threshold: int = 4,
) -> str:
    """Format an interval as ``[lower, upper]``."""
    lo = format_float(lower, precision, scientific_threshold)
    hi = format_float(upper, precision, scientific_threshold)
    return f"[{lo}, {hi}]"


def check_writable(path: Path, config: WriterConfig) -> None:
    """Refuse to replace an existing file unless overwriting is enabled."""
    if path.exists() and not config.overwrite:
        msg = f"Output file exists and overwrite is disabled: {path}"
        raise FileExistsError(msg)
    path.parent.mkdir(parents=True, exist_ok=True)
