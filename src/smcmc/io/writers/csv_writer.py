"""CSV writer for smcmc results.

Interval tables are written in long format (one row per component and
statistic) for easy import into pandas, R or a spreadsheet.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

from smcmc.io.writers.base import WriterConfig, check_writable, format_float

if TYPE_CHECKING:
    from pathlib import Path

    from smcmc.core.results.intervals import SimultaneousIntervals
    from smcmc.core.results.summary import SummaryStatistics


class CSVWriter:
    """Writer for CSV format outputs."""

    def __init__(self, config: WriterConfig | None = None) -> None:
        """Initialize CSV writer.

        Args:
            config: Writer configuration (uses defaults if None)
        """
        self.config = config or WriterConfig()

    def _fmt(self, value: float) -> str:
        if pd.isna(value):
            return ""
        return format_float(
            float(value),
            self.config.precision,
            self.config.scientific_notation_threshold,
        )

    def write_intervals(self, intervals: SimultaneousIntervals, path: Path) -> None:
        """Write simultaneous intervals in long format.

        Args:
            intervals: SimultaneousIntervals object
            path: Output file path
        """
        check_writable(path, self.config)
        frame = intervals.to_frame()

        with path.open("w", newline="") as f:
            if self.config.include_comments:
                f.write("# smcmc simultaneous confidence intervals\n")
                f.write(f"# confidence: {intervals.confidence:g}\n")
                f.write(f"# critical value: {intervals.critical_value:.6f}\n")
                f.write(f"# batch size: {intervals.batch_size}, n: {intervals.n}\n")
                f.write("#\n")
            frame.to_csv(
                f,
                sep=self.config.csv_delimiter,
                index=False,
                float_format=f"%.{self.config.precision}g",
            )

    def write_summary(self, summary: SummaryStatistics, path: Path) -> None:
        """Write the per-component summary table.

        Args:
            summary: SummaryStatistics object
            path: Output file path
        """
        check_writable(path, self.config)
        frame = summary.to_frame()
        numeric = frame.select_dtypes("number").columns.difference(["ESS"])
        for column in numeric:
            frame[column] = frame[column].map(self._fmt)

        with path.open("w", newline="") as f:
            if self.config.include_comments:
                f.write("# smcmc summary\n")
                f.write(
                    f"# n = {summary.n_samples}, chains = {summary.n_chains}, "
                    f"batch size = {summary.batch_size}\n"
                )
                f.write(
                    f"# multivariate ESS = {summary.multivariate_ess} "
                    f"(minimum {summary.minimum_multivariate_ess}), "
                    f"G-R = {summary.multivariate_gelman_rubin:.5f}\n"
                )
                f.write("#\n")
            frame.to_csv(f, sep=self.config.csv_delimiter, index_label="component")
