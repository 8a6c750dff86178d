"""JSON output writer for smcmc results.

Produces machine-readable JSON files with enough metadata to reproduce
the run.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np

from smcmc.io.writers.base import WriterConfig, check_writable

if TYPE_CHECKING:
    from smcmc.core.results.intervals import SimultaneousIntervals
    from smcmc.core.results.summary import SummaryStatistics

SCHEMA_VERSION = "1.0.0"


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types and Path objects."""

    def default(self, o: Any) -> Any:
        """Convert numpy types and Path objects to Python types."""
        if isinstance(o, np.integer):
            return int(o)
        if isinstance(o, np.floating):
            return float(o)
        if isinstance(o, np.bool_):
            return bool(o)
        if isinstance(o, np.ndarray):
            return o.tolist()
        if isinstance(o, datetime):
            return o.isoformat()
        if isinstance(o, Path):
            return str(o)
        return super().default(o)


class JSONWriter:
    """Writer for JSON output files.

    - intervals.json: critical value, estimates and bounds
    - summary.json: per-component and multivariate diagnostics
    """

    def __init__(self, config: WriterConfig | None = None) -> None:
        """Initialize JSON writer.

        Args:
            config: Writer configuration. Defaults to standard settings.
        """
        self.config = config or WriterConfig()

    def write_intervals(self, intervals: SimultaneousIntervals, path: Path) -> None:
        """Write simultaneous intervals to JSON.

        Args:
            intervals: SimultaneousIntervals to serialize
            path: Output file path
        """
        output = {
            "schema_version": SCHEMA_VERSION,
            "generated": datetime.now(),
            "kind": "simultaneous_intervals",
            **intervals.to_dict(),
        }
        self._write_json(output, path)

    def write_summary(self, summary: SummaryStatistics, path: Path) -> None:
        """Write summary statistics to JSON.

        Args:
            summary: SummaryStatistics to serialize
            path: Output file path
        """
        output = {
            "schema_version": SCHEMA_VERSION,
            "generated": datetime.now(),
            "kind": "summary",
            **summary.to_dict(),
            "warnings": summary.get_warnings(),
        }
        self._write_json(output, path)

    def _write_json(self, data: dict[str, Any], path: Path) -> None:
        check_writable(path, self.config)
        with path.open("w") as f:
            json.dump(
                data,
                f,
                cls=NumpyEncoder,
                indent=self.config.json_indent,
                sort_keys=self.config.json_sort_keys,
            )
            f.write("\n")
