"""Result container for simultaneous confidence intervals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from smcmc.core.shared.typing import FloatArray


def level_label(level: float) -> str:
    """Short label for a quantile level, e.g. ``q0.1``."""
    return f"q{level:g}"


@dataclass(frozen=True)
class SimultaneousIntervals:
    """Simultaneous intervals for means and quantiles of every component.

    Quantile matrices have one row per level (caller order) and one column
    per component. The mean bounds are None when the means were excluded
    from the simultaneous family; the mean estimate is always reported.

    Attributes:
        alpha: 1 - simultaneous confidence level
        quantile_levels: Levels, shape (|Q|,)
        varnames: Component names, length p
        critical_value: Calibrated z* shared by every interval
        mean_estimate: Column means, shape (p,)
        quantile_estimate: Empirical quantiles, shape (|Q|, p)
        lower_mean: Lower mean bounds, shape (p,) or None
        upper_mean: Upper mean bounds, shape (p,) or None
        lower_quantile: Lower quantile bounds, shape (|Q|, p)
        upper_quantile: Upper quantile bounds, shape (|Q|, p)
        method: Calibration method used
        n_draws: Monte Carlo draws (None for the analytic method)
        batch_size: Batch size of the covariance estimate
        n: Number of stacked draws the intervals are scaled by
    """

    alpha: float
    quantile_levels: FloatArray
    varnames: tuple[str, ...]
    critical_value: float
    mean_estimate: FloatArray
    quantile_estimate: FloatArray
    lower_mean: FloatArray | None
    upper_mean: FloatArray | None
    lower_quantile: FloatArray
    upper_quantile: FloatArray
    method: str = "monte_carlo"
    n_draws: int | None = None
    batch_size: int = 1
    n: int = 0

    @property
    def include_means(self) -> bool:
        return self.lower_mean is not None

    @property
    def n_dim(self) -> int:
        return len(self.varnames)

    @property
    def confidence(self) -> float:
        return 1.0 - self.alpha

    def mean_half_widths(self) -> FloatArray | None:
        if self.lower_mean is None or self.upper_mean is None:
            return None
        return 0.5 * (self.upper_mean - self.lower_mean)

    def quantile_half_widths(self) -> FloatArray:
        return 0.5 * (self.upper_quantile - self.lower_quantile)

    def component(self, index: int) -> dict[str, Any]:
        """Estimates and bounds for one component as plain Python values."""
        out: dict[str, Any] = {
            "name": self.varnames[index],
            "mean": float(self.mean_estimate[index]),
            "quantiles": {
                float(q): (
                    float(self.quantile_estimate[i, index]),
                    float(self.lower_quantile[i, index]),
                    float(self.upper_quantile[i, index]),
                )
                for i, q in enumerate(self.quantile_levels)
            },
        }
        if self.lower_mean is not None and self.upper_mean is not None:
            out["mean_interval"] = (float(self.lower_mean[index]), float(self.upper_mean[index]))
        return out

    def to_frame(self) -> pd.DataFrame:
        """Long-format table: one row per (component, statistic)."""
        rows = []
        for j, name in enumerate(self.varnames):
            if self.lower_mean is not None and self.upper_mean is not None:
                rows.append(
                    {
                        "component": name,
                        "statistic": "mean",
                        "level": np.nan,
                        "estimate": self.mean_estimate[j],
                        "lower": self.lower_mean[j],
                        "upper": self.upper_mean[j],
                    }
                )
            for i, q in enumerate(self.quantile_levels):
                rows.append(
                    {
                        "component": name,
                        "statistic": level_label(q),
                        "level": q,
                        "estimate": self.quantile_estimate[i, j],
                        "lower": self.lower_quantile[i, j],
                        "upper": self.upper_quantile[i, j],
                    }
                )
        return pd.DataFrame(
            rows, columns=["component", "statistic", "level", "estimate", "lower", "upper"]
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation."""
        return {
            "alpha": self.alpha,
            "quantile_levels": self.quantile_levels.tolist(),
            "varnames": list(self.varnames),
            "critical_value": self.critical_value,
            "method": self.method,
            "n_draws": self.n_draws,
            "batch_size": self.batch_size,
            "n": self.n,
            "mean_estimate": self.mean_estimate.tolist(),
            "quantile_estimate": self.quantile_estimate.tolist(),
            "lower_mean": None if self.lower_mean is None else self.lower_mean.tolist(),
            "upper_mean": None if self.upper_mean is None else self.upper_mean.tolist(),
            "lower_quantile": self.lower_quantile.tolist(),
            "upper_quantile": self.upper_quantile.tolist(),
        }


__all__ = ["SimultaneousIntervals", "level_label"]
