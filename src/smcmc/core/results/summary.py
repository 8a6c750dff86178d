"""Result containers for the per-component and multivariate summary."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from smcmc.core.results.intervals import level_label


@dataclass(frozen=True)
class ComponentStatistics:
    """Summary of a single component.

    Attributes:
        name: Component name
        mean: Mean of the stacked draws
        mcse: Monte Carlo standard error of the mean (batch means)
        sd: Square root of the average within-chain variance
        quantiles: Empirical quantile per requested level
        ess: Effective sample size, floored
        gelman_rubin: sqrt(1 + m / ESS)
        adequate: ESS reaches the minimum ESS for the requested precision
    """

    name: str
    mean: float
    mcse: float
    sd: float
    quantiles: dict[float, float]
    ess: int
    gelman_rubin: float
    adequate: bool


@dataclass(frozen=True)
class SummaryStatistics:
    """Summary of a chain set, as reported by ``compute_summary_statistics``."""

    n_samples: int
    n_dim: int
    n_chains: int
    batch_size: int
    stacked_rows: int
    components: list[ComponentStatistics]
    multivariate_ess: int
    multivariate_gelman_rubin: float
    minimum_ess: int
    minimum_multivariate_ess: int
    epsilon: float
    alpha: float
    quantile_levels: tuple[float, ...] = field(default_factory=tuple)

    @property
    def n_batches(self) -> float:
        return self.stacked_rows / self.batch_size

    @property
    def n_batches_per_chain(self) -> float:
        return self.stacked_rows / (self.batch_size * self.n_chains)

    @property
    def multivariate_adequate(self) -> bool:
        return self.multivariate_ess >= self.minimum_multivariate_ess

    def to_frame(self) -> pd.DataFrame:
        """Per-component table indexed by component name."""
        records = []
        for comp in self.components:
            record: dict[str, Any] = {"Mean": comp.mean, "MCSE": comp.mcse, "SD": comp.sd}
            for level in self.quantile_levels:
                record[level_label(level)] = comp.quantiles[level]
            record["ESS"] = comp.ess
            record["G-R"] = comp.gelman_rubin
            record["Signif."] = "*" if comp.adequate else ""
            records.append(record)
        return pd.DataFrame(records, index=[c.name for c in self.components])

    def get_warnings(self) -> list[str]:
        """Messages for components and the joint ESS that miss their minimum."""
        warnings = [
            f"{comp.name}: ESS = {comp.ess} is below the minimum {self.minimum_ess} "
            f"for epsilon = {self.epsilon:g}, alpha = {self.alpha:g}"
            for comp in self.components
            if not comp.adequate
        ]
        if not self.multivariate_adequate:
            warnings.append(
                f"Multivariate ESS = {self.multivariate_ess} is below the minimum "
                f"{self.minimum_multivariate_ess}. Run the chains longer."
            )
        return warnings

    def to_dict(self) -> dict[str, Any]:
        return {
            "n_samples": self.n_samples,
            "n_dim": self.n_dim,
            "n_chains": self.n_chains,
            "batch_size": self.batch_size,
            "stacked_rows": self.stacked_rows,
            "n_batches": self.n_batches,
            "n_batches_per_chain": self.n_batches_per_chain,
            "epsilon": self.epsilon,
            "alpha": self.alpha,
            "quantile_levels": list(self.quantile_levels),
            "components": [
                {
                    "name": c.name,
                    "mean": c.mean,
                    "mcse": c.mcse,
                    "sd": c.sd,
                    "quantiles": {level_label(q): v for q, v in c.quantiles.items()},
                    "ess": c.ess,
                    "gelman_rubin": c.gelman_rubin,
                    "adequate": c.adequate,
                }
                for c in self.components
            ],
            "multivariate_ess": self.multivariate_ess,
            "multivariate_gelman_rubin": self.multivariate_gelman_rubin,
            "minimum_ess": self.minimum_ess,
            "minimum_multivariate_ess": self.minimum_multivariate_ess,
            "multivariate_adequate": self.multivariate_adequate,
        }


__all__ = ["ComponentStatistics", "SummaryStatistics"]
