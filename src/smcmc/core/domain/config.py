"""Configuration models for smcmc.

Every section rejects unknown keys so typos in a TOML file are reported
instead of being ignored.
"""

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

CalibrationName = Literal["monte_carlo", "analytic"]
BatchMethodName = Literal["sqrt", "cuberoot", "ar1"]
OutputFormat = Literal["csv", "json"]
LogFormat = Literal["text", "json"]

UnitInterval = Annotated[float, Field(gt=0.0, lt=1.0)]


def _check_levels(levels: list[float]) -> list[float]:
    for q in levels:
        if not 0.0 < q < 1.0:
            msg = f"quantile levels must lie in (0, 1), got {q}"
            raise ValueError(msg)
    if len(set(levels)) != len(levels):
        msg = f"quantile levels must be unique, got {levels}"
        raise ValueError(msg)
    return levels


class IntervalConfig(BaseModel):
    """Configuration of the simultaneous confidence intervals.

    Example:
        [intervals]
        quantiles = [0.1, 0.9]
        alpha = 0.05
        include_means = true
        method = "monte_carlo"
        n_draws = 20000
        seed = 42
    """

    model_config = ConfigDict(extra="forbid")

    quantiles: list[float] = Field(
        default_factory=lambda: [0.1, 0.9],
        description="Quantile levels estimated simultaneously with the means.",
    )
    alpha: UnitInterval = Field(default=0.05, description="1 - simultaneous confidence level.")
    include_means: bool = Field(default=True, description="Include component means.")
    method: CalibrationName = Field(
        default="monte_carlo",
        description="Critical value calibration: Monte Carlo (default) or analytic bisection.",
    )
    n_draws: Annotated[int, Field(gt=0)] = Field(
        default=20_000,
        description="Monte Carlo draws used to calibrate the critical value.",
    )
    seed: Annotated[int, Field(ge=0)] | None = Field(
        default=None,
        description="Random seed for reproducible calibration.",
    )
    tol: Annotated[float, Field(gt=0)] = Field(
        default=1e-3,
        description="Probability tolerance of the analytic bisection.",
    )

    @field_validator("quantiles")
    @classmethod
    def validate_quantiles(cls, v: list[float]) -> list[float]:
        return _check_levels(v)


class SummaryConfig(BaseModel):
    """Configuration of the ESS / Gelman-Rubin summary."""

    model_config = ConfigDict(extra="forbid")

    epsilon: UnitInterval = Field(
        default=0.10,
        description="Relative volume of the confidence region used for the minimum ESS.",
    )
    alpha: UnitInterval = Field(default=0.05, description="Confidence level of the region is 1 - alpha.")
    quantiles: list[float] = Field(
        default_factory=lambda: [0.1, 0.9],
        description="Quantile levels reported for each component.",
    )

    @field_validator("quantiles")
    @classmethod
    def validate_quantiles(cls, v: list[float]) -> list[float]:
        return _check_levels(v)


class BatchConfig(BaseModel):
    """Configuration of chain stacking and batch sizes."""

    model_config = ConfigDict(extra="forbid")

    batch_size: Annotated[int, Field(ge=1)] | None = Field(
        default=None,
        description="Fixed batch size. Computed from the chains when unset.",
    )
    method: BatchMethodName = Field(default="sqrt", description="Rule for the computed batch size.")
    align_batches: bool = Field(
        default=False,
        description="Drop leading draws so that no batch straddles two chains.",
    )


class OutputConfig(BaseModel):
    """Configuration for output file generation."""

    model_config = ConfigDict(extra="forbid")

    directory: Path = Field(default=Path("Diagnostics"), description="Output directory for results.")
    formats: list[OutputFormat] = Field(
        default=["json", "csv"],
        description="Output formats for intervals and summaries.",
    )
    save_figures: bool = Field(default=True, description="Write the diagnostic PDF.")
    log_format: LogFormat = Field(
        default="text",
        description="Format for log file: text (human-readable) or json (structured).",
    )


class SmcmcConfig(BaseModel):
    """Top-level smcmc configuration.

    Example TOML configuration:
        [intervals]
        quantiles = [0.1, 0.5, 0.9]
        alpha = 0.05

        [summary]
        epsilon = 0.05

        [batching]
        method = "sqrt"

        [output]
        directory = "Diagnostics"
        formats = ["json"]
    """

    model_config = ConfigDict(extra="forbid")

    intervals: IntervalConfig = Field(default_factory=IntervalConfig)
    summary: SummaryConfig = Field(default_factory=SummaryConfig)
    batching: BatchConfig = Field(default_factory=BatchConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


__all__ = [
    "BatchConfig",
    "IntervalConfig",
    "OutputConfig",
    "SmcmcConfig",
    "SummaryConfig",
]
