"""Configuration-driven report: summary, intervals, files and figures."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from smcmc.core.domain.chains import ChainSet, ChainSource, StackingOptions, as_chain_set
from smcmc.core.domain.config import SmcmcConfig
from smcmc.core.results.intervals import SimultaneousIntervals
from smcmc.core.results.summary import SummaryStatistics
from smcmc.io.writers import WRITERS, WriterConfig
from smcmc.services.intervals import compute_simultaneous_ci
from smcmc.services.summary import compute_summary_statistics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportOutput:
    """Result of a report run.

    Attributes:
        summary: Summary statistics of the chain set
        intervals: Simultaneous intervals of the chain set
        files: Every file written, in write order
    """

    summary: SummaryStatistics
    intervals: SimultaneousIntervals
    files: list[Path] = field(default_factory=list)


class ReportService:
    """Runs the summary and the interval computation from one configuration.

    Example:
        service = ReportService(SmcmcConfig())
        output = service.run(ChainList([chain_1, chain_2]))
        print(output.intervals.critical_value)
    """

    def __init__(self, config: SmcmcConfig | None = None, writer_config: WriterConfig | None = None) -> None:
        self.config = config or SmcmcConfig()
        self.writer_config = writer_config or WriterConfig()

    def stacking_options(self) -> StackingOptions:
        batching = self.config.batching
        return StackingOptions(
            batch_size=batching.batch_size,
            batch_method=batching.method,
            align_batches=batching.align_batches,
        )

    def resolve(self, source: ChainSource) -> ChainSet:
        return as_chain_set(source, self.stacking_options())

    def summarize(self, chain_set: ChainSet) -> SummaryStatistics:
        cfg = self.config.summary
        return compute_summary_statistics(
            chain_set,
            epsilon=cfg.epsilon,
            alpha=cfg.alpha,
            quantile_levels=cfg.quantiles,
        )

    def intervals(self, chain_set: ChainSet) -> SimultaneousIntervals:
        cfg = self.config.intervals
        return compute_simultaneous_ci(
            chain_set,
            quantile_levels=cfg.quantiles,
            alpha=cfg.alpha,
            include_means=cfg.include_means,
            method=cfg.method,
            n_draws=cfg.n_draws,
            seed=cfg.seed,
            tol=cfg.tol,
        )

    def write(
        self,
        summary: SummaryStatistics | None,
        intervals: SimultaneousIntervals | None,
        directory: Path,
    ) -> list[Path]:
        """Write results in every configured format; returns the paths written."""
        files: list[Path] = []
        for fmt in self.config.output.formats:
            writer = WRITERS[fmt](self.writer_config)
            if summary is not None:
                path = directory / f"summary.{fmt}"
                writer.write_summary(summary, path)
                files.append(path)
            if intervals is not None:
                path = directory / f"intervals.{fmt}"
                writer.write_intervals(intervals, path)
                files.append(path)
        for path in files:
            logger.info("wrote %s", path)
        return files

    def run(self, source: ChainSource, directory: Path | None = None) -> ReportOutput:
        """Compute both results and write them under ``directory``.

        ``directory`` defaults to the configured output directory. The
        diagnostic PDF is written when ``output.save_figures`` is set.
        """
        chain_set = self.resolve(source)
        summary = self.summarize(chain_set)
        intervals = self.intervals(chain_set)

        out_dir = directory if directory is not None else self.config.output.directory
        files = self.write(summary, intervals, out_dir)

        if self.config.output.save_figures:
            from smcmc.plotting.diagnostics import save_diagnostic_plots

            pdf_path = out_dir / "diagnostics.pdf"
            save_diagnostic_plots(chain_set, intervals, pdf_path)
            files.append(pdf_path)
            logger.info("wrote %s", pdf_path)

        return ReportOutput(summary=summary, intervals=intervals, files=files)


__all__ = ["ReportOutput", "ReportService"]
