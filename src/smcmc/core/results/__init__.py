"""Result containers returned by the public services."""

from smcmc.core.results.intervals import SimultaneousIntervals, level_label
from smcmc.core.results.summary import ComponentStatistics, SummaryStatistics

__all__ = ["ComponentStatistics", "SimultaneousIntervals", "SummaryStatistics", "level_label"]
