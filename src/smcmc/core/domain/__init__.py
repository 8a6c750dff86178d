"""Domain objects: chain containers and configuration models."""

from smcmc.core.domain.chains import (
    ChainList,
    ChainSet,
    ChainSource,
    IidSample,
    RawMatrix,
    SingleChain,
    StackingOptions,
    as_chain_set,
)
from smcmc.core.domain.config import (
    BatchConfig,
    IntervalConfig,
    OutputConfig,
    SmcmcConfig,
    SummaryConfig,
)

__all__ = [
    "BatchConfig",
    "ChainList",
    "ChainSet",
    "ChainSource",
    "IidSample",
    "IntervalConfig",
    "OutputConfig",
    "RawMatrix",
    "SingleChain",
    "SmcmcConfig",
    "StackingOptions",
    "SummaryConfig",
    "as_chain_set",
]
