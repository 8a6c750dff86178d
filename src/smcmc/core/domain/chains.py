"""Chain containers and the input variants resolved at the API boundary.

A :class:`ChainSet` is the canonical input of every computation. Raw inputs
are wrapped in one of the tagged variants (:class:`SingleChain`,
:class:`ChainList`, :class:`RawMatrix`, :class:`IidSample`) and converted
once by :func:`as_chain_set`; nothing past that point inspects input types.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from smcmc.core.algorithms.batch_means import as_matrix
from smcmc.core.algorithms.stacking import stack_chains
from smcmc.core.shared.exceptions import DimensionMismatchError
from smcmc.core.shared.typing import ArrayLike, FloatArray


def _frozen(arr: FloatArray) -> FloatArray:
    out = np.array(arr, dtype=np.float64, copy=True)
    out.setflags(write=False)
    return out


def default_varnames(p: int) -> tuple[str, ...]:
    return tuple(f"Component {i + 1}" for i in range(p))


@dataclass(frozen=True)
class ChainSet:
    """An ordered collection of m chains sharing p columns.

    Attributes:
        chains: Per-chain arrays of shape (n_i, p), read-only copies
        varnames: One name per column
        batch_size: Batch length for batch-means estimation
        stacked: Row-wise concatenation of the chains, read-only
        rows_per_chain: Rows each chain contributed to ``stacked``
        iid: True when the draws are independent (batch size is 1)
    """

    chains: tuple[FloatArray, ...]
    varnames: tuple[str, ...]
    batch_size: int
    stacked: FloatArray
    rows_per_chain: tuple[int, ...]
    iid: bool = False

    @classmethod
    def from_chains(
        cls,
        chains: Sequence[ArrayLike],
        varnames: Sequence[str] | None = None,
        batch_size: int | None = None,
        *,
        batch_method: str = "sqrt",
        align_batches: bool = False,
        iid: bool = False,
    ) -> ChainSet:
        """Build a chain set, stacking the chains and fixing the batch size.

        Raises:
            DimensionMismatchError: If chain widths differ or ``varnames``
                does not have one entry per column
        """
        matrices = [as_matrix(chain) for chain in chains]
        stacked = stack_chains(
            matrices,
            1 if iid else batch_size,
            method=batch_method,
            align_batches=align_batches and not iid,
        )
        p = stacked.stacked.shape[1]

        if varnames is None:
            names = default_varnames(p)
        else:
            names = tuple(str(name) for name in varnames)
            if len(names) != p:
                msg = f"got {len(names)} variable names for {p} components"
                raise DimensionMismatchError(msg)

        return cls(
            chains=tuple(_frozen(m) for m in matrices),
            varnames=names,
            batch_size=stacked.batch_size,
            stacked=_frozen(stacked.stacked),
            rows_per_chain=stacked.rows_per_chain,
            iid=iid,
        )

    @property
    def n_chains(self) -> int:
        return len(self.chains)

    @property
    def n_dim(self) -> int:
        return int(self.stacked.shape[1])

    @property
    def n_samples(self) -> int:
        """Length of the first chain (chains are expected to be equally long)."""
        return int(self.chains[0].shape[0])

    @property
    def n_stacked(self) -> int:
        return int(self.stacked.shape[0])

    def stacked_blocks(self) -> list[FloatArray]:
        """Per-chain pieces of the stacked array (after any batch alignment)."""
        edges = np.cumsum(self.rows_per_chain)[:-1]
        return list(np.split(self.stacked, edges, axis=0))

    def component(self, index: int) -> list[FloatArray]:
        """Column ``index`` of every chain."""
        return [chain[:, index] for chain in self.chains]

    def select(self, which: Sequence[int] | None) -> list[int]:
        """Validate a component selection, defaulting to all components."""
        if which is None:
            return list(range(self.n_dim))
        selected = [int(i) for i in which]
        for i in selected:
            if not 0 <= i < self.n_dim:
                msg = f"component index {i} out of range for {self.n_dim} components"
                raise DimensionMismatchError(msg)
        return selected


@dataclass(frozen=True)
class SingleChain:
    """One chain given as a vector (p = 1) or an (n, p) matrix."""

    values: ArrayLike
    varnames: Sequence[str] | None = None


@dataclass(frozen=True)
class ChainList:
    """Several independent chains of equal width."""

    chains: Sequence[ArrayLike]
    varnames: Sequence[str] | None = None


@dataclass(frozen=True)
class RawMatrix:
    """A bare (n, p) matrix of draws from a single run."""

    values: ArrayLike
    varnames: Sequence[str] | None = None


@dataclass(frozen=True)
class IidSample:
    """Independent draws; estimated with batch size 1 (plain covariance)."""

    values: ArrayLike
    varnames: Sequence[str] | None = None


ChainSource = ChainSet | SingleChain | ChainList | RawMatrix | IidSample


@dataclass(frozen=True)
class StackingOptions:
    """How a raw source is turned into a :class:`ChainSet`."""

    batch_size: int | None = None
    batch_method: str = "sqrt"
    align_batches: bool = False


def as_chain_set(source: ChainSource, options: StackingOptions | None = None) -> ChainSet:
    """Resolve any accepted input variant into a :class:`ChainSet`.

    A ChainSet is returned unchanged; ``options`` only apply to raw variants.
    """
    if isinstance(source, ChainSet):
        return source

    opts = options or StackingOptions()
    kwargs = {
        "batch_size": opts.batch_size,
        "batch_method": opts.batch_method,
        "align_batches": opts.align_batches,
    }

    match source:
        case SingleChain(values=values, varnames=names) | RawMatrix(values=values, varnames=names):
            return ChainSet.from_chains([values], names, **kwargs)
        case ChainList(chains=chains, varnames=names):
            return ChainSet.from_chains(list(chains), names, **kwargs)
        case IidSample(values=values, varnames=names):
            return ChainSet.from_chains([values], names, iid=True)

    msg = (
        "expected a ChainSet, SingleChain, ChainList, RawMatrix or IidSample, "
        f"got {type(source).__name__}"
    )
    raise TypeError(msg)


__all__ = [
    "ChainList",
    "ChainSet",
    "ChainSource",
    "IidSample",
    "RawMatrix",
    "SingleChain",
    "StackingOptions",
    "as_chain_set",
    "default_varnames",
]
