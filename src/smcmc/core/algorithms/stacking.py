"""Stacking of several chains into one pooled sequence.

The stacked sequence is what the batch-means estimator sees, so the batch
size is chosen once for the whole chain set: the per-chain recommendations
are averaged over every chain and floored.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from smcmc.core.algorithms.batch_means import as_matrix, batch_size
from smcmc.core.shared.exceptions import DimensionMismatchError, InsufficientDataError
from smcmc.core.shared.typing import ArrayLike, FloatArray
from smcmc.core.shared.validation import require_batch_size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StackedChains:
    """Row-wise concatenation of a chain set.

    Attributes:
        stacked: Array of shape (sum of rows kept per chain, p)
        batch_size: Batch length used for batch-means estimation
        rows_per_chain: Number of rows each chain contributed, in chain order
    """

    stacked: FloatArray
    batch_size: int
    rows_per_chain: tuple[int, ...]

    @property
    def n_rows(self) -> int:
        return int(self.stacked.shape[0])

    def blocks(self) -> list[FloatArray]:
        """Split the stacked array back into its per-chain blocks."""
        edges = np.cumsum(self.rows_per_chain)[:-1]
        return list(np.split(self.stacked, edges, axis=0))


def resolve_batch_size(
    chains: Sequence[FloatArray],
    requested: int | None = None,
    method: str = "sqrt",
) -> int:
    """Use ``requested`` when truthy, otherwise floor the mean per-chain estimate.

    Raises:
        InvalidParameterError: If ``requested`` is not an integer in
            [1, length of the shortest chain]
    """
    if requested:
        return require_batch_size(requested, min(chain.shape[0] for chain in chains))
    sizes = [batch_size(chain, method=method) for chain in chains]
    resolved = int(np.floor(np.mean(sizes)))
    logger.debug("batch size %d from per-chain estimates %s (%s)", resolved, sizes, method)
    return max(resolved, 1)


def stack_chains(
    chains: Sequence[ArrayLike],
    batch_size: int | None = None,
    *,
    method: str = "sqrt",
    align_batches: bool = False,
) -> StackedChains:
    """Concatenate chains in order and derive a common batch size.

    Args:
        chains: One or more arrays of shape (n_i, p) or (n_i,)
        batch_size: Caller-supplied batch size; 0 or None means "compute it"
        method: Batch size rule passed to :func:`batch_size`
        align_batches: Drop the first n_i mod b rows of every chain so that
            no batch straddles two chains

    Returns:
        StackedChains with the pooled sequence and batch size

    Raises:
        DimensionMismatchError: If the chains do not share the same width
    """
    matrices = [as_matrix(chain) for chain in chains]
    if not matrices:
        msg = "at least one chain is required"
        raise InsufficientDataError(msg)

    widths = [m.shape[1] for m in matrices]
    if len(set(widths)) != 1:
        msg = f"all chains must have the same number of columns, got {widths}"
        raise DimensionMismatchError(msg)

    size = resolve_batch_size(matrices, batch_size, method)

    if align_batches:
        kept = []
        for m in matrices:
            usable = (m.shape[0] // size) * size
            if usable == 0:
                msg = f"chain of length {m.shape[0]} is shorter than the batch size {size}"
                raise InsufficientDataError(msg)
            kept.append(m[m.shape[0] - usable :])
        matrices = kept

    stacked = np.concatenate(matrices, axis=0)
    rows = tuple(int(m.shape[0]) for m in matrices)
    logger.debug("stacked %d chain(s) into %d x %d, b=%d", len(rows), *stacked.shape, size)
    return StackedChains(stacked=stacked, batch_size=size, rows_per_chain=rows)


__all__ = ["StackedChains", "resolve_batch_size", "stack_chains"]
