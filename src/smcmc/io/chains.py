"""Loading chains from disk.

Supported formats:
- ``.npy``: a single (n, p) chain or an (m, n, p) stack of chains
- ``.npz``: one array per chain, taken in sorted key order
- ``.csv``: one chain per file; the header row gives the variable names
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import numpy as np
import pandas as pd

from smcmc.core.domain.chains import ChainList
from smcmc.core.shared.exceptions import DataIOError
from smcmc.core.shared.typing import FloatArray

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".npy", ".npz", ".csv")


def _read_npy(path: Path) -> list[FloatArray]:
    data = np.load(path, allow_pickle=False)
    if data.ndim == 3:
        return [np.asarray(chain, dtype=np.float64) for chain in data]
    if data.ndim in (1, 2):
        return [np.asarray(data, dtype=np.float64)]
    msg = f"{path.name}: expected 1, 2 or 3 dimensions, got {data.ndim}"
    raise DataIOError(msg)


def _read_npz(path: Path) -> list[FloatArray]:
    with np.load(path, allow_pickle=False) as archive:
        return [np.asarray(archive[key], dtype=np.float64) for key in sorted(archive.files)]


def _read_csv(path: Path) -> tuple[list[FloatArray], list[str]]:
    frame = pd.read_csv(path, comment="#")
    non_numeric = [c for c in frame.columns if not pd.api.types.is_numeric_dtype(frame[c])]
    if non_numeric:
        msg = f"{path.name}: non-numeric column(s) {non_numeric}"
        raise DataIOError(msg)
    return [frame.to_numpy(dtype=np.float64)], [str(c) for c in frame.columns]


def load_chains(paths: Sequence[Path], varnames: Sequence[str] | None = None) -> ChainList:
    """Read one or more chain files into a :class:`ChainList`.

    Args:
        paths: Files to read, in chain order
        varnames: Variable names; CSV headers are used when not given

    Returns:
        ChainList ready for :func:`smcmc.core.domain.chains.as_chain_set`

    Raises:
        DataIOError: If a file is missing, unreadable or of an unknown format
    """
    chains: list[FloatArray] = []
    names = list(varnames) if varnames is not None else None

    for path in paths:
        path = Path(path)
        if not path.exists():
            msg = f"Chain file not found: {path}"
            raise DataIOError(msg)

        suffix = path.suffix.lower()
        try:
            if suffix == ".npy":
                chains.extend(_read_npy(path))
            elif suffix == ".npz":
                chains.extend(_read_npz(path))
            elif suffix == ".csv":
                loaded, header = _read_csv(path)
                chains.extend(loaded)
                if names is None:
                    names = header
            else:
                msg = f"{path.name}: unsupported format; use one of {', '.join(SUPPORTED_SUFFIXES)}"
                raise DataIOError(msg)
        except (OSError, ValueError) as exc:
            msg = f"Could not read {path}: {exc}"
            raise DataIOError(msg) from exc

        logger.debug("loaded %s", path)

    if not chains:
        msg = "no chains were loaded"
        raise DataIOError(msg)

    return ChainList(chains=chains, varnames=names)


__all__ = ["SUPPORTED_SUFFIXES", "load_chains"]
