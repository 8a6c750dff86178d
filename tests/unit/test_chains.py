"""Tests for chain containers and input resolution."""

import numpy as np
import pytest

from smcmc.core.domain.chains import (
    ChainList,
    ChainSet,
    IidSample,
    RawMatrix,
    SingleChain,
    StackingOptions,
    as_chain_set,
)
from smcmc.core.shared.exceptions import DimensionMismatchError


class TestChainSet:
    """Tests for ChainSet construction."""

    def test_from_chains(self, ar1_chains):
        chain_set = ChainSet.from_chains(ar1_chains, ["a", "b"])
        assert chain_set.n_chains == 3
        assert chain_set.n_dim == 2
        assert chain_set.n_samples == 1000
        assert chain_set.n_stacked == 3000
        assert chain_set.varnames == ("a", "b")
        assert chain_set.batch_size == 31

    def test_default_varnames(self, ar1_chain):
        chain_set = ChainSet.from_chains([ar1_chain])
        assert chain_set.varnames == ("Component 1", "Component 2")

    def test_wrong_number_of_names(self, ar1_chain):
        with pytest.raises(DimensionMismatchError):
            ChainSet.from_chains([ar1_chain], ["only one"])

    def test_arrays_are_read_only_copies(self, ar1_chain):
        chain_set = ChainSet.from_chains([ar1_chain])
        ar1_chain[0, 0] = 1e6
        assert chain_set.chains[0][0, 0] != 1e6
        with pytest.raises(ValueError):
            chain_set.stacked[0, 0] = 0.0

    def test_iid_forces_unit_batch(self, iid_draws):
        chain_set = ChainSet.from_chains([iid_draws], batch_size=50, iid=True)
        assert chain_set.batch_size == 1
        assert chain_set.iid

    def test_select(self, ar1_chain):
        chain_set = ChainSet.from_chains([ar1_chain])
        assert chain_set.select(None) == [0, 1]
        assert chain_set.select([1]) == [1]
        with pytest.raises(DimensionMismatchError):
            chain_set.select([2])

    def test_stacked_blocks(self, ar1_chains):
        chain_set = ChainSet.from_chains(ar1_chains)
        blocks = chain_set.stacked_blocks()
        assert len(blocks) == 3
        np.testing.assert_array_equal(blocks[1], ar1_chains[1])


class TestAsChainSet:
    """Tests for resolving the input variants."""

    def test_chain_set_passthrough(self, ar1_chains):
        chain_set = ChainSet.from_chains(ar1_chains)
        assert as_chain_set(chain_set) is chain_set

    def test_single_chain_vector(self):
        chain_set = as_chain_set(SingleChain(np.linspace(0, 1, 400)))
        assert chain_set.n_dim == 1
        assert chain_set.n_chains == 1

    def test_chain_list(self, ar1_chains):
        chain_set = as_chain_set(ChainList(ar1_chains, varnames=["x", "y"]))
        assert chain_set.n_chains == 3
        assert chain_set.varnames == ("x", "y")

    def test_raw_matrix_with_options(self, ar1_chain):
        chain_set = as_chain_set(RawMatrix(ar1_chain), StackingOptions(batch_size=25))
        assert chain_set.batch_size == 25

    def test_iid_sample(self, iid_draws):
        chain_set = as_chain_set(IidSample(iid_draws), StackingOptions(batch_size=25))
        assert chain_set.batch_size == 1

    def test_unknown_input(self, ar1_chain):
        with pytest.raises(TypeError, match="ndarray"):
            as_chain_set(ar1_chain)
