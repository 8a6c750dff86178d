"""Tests for ESS and Gelman-Rubin diagnostics."""

import math

import numpy as np
import pytest

from smcmc.core.diagnostics.ess import (
    average_chain_covariance,
    average_chain_variance,
    gelman_rubin,
    minimum_ess,
    minimum_multivariate_ess,
    multivariate_gelman_rubin,
    pooled_multivariate_ess,
    univariate_ess,
)
from smcmc.core.shared.exceptions import (
    InsufficientDataError,
    InvalidParameterError,
    NonPositiveDefiniteError,
)


class TestWithinChain:
    """Tests for the averaged within-chain moments."""

    def test_average_variance(self):
        blocks = [np.array([[0.0], [2.0]]), np.array([[0.0], [4.0]])]
        np.testing.assert_allclose(average_chain_variance(blocks), [(2.0 + 8.0) / 2])

    def test_average_covariance_shape(self, ar1_chains):
        assert average_chain_covariance(ar1_chains).shape == (2, 2)

    def test_single_draw_chain(self):
        with pytest.raises(InsufficientDataError):
            average_chain_variance([np.zeros((1, 2))])


class TestUnivariate:
    """Tests for the per-component ESS."""

    def test_iid_unit_batch_equals_n(self, iid_draws):
        ess = univariate_ess([iid_draws], iid_draws, 1)
        np.testing.assert_allclose(ess, 5000.0)

    def test_autocorrelation_reduces_ess(self, ar1_chain):
        ess = univariate_ess([ar1_chain], ar1_chain, 44)
        assert np.all(ess < ar1_chain.shape[0])

    def test_constant_component(self, rng):
        x = np.column_stack([rng.standard_normal(400), np.ones(400)])
        with pytest.raises(NonPositiveDefiniteError, match=r"\[2\]"):
            univariate_ess([x], x, 20)

    def test_gelman_rubin(self):
        assert gelman_rubin(100.0, 4) == pytest.approx(math.sqrt(1.04))


class TestMultivariate:
    """Tests for the multivariate ESS and Gelman-Rubin."""

    def test_iid_unit_batch_equals_n(self, iid_draws):
        assert pooled_multivariate_ess([iid_draws], iid_draws, 1) == pytest.approx(5000.0)

    def test_gelman_rubin_near_one(self):
        assert multivariate_gelman_rubin(8000.0, 2000, 4) == pytest.approx(1.0)

    def test_gelman_rubin_large_for_small_ess(self):
        assert multivariate_gelman_rubin(10.0, 2000, 4) > 1.1


class TestMinimumEss:
    """Tests for the minimum ESS thresholds."""

    def test_univariate_default(self):
        # 4 chi2_{1, 0.95} / 0.1^2 = 1536.58...
        assert minimum_ess(0.05, 0.10) == 1537

    def test_multivariate_reduces_to_univariate(self):
        assert minimum_multivariate_ess(1, 0.05, 0.10) == minimum_ess(0.05, 0.10)

    def test_multivariate_two_dimensions(self):
        # pi chi2_{2, 0.95} / 0.1^2 = 1882.3...
        assert minimum_multivariate_ess(2, 0.05, 0.10) == 1883

    def test_large_dimension_is_finite(self):
        assert minimum_multivariate_ess(500, 0.05, 0.10) > 0

    def test_more_precision_needs_more_samples(self):
        assert minimum_ess(0.05, 0.05) > minimum_ess(0.05, 0.10)

    def test_invalid_arguments(self):
        with pytest.raises(InvalidParameterError):
            minimum_ess(0.05, 0.0)
        with pytest.raises(InvalidParameterError):
            minimum_multivariate_ess(0, 0.05, 0.1)
