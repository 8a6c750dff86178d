"""Tests for the globally-centered autocorrelation."""

import numpy as np
import pytest

from smcmc.core.diagnostics.autocorrelation import default_max_lag, globally_centered_acf
from smcmc.core.shared.exceptions import DimensionMismatchError, InvalidParameterError


class TestGloballyCenteredAcf:
    """Tests for globally_centered_acf."""

    def test_default_max_lag(self):
        assert default_max_lag(1000) == 30
        assert default_max_lag(5) == 4

    def test_shapes(self, ar1_chains):
        result = globally_centered_acf([c[:, 0] for c in ar1_chains])
        assert result.individual.shape == (3, 31)
        assert result.combined.shape == (31,)
        assert result.max_lag == 30

    def test_lag_zero_is_one(self, ar1_chains):
        result = globally_centered_acf([c[:, 0] for c in ar1_chains], max_lag=5)
        np.testing.assert_allclose(result.individual[:, 0], 1.0)

    def test_ar1_lag_one(self, ar1_chain):
        result = globally_centered_acf([ar1_chain[:, 0]], max_lag=3)
        assert result.combined[1] == pytest.approx(0.5, abs=0.07)

    def test_matches_direct_sum(self, rng):
        x = rng.standard_normal(200)
        result = globally_centered_acf([x], max_lag=2, kind="covariance")
        centered = x - x.mean()
        expected = np.sum(centered[:-2] * centered[2:]) / 200
        assert result.combined[2] == pytest.approx(expected)

    def test_unmixed_chains_look_correlated(self, rng):
        """Chains stuck around different means keep a high combined ACF."""
        a = 1.0 + 0.5 * rng.standard_normal(1000)
        b = -1.0 + 0.5 * rng.standard_normal(1000)
        result = globally_centered_acf([a, b], max_lag=10)
        assert result.combined[10] > 0.5

    def test_partial_not_supported(self, rng):
        with pytest.raises(InvalidParameterError, match="partial"):
            globally_centered_acf([rng.standard_normal(50)], kind="partial")

    def test_unequal_lengths(self, rng):
        with pytest.raises(DimensionMismatchError):
            globally_centered_acf([rng.standard_normal(50), rng.standard_normal(60)])
