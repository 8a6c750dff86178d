"""Tests for the simultaneous critical value calibration."""

import numpy as np
import pytest
from scipy.stats import norm

from smcmc.core.algorithms.calibration import (
    Calibration,
    analytic_critical_value,
    calibrate,
    correlation_factor,
    correlation_from_covariance,
    monte_carlo_critical_value,
    simultaneous_bounds,
)
from smcmc.core.shared.exceptions import (
    DimensionMismatchError,
    InvalidParameterError,
    NonPositiveDefiniteError,
)

# z* for three independent components at alpha = 0.05
INDEPENDENT_3 = float(norm.ppf((1 + 0.95 ** (1 / 3)) / 2))


class TestCorrelation:
    """Tests for correlation_from_covariance and correlation_factor."""

    def test_split(self):
        sigma = np.array([[4.0, 2.0], [2.0, 9.0]])
        corr, sd = correlation_from_covariance(sigma)
        np.testing.assert_allclose(sd, [2.0, 3.0])
        np.testing.assert_allclose(corr, [[1.0, 1 / 3], [1 / 3, 1.0]])

    def test_zero_variance(self):
        with pytest.raises(NonPositiveDefiniteError, match=r"\[1\]"):
            correlation_from_covariance(np.diag([1.0, 0.0]))

    def test_not_square(self):
        with pytest.raises(DimensionMismatchError):
            correlation_from_covariance(np.ones((2, 3)))

    def test_cholesky_factor(self):
        corr = np.array([[1.0, 0.5], [0.5, 1.0]])
        factor = correlation_factor(corr)
        np.testing.assert_allclose(factor @ factor.T, corr)
        assert factor[0, 1] == 0.0

    def test_singular_factor(self):
        """Perfect correlation has no Cholesky factor but is still PSD."""
        corr = np.ones((3, 3))
        factor = correlation_factor(corr)
        np.testing.assert_allclose(factor @ factor.T, corr, atol=1e-12)

    def test_indefinite(self):
        with pytest.raises(NonPositiveDefiniteError, match="not positive semidefinite"):
            correlation_factor(np.array([[1.0, 2.0], [2.0, 1.0]]))


class TestMonteCarlo:
    """Tests for the Monte Carlo critical value."""

    def test_single_component(self):
        z = monte_carlo_critical_value(np.eye(1), 0.05, rng=1)
        assert z == pytest.approx(norm.ppf(0.975), abs=0.05)

    def test_independent_components(self):
        z = monte_carlo_critical_value(np.eye(3), 0.05, rng=2)
        assert z == pytest.approx(INDEPENDENT_3, abs=0.05)

    def test_perfectly_correlated(self):
        z = monte_carlo_critical_value(np.ones((3, 3)), 0.05, rng=3)
        assert z == pytest.approx(norm.ppf(0.975), abs=0.05)

    def test_seed_reproducible(self):
        corr = np.array([[1.0, 0.3], [0.3, 1.0]])
        assert monte_carlo_critical_value(corr, 0.05, rng=9) == monte_carlo_critical_value(
            corr, 0.05, rng=9
        )

    def test_smaller_alpha_gives_larger_value(self):
        corr = np.array([[1.0, 0.3], [0.3, 1.0]])
        wide = monte_carlo_critical_value(corr, 0.01, rng=4)
        narrow = monte_carlo_critical_value(corr, 0.10, rng=4)
        assert wide > narrow

    def test_rejects_bad_draw_count(self):
        with pytest.raises(InvalidParameterError):
            monte_carlo_critical_value(np.eye(2), 0.05, n_draws=0)


class TestAnalytic:
    """Tests for the bisection calibration."""

    def test_single_component_is_exact(self):
        assert analytic_critical_value(np.eye(1), 0.05) == pytest.approx(norm.ppf(0.975))

    def test_independent_components(self):
        z = analytic_critical_value(np.eye(3), 0.05, rng=0)
        assert z == pytest.approx(INDEPENDENT_3, abs=0.02)

    def test_between_unadjusted_and_bonferroni(self):
        corr = np.array([[1.0, 0.6, 0.2], [0.6, 1.0, 0.4], [0.2, 0.4, 1.0]])
        z = analytic_critical_value(corr, 0.05, rng=0)
        assert norm.ppf(0.975) <= z <= norm.ppf(1 - 0.05 / 6)

    def test_rejects_bad_tolerance(self):
        with pytest.raises(InvalidParameterError):
            analytic_critical_value(np.eye(2), 0.05, tol=0.0)


class TestCalibrate:
    """Tests for calibrate and simultaneous_bounds."""

    def test_monte_carlo_default(self):
        cal = calibrate(np.diag([4.0, 9.0]), 0.05, rng=5)
        assert cal.method == "monte_carlo"
        assert cal.n_draws == 20_000
        np.testing.assert_allclose(cal.std_devs, [2.0, 3.0])

    def test_analytic(self):
        cal = calibrate(np.diag([4.0, 9.0]), 0.05, method="analytic", rng=5)
        assert cal.method == "analytic"
        assert cal.n_draws is None

    def test_unknown_method(self):
        with pytest.raises(InvalidParameterError, match="unknown calibration method"):
            calibrate(np.eye(2), 0.05, method="bootstrap")

    @pytest.mark.parametrize("alpha", [0.0, 1.0, -0.1, 1.5])
    def test_alpha_outside_unit_interval(self, alpha):
        with pytest.raises(InvalidParameterError):
            calibrate(np.eye(2), alpha)

    def test_bounds(self):
        cal = Calibration(
            critical_value=2.0,
            std_devs=np.array([1.0, 4.0]),
            correlation=np.eye(2),
            method="monte_carlo",
            n_draws=10,
        )
        lower, upper = simultaneous_bounds(np.array([0.0, 1.0]), cal, 16)
        np.testing.assert_allclose(lower, [-0.5, -1.0])
        np.testing.assert_allclose(upper, [0.5, 3.0])

    def test_bounds_shape_mismatch(self):
        cal = calibrate(np.eye(2), 0.05, rng=0, n_draws=100)
        with pytest.raises(DimensionMismatchError):
            simultaneous_bounds(np.zeros(3), cal, 10)

    def test_half_widths_monotone_in_alpha(self):
        """Smaller alpha never shrinks a half-width for the same Σ, n and seed."""
        sigma = np.array([[2.0, 0.5, 0.1], [0.5, 1.0, 0.2], [0.1, 0.2, 3.0]])
        estimate = np.zeros(3)
        widths = []
        for alpha in (0.2, 0.1, 0.05, 0.01):
            lower, upper = simultaneous_bounds(estimate, calibrate(sigma, alpha, rng=11), 100)
            widths.append(upper - lower)
        for wide, narrow in zip(widths[1:], widths[:-1], strict=True):
            assert np.all(wide >= narrow)
