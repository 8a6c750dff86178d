"""Tests for the joint covariance of means and quantiles."""

import numpy as np
import pytest

from smcmc.core.algorithms.batch_means import batch_means_covariance
from smcmc.core.algorithms.covariance import assemble_joint_covariance, indicator_matrix
from smcmc.core.shared.exceptions import DegenerateDensityError, DimensionMismatchError


class TestIndicatorMatrix:
    """Tests for indicator_matrix."""

    def test_quantile_major_columns(self):
        x = np.array([[0.0, 10.0], [1.0, 11.0], [2.0, 12.0]])
        quantiles = np.array([[0.5, 10.5], [1.5, 11.5]])
        ind = indicator_matrix(x, quantiles)
        assert ind.shape == (3, 4)
        # level 0: components 0 and 1, then level 1: components 0 and 1
        np.testing.assert_array_equal(ind[:, 0], [1, 0, 0])
        np.testing.assert_array_equal(ind[:, 1], [1, 0, 0])
        np.testing.assert_array_equal(ind[:, 2], [1, 1, 0])
        np.testing.assert_array_equal(ind[:, 3], [1, 1, 0])


class TestAssembleJointCovariance:
    """Tests for assemble_joint_covariance."""

    def test_size_with_means(self, ar1_chain):
        joint = assemble_joint_covariance(ar1_chain, [0.1, 0.5, 0.9], 40)
        assert joint.sigma.shape == (8, 8)
        assert joint.size == 8
        np.testing.assert_array_equal(joint.sigma, joint.sigma.T)
        np.testing.assert_array_equal(joint.scale[:2], [1.0, 1.0])

    def test_size_without_means(self, ar1_chain):
        joint = assemble_joint_covariance(ar1_chain, [0.1, 0.9], 40, include_means=False)
        assert joint.sigma.shape == (4, 4)
        np.testing.assert_allclose(joint.estimate, joint.quantile_estimate.ravel())

    def test_estimate_ordering(self, ar1_chain):
        joint = assemble_joint_covariance(ar1_chain, [0.2, 0.8], 40)
        np.testing.assert_allclose(joint.estimate[:2], ar1_chain.mean(axis=0))
        np.testing.assert_allclose(joint.estimate[2:4], np.quantile(ar1_chain, 0.2, axis=0))
        np.testing.assert_allclose(joint.estimate[4:6], np.quantile(ar1_chain, 0.8, axis=0))

    def test_means_only(self, ar1_chain):
        joint = assemble_joint_covariance(ar1_chain, [], 40)
        np.testing.assert_allclose(joint.sigma, batch_means_covariance(ar1_chain, 40))

    def test_nothing_to_estimate(self, ar1_chain):
        with pytest.raises(DimensionMismatchError):
            assemble_joint_covariance(ar1_chain, [], 40, include_means=False)

    def test_median_variance_of_iid_normal(self, rng):
        """The asymptotic variance of the sample median of N(0, 1) is pi / 2."""
        x = rng.standard_normal((20_000, 1))
        joint = assemble_joint_covariance(x, [0.5], 1, include_means=False)
        assert joint.sigma[0, 0] == pytest.approx(np.pi / 2, rel=0.1)

    def test_delta_method_scaling(self, ar1_chain):
        joint = assemble_joint_covariance(ar1_chain, [0.3], 40)
        np.testing.assert_allclose(
            joint.sigma,
            np.diag(joint.scale) @ joint.sigma_raw @ np.diag(joint.scale),
        )

    def test_degenerate_component(self, rng):
        x = np.column_stack([rng.standard_normal(400), np.zeros(400)])
        with pytest.raises(DegenerateDensityError):
            assemble_joint_covariance(x, [0.5], 1, include_means=False)

    def test_unit_batch_is_sample_covariance(self, iid_draws):
        """With b = 1 the mean block is the plain sample covariance."""
        joint = assemble_joint_covariance(iid_draws, [], 1)
        np.testing.assert_allclose(joint.sigma, np.cov(iid_draws, rowvar=False), rtol=1e-10)
