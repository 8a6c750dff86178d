"""Pytest fixtures for smcmc tests."""

import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")


def make_ar1(n: int, p: int = 1, rho: float = 0.5, seed: int = 0) -> np.ndarray:
    """Stationary AR(1) draws, X_t = rho X_{t-1} + e_t, with unit marginal variance."""
    rng = np.random.default_rng(seed)
    noise = rng.standard_normal((n, p)) * np.sqrt(1.0 - rho**2)
    x = np.empty((n, p))
    x[0] = rng.standard_normal(p)
    for t in range(1, n):
        x[t] = rho * x[t - 1] + noise[t]
    return x


@pytest.fixture
def ar1():
    """Factory for AR(1) chains: ar1(n, p=1, rho=0.5, seed=0)."""
    return make_ar1


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def ar1_chain():
    """Single AR(1) chain, 2000 draws of 2 components."""
    return make_ar1(2000, p=2, rho=0.5, seed=1)


@pytest.fixture
def ar1_chains():
    """Three AR(1) chains of 1000 draws, 2 components each."""
    return [make_ar1(1000, p=2, rho=0.5, seed=s) for s in (11, 12, 13)]


@pytest.fixture
def iid_draws(rng):
    """5000 independent standard normal draws of 3 components."""
    return rng.standard_normal((5000, 3))


@pytest.fixture
def chain_files(tmp_path, ar1_chains):
    """Chains saved as .npy files."""
    paths = []
    for i, chain in enumerate(ar1_chains):
        path = tmp_path / f"chain{i + 1}.npy"
        np.save(path, chain)
        paths.append(path)
    return paths


@pytest.fixture
def sample_config_file(tmp_path):
    """Create a sample TOML configuration file."""
    config_path = tmp_path / "smcmc.toml"
    content = """
[intervals]
quantiles = [0.05, 0.5, 0.95]
alpha = 0.1
seed = 7
n_draws = 5000

[summary]
epsilon = 0.05

[batching]
method = "cuberoot"

[output]
directory = "Results"
formats = ["csv"]
save_figures = false
"""
    config_path.write_text(content)
    return config_path
