"""Tests for the diagnostic figures."""

import matplotlib.pyplot as plt
import numpy as np
import pytest
from matplotlib.figure import Figure

from smcmc import ChainList, SingleChain, compute_simultaneous_ci
from smcmc.core.domain.chains import as_chain_set
from smcmc.core.shared.exceptions import InvalidParameterError
from smcmc.plotting import (
    add_box_intervals,
    plot_autocorrelation,
    plot_density,
    plot_overview,
    plot_trace,
    save_diagnostic_plots,
    thin_indices,
)
from smcmc.plotting.layout import PlotLayout


@pytest.fixture
def chain_set(ar1_chains):
    return as_chain_set(ChainList(ar1_chains, varnames=["x", "y"]))


@pytest.fixture
def intervals(chain_set):
    return compute_simultaneous_ci(chain_set, seed=0, n_draws=2000)


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


class TestThinIndices:
    """Tests for thin_indices."""

    def test_short_chain_untouched(self):
        np.testing.assert_array_equal(thin_indices(10, 100), np.arange(10))

    def test_keeps_endpoints(self):
        idx = thin_indices(5000, 1000, rng=0)
        assert idx.size == 1000
        assert idx[0] == 0
        assert idx[-1] == 4999
        assert np.all(np.diff(idx) > 0)

    def test_rejects_tiny_budget(self):
        with pytest.raises(InvalidParameterError):
            thin_indices(100, 1)


class TestLayout:
    """Tests for PlotLayout."""

    def test_grid_wraps(self):
        assert PlotLayout().grid(5) == (2, 3)
        assert PlotLayout().grid(1) == (1, 1)

    def test_chain_colors_cycle(self):
        layout = PlotLayout()
        assert layout.chain_color(5) == layout.chain_color(0)

    def test_band_opacity(self):
        assert PlotLayout(opacity=0.3).band("red")[3] == pytest.approx(0.3)


class TestFigures:
    """Each plotting function returns a populated Figure."""

    def test_trace(self, chain_set):
        fig = plot_trace(chain_set, rng=0)
        assert isinstance(fig, Figure)
        visible = [ax for ax in fig.axes if ax.get_visible()]
        assert len(visible) == 2
        assert len(visible[0].lines) == 3

    def test_trace_selected_component(self, chain_set):
        fig = plot_trace(chain_set, which=[1], fast=False)
        assert fig.axes[0].get_ylabel() == "y"
        assert len(fig.axes[0].lines[0].get_xdata()) == 1000

    def test_autocorrelation(self, chain_set):
        assert isinstance(plot_autocorrelation(chain_set, max_lag=20), Figure)

    def test_density_with_intervals(self, chain_set, intervals):
        fig = plot_density(chain_set, intervals, rug=True)
        assert isinstance(fig, Figure)
        assert len(fig.axes[0].collections) >= 3

    def test_density_single_chain(self, ar1_chain):
        assert isinstance(plot_density(as_chain_set(SingleChain(ar1_chain))), Figure)

    def test_box_intervals(self, chain_set, intervals):
        fig, ax = plt.subplots()
        ax.boxplot(chain_set.stacked)
        add_box_intervals(ax, intervals, [0, 1])
        assert len(ax.patches) == 4

    def test_overview(self, chain_set, intervals):
        fig = plot_overview(chain_set, intervals)
        assert len(fig.axes) == 6

    def test_overview_too_many_components(self, rng, intervals):
        wide = as_chain_set(SingleChain(rng.standard_normal((200, 13))))
        with pytest.raises(InvalidParameterError, match="at most 12"):
            plot_overview(wide, intervals)


def test_save_diagnostic_plots(tmp_path, chain_set, intervals):
    output = tmp_path / "figures" / "diagnostics.pdf"
    pages = save_diagnostic_plots(chain_set, intervals, output)
    assert pages == 4
    assert output.read_bytes().startswith(b"%PDF")


class TestConstantComponent:
    """A fixed parameter is drawn as a spike instead of a density."""

    @pytest.fixture
    def fixed(self, rng):
        draws = np.column_stack([rng.standard_normal(500), np.full(500, 3.0)])
        return as_chain_set(SingleChain(draws, varnames=["free", "fixed"]))

    def test_density_spike(self, fixed):
        fig = plot_density(fixed)
        spike = fig.axes[1].collections[0]
        np.testing.assert_allclose(spike.get_segments()[0][:, 0], [3.0, 3.0])
        assert len(fig.axes[0].lines) == 1

    def test_overview_without_intervals(self, fixed):
        assert len(plot_overview(fixed).axes) == 6

    def test_save_without_intervals(self, tmp_path, fixed):
        output = tmp_path / "fixed.pdf"
        assert save_diagnostic_plots(fixed, None, output) == 4
        assert output.exists()
