"""Figure layout shared by the plotting functions."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from matplotlib.colors import to_rgba


@dataclass(frozen=True)
class PlotLayout:
    """Sizes and colors passed explicitly to every plotting call.

    Attributes:
        panel_size: Width and height of one panel in inches
        max_columns: Panels per row before wrapping
        dpi: Figure resolution
        chain_colors: Colors cycled over chains in trace plots
        mean_color: Fill of the mean interval band
        quantile_color: Fill of the quantile interval bands
        opacity: Alpha of the interval bands
        acf_chain_color: Per-chain ACF curves
        acf_combined_color: Combined ACF curve
    """

    panel_size: tuple[float, float] = (5.0, 3.0)
    max_columns: int = 3
    dpi: int = 100
    chain_colors: tuple[str, ...] = field(
        default=("palevioletred", "steelblue", "tan", "dimgrey", "palegreen")
    )
    mean_color: str = "plum"
    quantile_color: str = "lightsteelblue"
    opacity: float = 0.7
    acf_chain_color: str = "red"
    acf_combined_color: str = "blue"

    def grid(self, n_panels: int) -> tuple[int, int]:
        """Rows and columns for ``n_panels`` panels."""
        n_cols = max(1, min(self.max_columns, n_panels))
        n_rows = int(np.ceil(n_panels / n_cols))
        return n_rows, n_cols

    def figsize(self, n_rows: int, n_cols: int) -> tuple[float, float]:
        width, height = self.panel_size
        return width * n_cols, height * n_rows

    def chain_color(self, index: int) -> str:
        return self.chain_colors[index % len(self.chain_colors)]

    def band(self, color: str) -> tuple[float, float, float, float]:
        """``color`` with the layout opacity applied."""
        return to_rgba(color, alpha=self.opacity)


DEFAULT_LAYOUT = PlotLayout()

__all__ = ["DEFAULT_LAYOUT", "PlotLayout"]
