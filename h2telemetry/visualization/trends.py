"""Trend and comparison plots for facility telemetry.

Generates plots for:
- Carbon intensity over time with classification bands
- Renewable share and efficiency over time
- Facility comparison by environmental score
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

if TYPE_CHECKING:
    from h2telemetry.metrics.summary import FacilityComparison, TrendPoint


@dataclass
class TrendPlotConfig:
    """Configuration for trend plots.

    Attributes:
        figsize: Figure size (width, height) in inches.
        dpi: Dots per inch for figure resolution.
        style: Matplotlib style to use.
        colors: Color scheme for bands and series.
        title_fontsize: Font size for plot titles.
        grid_alpha: Alpha value for grid lines.
    """

    figsize: tuple[float, float] = (14, 9)
    dpi: int = 100
    style: str = "seaborn-v0_8-whitegrid"
    colors: dict[str, str] = field(
        default_factory=lambda: {
            "very_low": "#2ecc71",
            "low": "#a3d977",
            "moderate": "#f1c40f",
            "high": "#e67e22",
            "very_high": "#e74c3c",
            "renewable": "#3498db",
            "efficiency": "#9b59b6",
        }
    )
    title_fontsize: int = 14
    grid_alpha: float = 0.3


# Upper edge of each carbon band drawn behind the intensity series
_BAND_EDGES: tuple[tuple[str, float, float], ...] = (
    ("very_low", 0.0, 0.5),
    ("low", 0.5, 1.0),
    ("moderate", 1.0, 2.0),
    ("high", 2.0, 3.0),
)


class TrendVisualizer:
    """Plots facility trend series and fleet comparisons."""

    def __init__(self, config: TrendPlotConfig | None = None) -> None:
        self.config = config or TrendPlotConfig()

    def plot_carbon_intensity(
        self,
        series: Mapping[str, Sequence[TrendPoint]],
        ax: plt.Axes | None = None,
    ) -> plt.Axes:
        """Plot carbon intensity per facility over classification bands.

        Args:
            series: Facility name to trend points.
            ax: Matplotlib axes to plot on (creates new if None).

        Returns:
            Matplotlib axes with the plot.
        """
        if ax is None:
            _, ax = plt.subplots(figsize=(12, 5))

        colors = self.config.colors
        for band, low, high in _BAND_EDGES:
            ax.axhspan(low, high, color=colors[band], alpha=0.12)

        for name, points in series.items():
            ax.plot(
                [p.timestamp for p in points],
                [p.carbon_intensity for p in points],
                linewidth=1.5,
                label=name,
            )

        ax.set_ylabel("kg CO2 / kg H2")
        ax.set_title("Carbon Intensity", fontsize=self.config.title_fontsize)
        ax.grid(alpha=self.config.grid_alpha)
        if series:
            ax.legend(loc="upper right", fontsize=9)
        return ax

    def plot_renewable_and_efficiency(
        self,
        points: Sequence[TrendPoint],
        ax: plt.Axes | None = None,
    ) -> plt.Axes:
        """Plot renewable share and efficiency for one facility."""
        if ax is None:
            _, ax = plt.subplots(figsize=(12, 5))

        timestamps = [p.timestamp for p in points]
        ax.plot(
            timestamps,
            [p.renewable_percentage for p in points],
            color=self.config.colors["renewable"],
            label="Renewable %",
        )
        ax.plot(
            timestamps,
            [p.efficiency for p in points],
            color=self.config.colors["efficiency"],
            label="Efficiency %",
        )
        ax.set_ylim(0, 100)
        ax.set_ylabel("%")
        ax.set_title("Renewable Share & Efficiency", fontsize=self.config.title_fontsize)
        ax.grid(alpha=self.config.grid_alpha)
        ax.legend(loc="upper right", fontsize=9)
        return ax

    def plot_comparison(
        self,
        comparison: Sequence[FacilityComparison],
        ax: plt.Axes | None = None,
    ) -> plt.Axes:
        """Horizontal bar chart of environmental scores, best on top."""
        if ax is None:
            _, ax = plt.subplots(figsize=(10, 5))

        ordered = list(reversed(comparison))
        bars = ax.barh(
            [c.facility_name for c in ordered],
            [c.environmental_score for c in ordered],
            color=[self.config.colors[c.carbon_classification.value] for c in ordered],
        )
        for bar, entry in zip(bars, ordered, strict=True):
            ax.text(
                bar.get_width() + 1,
                bar.get_y() + bar.get_height() / 2,
                str(entry.environmental_score),
                va="center",
                fontsize=9,
            )

        ax.set_xlim(0, 100)
        ax.set_xlabel("Environmental score")
        ax.set_title("Facility Comparison", fontsize=self.config.title_fontsize)
        ax.grid(axis="x", alpha=self.config.grid_alpha)
        return ax

    def plot_dashboard(
        self,
        series: Mapping[str, Sequence[TrendPoint]],
        comparison: Sequence[FacilityComparison],
        title: str = "Facility Telemetry",
        save_path: str | Path | None = None,
    ) -> Figure:
        """Combine carbon trends and comparison into one figure."""
        with plt.style.context(self.config.style):
            fig, (top, bottom) = plt.subplots(
                2, 1, figsize=self.config.figsize, dpi=self.config.dpi
            )
            self.plot_carbon_intensity(series, ax=top)
            self.plot_comparison(comparison, ax=bottom)
        fig.suptitle(title, fontsize=self.config.title_fontsize + 2)
        fig.tight_layout()

        if save_path is not None:
            fig.savefig(save_path, bbox_inches="tight")
        return fig
