"""Matplotlib plots for facility telemetry."""

from h2telemetry.visualization.trends import TrendPlotConfig, TrendVisualizer

__all__ = [
    "TrendPlotConfig",
    "TrendVisualizer",
]
