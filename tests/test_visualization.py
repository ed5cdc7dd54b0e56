"""Tests for the visualization module."""

from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import pytest

from h2telemetry.domain.models import CarbonClassification, FacilityArchetype
from h2telemetry.metrics.summary import FacilityComparison, TrendPoint
from h2telemetry.visualization import TrendPlotConfig, TrendVisualizer

# Use non-interactive backend for testing
matplotlib.use("Agg")


# --- Fixtures ---


@pytest.fixture
def trend_points() -> list[TrendPoint]:
    """Create a 24-hour trend series with a midday dip."""
    start = datetime(2024, 6, 1, 0, 0, 0)
    return [
        TrendPoint(
            timestamp=start + timedelta(hours=h),
            carbon_intensity=0.9 - 0.4 * (1 if 8 <= h <= 16 else 0),
            production_volume=30.0 + h,
            renewable_percentage=40.0 + h,
            efficiency=58.0,
            environmental_score=50 + h,
        )
        for h in range(24)
    ]


@pytest.fixture
def comparison() -> list[FacilityComparison]:
    """Create ranked comparison entries."""
    return [
        FacilityComparison(
            facility_id=i,
            facility_name=name,
            facility_type=FacilityArchetype.SOLAR_HEAVY,
            avg_carbon_intensity=ci,
            avg_production=40.0,
            avg_efficiency=58.0,
            avg_renewable=60.0,
            environmental_score=score,
            carbon_classification=band,
            rank=i,
        )
        for i, (name, ci, score, band) in enumerate(
            [
                ("Alpha", 0.4, 85, CarbonClassification.VERY_LOW),
                ("Beta", 1.5, 55, CarbonClassification.MODERATE),
                ("Gamma", 3.5, 20, CarbonClassification.VERY_HIGH),
            ],
            start=1,
        )
    ]


@pytest.fixture(autouse=True)
def close_figures():
    """Close all figures after each test."""
    yield
    plt.close("all")


# --- Tests ---


class TestTrendPlotConfig:
    def test_defaults(self) -> None:
        config = TrendPlotConfig()

        assert config.dpi == 100
        assert {band.value for band in CarbonClassification} <= set(config.colors)


class TestTrendVisualizer:
    """Tests for TrendVisualizer."""

    def test_carbon_intensity_plot(self, trend_points: list[TrendPoint]) -> None:
        ax = TrendVisualizer().plot_carbon_intensity({"Alpha": trend_points})

        assert len(ax.get_lines()) == 1
        assert ax.get_title() == "Carbon Intensity"
        assert ax.get_legend() is not None

    def test_carbon_intensity_empty_series(self) -> None:
        ax = TrendVisualizer().plot_carbon_intensity({})

        assert ax.get_lines() == []
        assert ax.get_legend() is None

    def test_renewable_and_efficiency_plot(
        self, trend_points: list[TrendPoint]
    ) -> None:
        ax = TrendVisualizer().plot_renewable_and_efficiency(trend_points)

        assert len(ax.get_lines()) == 2
        assert ax.get_ylim() == (0, 100)

    def test_comparison_plot(self, comparison: list[FacilityComparison]) -> None:
        """Test bars are drawn best-ranked on top."""
        ax = TrendVisualizer().plot_comparison(comparison)
        ax.figure.canvas.draw()

        assert len(ax.patches) == 3
        labels = [t.get_text() for t in ax.get_yticklabels()]
        assert labels[-1] == "Alpha"

    def test_dashboard_saves_file(
        self,
        tmp_path: Path,
        trend_points: list[TrendPoint],
        comparison: list[FacilityComparison],
    ) -> None:
        output = tmp_path / "dashboard.png"

        fig = TrendVisualizer().plot_dashboard(
            {"Alpha": trend_points}, comparison, save_path=output
        )

        assert output.exists()
        assert len(fig.axes) == 2
