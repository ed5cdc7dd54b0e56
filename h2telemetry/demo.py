"""Demo module for the hydrogen facility telemetry engine.

Runs a short hourly simulation across the demo facilities, optionally forces an
emergency reading, and prints the environmental summary, ranking and alerts.

Usage:
    python -m h2telemetry.demo

Or in Python:
    from h2telemetry.demo import run_monitoring_demo
    results = run_monitoring_demo()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path

from h2telemetry.domain.models import AnomalyAlert, SimulationConfig
from h2telemetry.metrics.summary import (
    EnvironmentalSummary,
    FacilityComparison,
    TrendPoint,
)
from h2telemetry.simulation.driver import TelemetrySimulator

logger = logging.getLogger(__name__)


@dataclass
class DemoConfig:
    """Configuration for the monitoring demo.

    Attributes:
        hours: Hourly passes to simulate after pre-warming.
        prewarm_hours: Hours of history generated before the run.
        emergency_facility_id: Facility to force into an emergency, if any.
        seed: Random seed for reproducibility.
    """

    hours: int = 48
    prewarm_hours: int = 24
    emergency_facility_id: int | None = 2
    seed: int = 42


@dataclass
class DemoResults:
    """Results from running the monitoring demo."""

    summary: EnvironmentalSummary
    comparison: list[FacilityComparison]
    alerts: list[AnomalyAlert]
    trends: dict[str, list[TrendPoint]] = field(default_factory=dict)
    passes: int = 0

    def print_summary(self) -> None:
        """Print a readable report to stdout."""
        s = self.summary
        print("\n" + "=" * 60)
        print("HYDROGEN FACILITY TELEMETRY SUMMARY")
        print("=" * 60)
        print(f"Passes simulated:        {self.passes}")
        print(f"Facilities:              {s.total_facilities}")
        print(f"Avg environmental score: {s.average_environmental_score}")
        print(
            f"Carbon intensity:        {s.carbon_intensity_range.min:.4f} - "
            f"{s.carbon_intensity_range.max:.4f} (avg {s.carbon_intensity_range.avg})"
        )
        print(
            f"Renewable share:         {s.renewable_energy_usage.min:.1f}% - "
            f"{s.renewable_energy_usage.max:.1f}% (avg {s.renewable_energy_usage.avg}%)"
        )

        print("\nRanking (trailing 24h):")
        for entry in self.comparison:
            print(
                f"  {entry.rank}. {entry.facility_name:<22} "
                f"score {entry.environmental_score:>3}  "
                f"CI {entry.avg_carbon_intensity:.4f} "
                f"({entry.carbon_classification.value})"
            )

        print(f"\nAnomaly alerts: {len(self.alerts)} (showing last 5)")
        for alert in self.alerts[-5:]:
            print(
                f"  [{alert.severity.value:>6}] {alert.facility_name}: "
                f"CI {alert.details.carbon_intensity} "
                f"score {alert.details.anomaly_score}"
            )
        print("=" * 60)

    def plot_dashboard(self, save_path: str | Path) -> None:
        """Save the trend and comparison dashboard as an image."""
        import matplotlib.pyplot as plt

        from h2telemetry.visualization import TrendVisualizer

        fig = TrendVisualizer().plot_dashboard(
            self.trends, self.comparison, save_path=save_path
        )
        plt.close(fig)


def run_monitoring_demo(config: DemoConfig | None = None) -> DemoResults:
    """Simulate hourly passes and collect the dashboard views.

    Args:
        config: Optional demo configuration. Uses defaults if not provided.

    Returns:
        DemoResults with summary, ranking, alerts and trends.
    """
    if config is None:
        config = DemoConfig()

    start = datetime.now().replace(minute=0, second=0, microsecond=0)
    clock_time = start

    def clock() -> datetime:
        return clock_time

    simulator = TelemetrySimulator(
        SimulationConfig(prewarm_hours=config.prewarm_hours, seed=config.seed),
        clock=clock,
    )
    simulator.initialize()

    logger.info("Simulating %d hourly passes", config.hours)
    for hour in range(1, config.hours + 1):
        clock_time = start + timedelta(hours=hour)
        simulator.run_generation_pass()

    if config.emergency_facility_id is not None:
        simulator.simulate_emergency_scenario(config.emergency_facility_id)

    trends = {
        facility.name: simulator.get_carbon_intensity_trends(facility.id, 168)
        for facility in simulator.registry
    }
    return DemoResults(
        summary=simulator.get_environmental_summary(),
        comparison=simulator.get_facility_comparison(),
        alerts=simulator.get_anomaly_alerts(100),
        trends=trends,
        passes=simulator.get_simulation_stats().passes_completed,
    )


def main() -> None:
    """Main entry point for running the demo from the command line."""
    import argparse

    parser = argparse.ArgumentParser(description="Hydrogen Facility Telemetry Demo")
    parser.add_argument(
        "--hours",
        type=int,
        default=48,
        help="Hourly passes to simulate (default: 48)",
    )
    parser.add_argument(
        "--emergency",
        type=int,
        default=2,
        help="Facility id to force into an emergency, 0 to skip (default: 2)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output directory for the dashboard image",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every pass and alert",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = DemoConfig(
        hours=args.hours,
        emergency_facility_id=args.emergency or None,
        seed=args.seed,
    )
    results = run_monitoring_demo(config)
    results.print_summary()

    if args.output:
        output_dir = Path(args.output)
        output_dir.mkdir(parents=True, exist_ok=True)
        results.plot_dashboard(output_dir / "dashboard.png")
        print(f"Dashboard saved: {output_dir / 'dashboard.png'}")


if __name__ == "__main__":
    main()
