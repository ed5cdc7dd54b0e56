"""Aggregated views over facility telemetry."""

from h2telemetry.metrics.analytics import (
    CarbonIntensityAnalytics,
    EfficiencyAnalytics,
    FacilityCarbonAnalytics,
    FacilityEfficiency,
    RenewableEnergyAnalytics,
    RenewablePerformer,
)
from h2telemetry.metrics.dashboard import (
    FacilityStatus,
    MonitoringDashboard,
    SimulationStats,
    SystemStatus,
)
from h2telemetry.metrics.summary import (
    EnvironmentalSummary,
    FacilityComparison,
    RangeStats,
    TrendPoint,
    rank_facilities,
)

__all__ = [
    # Summary
    "EnvironmentalSummary",
    "FacilityComparison",
    "RangeStats",
    "TrendPoint",
    "rank_facilities",
    # Analytics
    "CarbonIntensityAnalytics",
    "EfficiencyAnalytics",
    "FacilityCarbonAnalytics",
    "FacilityEfficiency",
    "RenewableEnergyAnalytics",
    "RenewablePerformer",
    # Dashboard
    "FacilityStatus",
    "MonitoringDashboard",
    "SimulationStats",
    "SystemStatus",
]
