"""Monitoring dashboard and simulation statistics views."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from h2telemetry.domain.models import (
    AnomalyAlert,
    FacilityArchetype,
    Insights,
    Reading,
    SimulatorState,
)
from h2telemetry.metrics.summary import EnvironmentalSummary, FacilityComparison


@dataclass
class FacilityStatus:
    """Current state of one facility on the monitoring dashboard."""

    id: int
    name: str
    type: FacilityArchetype
    carbon_intensity: float
    production_volume: float
    renewable_percentage: float
    efficiency: float
    environmental_score: int
    ai_insights: Insights | None
    status: str

    @classmethod
    def from_reading(cls, reading: Reading) -> FacilityStatus:
        return cls(
            id=reading.facility_id,
            name=reading.facility_name,
            type=reading.facility_type,
            carbon_intensity=reading.carbon_intensity,
            production_volume=reading.production_volume,
            renewable_percentage=reading.renewable_percentage,
            efficiency=reading.efficiency,
            environmental_score=reading.environmental_score,
            ai_insights=reading.ai_insights,
            status="anomaly" if reading.is_anomaly else "normal",
        )


@dataclass
class SystemStatus:
    is_running: bool
    total_facilities: int
    anomalies_detected: int
    last_update: datetime


@dataclass
class MonitoringDashboard:
    """Everything the real-time monitoring view needs in one payload."""

    timestamp: datetime
    summary: EnvironmentalSummary
    facilities: list[FacilityStatus] = field(default_factory=list)
    comparison: list[FacilityComparison] = field(default_factory=list)
    recent_alerts: list[AnomalyAlert] = field(default_factory=list)
    system_status: SystemStatus | None = None


@dataclass
class SimulationStats:
    """Driver statistics.

    Attributes:
        state: Current run state.
        total_facilities: Registered facilities.
        total_data_points: Readings held across all history buffers.
        anomaly_alerts: Alerts currently retained.
        passes_completed: Generation passes run since construction.
        last_update: Timestamp of the most recent pass, if any.
    """

    state: SimulatorState
    total_facilities: int
    total_data_points: int
    anomaly_alerts: int
    passes_completed: int
    last_update: datetime | None = None

    @property
    def is_running(self) -> bool:
        return self.state == SimulatorState.RUNNING
