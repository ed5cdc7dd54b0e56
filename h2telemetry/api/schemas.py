"""Pydantic schemas for API request/response models.

Response schemas read the metrics dataclasses through ``from_attributes`` and
serialize with camelCase keys, matching the reading and alert models.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from h2telemetry.domain.models import (
    AnomalyAlert,
    CarbonClassification,
    EfficiencyRating,
    FacilityArchetype,
    Insights,
    SimulatorState,
    TrendDirection,
)


class ApiModel(BaseModel):
    """Base for API schemas: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Request Schemas
# =============================================================================


class SimulationStartRequest(ApiModel):
    """Start the periodic simulation."""

    model_config = ConfigDict(extra="forbid")

    interval_ms: int = Field(
        default=30_000,
        gt=0,
        le=3_600_000,
        description="Tick interval in milliseconds",
    )


class EmergencyScenarioRequest(ApiModel):
    """Force an emergency reading for one facility."""

    model_config = ConfigDict(extra="forbid")

    facility_id: int = Field(ge=1, description="Facility id")


# =============================================================================
# Response Schemas
# =============================================================================


class RangeStatsResponse(ApiModel):
    min: float
    max: float
    avg: float


class EnvironmentalSummaryResponse(ApiModel):
    """Environmental performance across current snapshots."""

    total_facilities: int
    average_environmental_score: int
    carbon_intensity_range: RangeStatsResponse
    renewable_energy_usage: RangeStatsResponse
    efficiency_range: RangeStatsResponse


class FacilityComparisonResponse(ApiModel):
    """Facility ranked by trailing-window environmental score."""

    facility_id: int
    facility_name: str
    facility_type: FacilityArchetype
    avg_carbon_intensity: float
    avg_production: float
    avg_efficiency: float
    avg_renewable: float
    environmental_score: int
    carbon_classification: CarbonClassification
    rank: int


class TrendPointResponse(ApiModel):
    timestamp: datetime
    carbon_intensity: float
    production_volume: float
    renewable_percentage: float
    efficiency: float
    environmental_score: int


class FacilityStatusResponse(ApiModel):
    id: int
    name: str
    type: FacilityArchetype
    carbon_intensity: float
    production_volume: float
    renewable_percentage: float
    efficiency: float
    environmental_score: int
    ai_insights: Insights | None = None
    status: str


class SystemStatusResponse(ApiModel):
    is_running: bool
    total_facilities: int
    anomalies_detected: int
    last_update: datetime


class MonitoringDashboardResponse(ApiModel):
    """Real-time monitoring dashboard payload."""

    timestamp: datetime
    summary: EnvironmentalSummaryResponse
    facilities: list[FacilityStatusResponse] = Field(default_factory=list)
    comparison: list[FacilityComparisonResponse] = Field(default_factory=list)
    recent_alerts: list[AnomalyAlert] = Field(default_factory=list)
    system_status: SystemStatusResponse | None = None


class SimulationStatsResponse(ApiModel):
    """Simulation driver statistics."""

    state: SimulatorState
    is_running: bool
    total_facilities: int
    total_data_points: int
    anomaly_alerts: int
    passes_completed: int
    last_update: datetime | None = None


class SimulationControlResponse(ApiModel):
    message: str
    state: SimulatorState


class FacilityCarbonAnalyticsResponse(ApiModel):
    facility_id: int
    facility_name: str
    current_carbon_intensity: float
    carbon_classification: CarbonClassification | None = None
    trend: TrendDirection | None = None
    trend_strength: float | None = None
    moving_average_24h: float | None = Field(default=None, alias="movingAverage24h")
    environmental_score: int = 0


class CarbonIntensityAnalyticsResponse(ApiModel):
    total_facilities: int
    carbon_intensity: RangeStatsResponse
    facilities_by_classification: dict[str, int]


class RenewablePerformerResponse(ApiModel):
    facility_id: int
    facility_name: str
    renewable_percentage: float
    carbon_intensity: float


class RenewableEnergyAnalyticsResponse(ApiModel):
    total_facilities: int
    renewable_percentage: RangeStatsResponse
    facilities_by_renewable_usage: dict[str, int]
    top_performers: list[RenewablePerformerResponse]


class FacilityEfficiencyResponse(ApiModel):
    facility_id: int
    facility_name: str
    efficiency: float
    efficiency_rating: EfficiencyRating


class EfficiencyAnalyticsResponse(ApiModel):
    total_facilities: int
    efficiency: RangeStatsResponse
    facilities_by_efficiency: dict[str, int]
    efficiency_trends: list[FacilityEfficiencyResponse]


class HealthResponse(ApiModel):
    """Health check response."""

    status: str
    version: str
    timestamp: datetime
    simulation_state: SimulatorState
