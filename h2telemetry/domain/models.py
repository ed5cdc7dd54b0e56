"""Core domain models for the hydrogen facility telemetry engine.

All models use Pydantic with strict validation and serialize with camelCase
aliases so dashboard consumers receive the documented JSON shape. Units:
- Production volume: MW-equivalent
- Carbon intensity: kg CO2 / kg H2
- Percentages: 0-100
- Time: hourly-equivalent ticks
"""

import os
from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# =============================================================================
# Type Aliases with Validation
# =============================================================================

NonNegative = Annotated[float, Field(ge=0)]
Percentage = Annotated[float, Field(ge=0, le=100, description="Percentage (0-100)")]
Fraction = Annotated[float, Field(ge=0, le=1, description="Fraction (0-1)")]
CarbonIntensity = Annotated[
    float, Field(ge=0, description="Carbon intensity in kg CO2 / kg H2")
]

_MODEL_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    allow_inf_nan=False,
)


# =============================================================================
# Enums
# =============================================================================


class FacilityArchetype(str, Enum):
    """Energy-supply archetype of a production facility."""

    SOLAR_HEAVY = "solar_heavy"
    WIND_HEAVY = "wind_heavy"
    MIXED_ENERGY = "mixed_energy"
    GRID_DEPENDENT = "grid_dependent"


class CarbonClassification(str, Enum):
    """Carbon-intensity band of a reading."""

    VERY_LOW = "very_low"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"


class EfficiencyRating(str, Enum):
    """Efficiency of a reading relative to its trailing average."""

    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    BELOW_AVERAGE = "below_average"
    POOR = "poor"
    UNKNOWN = "unknown"


class TrendDirection(str, Enum):
    """Direction of carbon intensity over the two most recent 6h windows."""

    IMPROVING = "improving"
    DECLINING = "declining"


class AlertSeverity(str, Enum):
    """Severity of an anomaly alert."""

    MEDIUM = "medium"
    HIGH = "high"


class SimulatorState(str, Enum):
    """Run state of the simulation driver."""

    STOPPED = "stopped"
    RUNNING = "running"


# =============================================================================
# Archetype Mix
# =============================================================================


class EnergyMix(BaseModel):
    """Fixed solar/wind weighting and source label for an archetype."""

    model_config = ConfigDict(frozen=True)

    solar_weight: Fraction
    wind_weight: Fraction
    energy_source: str


ARCHETYPE_MIX: dict[FacilityArchetype, EnergyMix] = {
    FacilityArchetype.SOLAR_HEAVY: EnergyMix(
        solar_weight=0.8, wind_weight=0.2, energy_source="Solar"
    ),
    FacilityArchetype.WIND_HEAVY: EnergyMix(
        solar_weight=0.2, wind_weight=0.8, energy_source="Wind"
    ),
    FacilityArchetype.MIXED_ENERGY: EnergyMix(
        solar_weight=0.5, wind_weight=0.5, energy_source="Mixed Renewable"
    ),
    FacilityArchetype.GRID_DEPENDENT: EnergyMix(
        solar_weight=0.3, wind_weight=0.3, energy_source="Grid"
    ),
}

_missing_mix = set(FacilityArchetype) - set(ARCHETYPE_MIX)
if _missing_mix:
    raise RuntimeError(f"Archetypes without an energy mix: {sorted(_missing_mix)}")


# =============================================================================
# Core Domain Models
# =============================================================================


class FacilityProfile(BaseModel):
    """Static description of a simulated hydrogen production site."""

    model_config = _MODEL_CONFIG

    id: Annotated[int, Field(ge=1)]
    name: str
    archetype: FacilityArchetype
    base_intensity: CarbonIntensity
    renewable_fraction: Fraction

    @property
    def energy_mix(self) -> EnergyMix:
        """Solar/wind weighting for this facility's archetype."""
        return ARCHETYPE_MIX[self.archetype]


class MovingAverages(BaseModel):
    """24h moving averages over the trailing window."""

    model_config = _MODEL_CONFIG

    carbon_intensity: CarbonIntensity
    production_volume: NonNegative


class Insights(BaseModel):
    """Derived analytics attached to a reading.

    Fields that need history (moving averages, anomaly score, trend) stay
    ``None`` on a cold start.
    """

    model_config = _MODEL_CONFIG

    moving_average_24h: MovingAverages | None = Field(
        default=None, alias="movingAverage24h"
    )
    anomaly_score: Fraction | None = None
    is_anomaly: bool = False
    trend: TrendDirection | None = None
    trend_strength: NonNegative | None = None
    efficiency_rating: EfficiencyRating = EfficiencyRating.UNKNOWN
    carbon_classification: CarbonClassification
    environmental_score: Annotated[int, Field(ge=0, le=100)]


class Reading(BaseModel):
    """One synthetic telemetry sample for a facility.

    Readings are immutable; insights are attached by copying.
    """

    model_config = _MODEL_CONFIG

    facility_id: Annotated[int, Field(ge=1)]
    facility_name: str
    facility_type: FacilityArchetype
    timestamp: datetime
    production_volume: NonNegative
    carbon_intensity: CarbonIntensity
    energy_source: str
    efficiency: Percentage
    temperature: float
    pressure: float
    humidity: Percentage
    wind_speed: NonNegative
    renewable_percentage: Percentage
    weather_factor: NonNegative
    grid_usage: Percentage
    ai_insights: Insights | None = None

    def with_insights(self, insights: Insights) -> "Reading":
        """Return a copy of this reading carrying ``insights``."""
        return self.model_copy(update={"ai_insights": insights})

    @property
    def is_anomaly(self) -> bool:
        """Whether attached insights flag this reading as anomalous."""
        return self.ai_insights is not None and self.ai_insights.is_anomaly

    @property
    def environmental_score(self) -> int:
        """Environmental score, 0 when no insights are attached."""
        if self.ai_insights is None:
            return 0
        return self.ai_insights.environmental_score


class AlertDetails(BaseModel):
    """Snapshot of the reading that raised an alert."""

    model_config = _MODEL_CONFIG

    carbon_intensity: CarbonIntensity
    expected_range: str | None = None
    anomaly_score: Fraction | None = None
    production_volume: NonNegative
    efficiency: Percentage


class AnomalyAlert(BaseModel):
    """Alert raised when a reading is flagged anomalous."""

    model_config = _MODEL_CONFIG

    id: str
    facility_id: int
    facility_name: str
    timestamp: datetime
    type: str = "anomaly"
    severity: AlertSeverity
    message: str
    details: AlertDetails


# =============================================================================
# Configuration
# =============================================================================


class SimulationConfig(BaseModel):
    """Tunable parameters for the simulation driver and insight layer."""

    model_config = ConfigDict(frozen=True)

    tick_interval_ms: Annotated[int, Field(gt=0)] = 30_000
    history_capacity: Annotated[int, Field(gt=0)] = 168  # 1 week hourly
    alert_capacity: Annotated[int, Field(gt=0)] = 100
    trailing_window: Annotated[int, Field(gt=0, le=168)] = 24
    anomaly_threshold: Fraction = 0.3
    high_severity_threshold: Fraction = 0.5
    prewarm_hours: Annotated[int, Field(ge=0, le=168)] = 24
    seed: int | None = None  # For reproducibility

    @classmethod
    def from_env(cls) -> "SimulationConfig":
        """Build a config with overrides from environment variables."""
        overrides: dict[str, int] = {}
        tick = os.getenv("H2_TICK_INTERVAL_MS")
        if tick:
            overrides["tick_interval_ms"] = int(tick)
        prewarm = os.getenv("H2_PREWARM_HOURS")
        if prewarm:
            overrides["prewarm_hours"] = int(prewarm)
        seed = os.getenv("H2_RANDOM_SEED")
        if seed:
            overrides["seed"] = int(seed)
        return cls(**overrides)
