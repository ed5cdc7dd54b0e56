"""Domain models for the hydrogen facility telemetry engine."""

from h2telemetry.domain.errors import FacilityNotFoundError
from h2telemetry.domain.models import (
    ARCHETYPE_MIX,
    AlertDetails,
    AlertSeverity,
    AnomalyAlert,
    CarbonClassification,
    EfficiencyRating,
    EnergyMix,
    FacilityArchetype,
    FacilityProfile,
    Insights,
    MovingAverages,
    Reading,
    SimulationConfig,
    SimulatorState,
    TrendDirection,
)

__all__ = [
    "ARCHETYPE_MIX",
    "AlertDetails",
    "AlertSeverity",
    "AnomalyAlert",
    "CarbonClassification",
    "EfficiencyRating",
    "EnergyMix",
    "FacilityArchetype",
    "FacilityNotFoundError",
    "FacilityProfile",
    "Insights",
    "MovingAverages",
    "Reading",
    "SimulationConfig",
    "SimulatorState",
    "TrendDirection",
]
