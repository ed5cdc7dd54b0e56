"""Environmental summaries, facility comparison and trend series.

Aggregations are read-only views computed from current snapshots or from a
facility's own history buffer.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

import numpy as np

from h2telemetry.domain.models import (
    CarbonClassification,
    FacilityArchetype,
    FacilityProfile,
    Reading,
)
from h2telemetry.insights.analyzer import (
    calculate_environmental_score,
    classify_carbon_intensity,
)


@dataclass
class RangeStats:
    """Min/max/average of a metric across facilities.

    Attributes:
        min: Smallest value.
        max: Largest value.
        avg: Mean value, rounded.
    """

    min: float = 0.0
    max: float = 0.0
    avg: float = 0.0

    @classmethod
    def from_values(cls, values: Sequence[float], precision: int = 1) -> RangeStats:
        """Calculate range statistics, zeros for an empty sequence."""
        if len(values) == 0:
            return cls()
        arr = np.asarray(values, dtype=float)
        return cls(
            min=float(arr.min()),
            max=float(arr.max()),
            avg=round(float(arr.mean()), precision),
        )


@dataclass
class EnvironmentalSummary:
    """Aggregated environmental performance over current snapshots.

    Attributes:
        total_facilities: Facilities with a current snapshot.
        average_environmental_score: Mean environmental score (integer).
        carbon_intensity_range: Carbon intensity statistics.
        renewable_energy_usage: Renewable percentage statistics.
        efficiency_range: Efficiency statistics.
    """

    total_facilities: int = 0
    average_environmental_score: int = 0
    carbon_intensity_range: RangeStats = field(default_factory=RangeStats)
    renewable_energy_usage: RangeStats = field(default_factory=RangeStats)
    efficiency_range: RangeStats = field(default_factory=RangeStats)

    @classmethod
    def from_readings(cls, readings: Sequence[Reading]) -> EnvironmentalSummary:
        """Summarize a batch of current readings."""
        if not readings:
            return cls()

        scores = [r.environmental_score for r in readings]
        return cls(
            total_facilities=len(readings),
            average_environmental_score=int(np.floor(np.mean(scores) + 0.5)),
            carbon_intensity_range=RangeStats.from_values(
                [r.carbon_intensity for r in readings], precision=4
            ),
            renewable_energy_usage=RangeStats.from_values(
                [r.renewable_percentage for r in readings]
            ),
            efficiency_range=RangeStats.from_values([r.efficiency for r in readings]),
        )


@dataclass
class FacilityComparison:
    """One facility's trailing-window averages and score.

    Attributes:
        facility_id: Facility id.
        facility_name: Display name.
        facility_type: Archetype.
        avg_carbon_intensity: Mean carbon intensity over the window.
        avg_production: Mean production volume over the window.
        avg_efficiency: Mean efficiency over the window.
        avg_renewable: Mean renewable percentage over the window.
        environmental_score: Score computed from the averages.
        carbon_classification: Band of the average carbon intensity.
        rank: 1-based position after ranking, 0 before.
    """

    facility_id: int
    facility_name: str
    facility_type: FacilityArchetype
    avg_carbon_intensity: float
    avg_production: float
    avg_efficiency: float
    avg_renewable: float
    environmental_score: int
    carbon_classification: CarbonClassification
    rank: int = 0

    @classmethod
    def from_history(
        cls,
        facility: FacilityProfile,
        window: Sequence[Reading],
    ) -> FacilityComparison | None:
        """Build a comparison entry from a trailing window, None if empty."""
        if not window:
            return None

        avg_intensity = float(np.mean([r.carbon_intensity for r in window]))
        avg_production = float(np.mean([r.production_volume for r in window]))
        avg_efficiency = float(np.mean([r.efficiency for r in window]))
        avg_renewable = float(np.mean([r.renewable_percentage for r in window]))

        return cls(
            facility_id=facility.id,
            facility_name=facility.name,
            facility_type=facility.archetype,
            avg_carbon_intensity=round(avg_intensity, 4),
            avg_production=round(avg_production, 2),
            avg_efficiency=round(avg_efficiency, 1),
            avg_renewable=round(avg_renewable, 1),
            environmental_score=calculate_environmental_score(
                avg_renewable, avg_intensity, avg_efficiency
            ),
            carbon_classification=classify_carbon_intensity(avg_intensity),
        )


def rank_facilities(
    comparisons: Sequence[FacilityComparison],
) -> list[FacilityComparison]:
    """Sort by environmental score (best first) and assign ranks."""
    ranked = sorted(comparisons, key=lambda c: c.environmental_score, reverse=True)
    for position, entry in enumerate(ranked, start=1):
        entry.rank = position
    return ranked


@dataclass
class TrendPoint:
    """One point of a facility's carbon intensity trend series."""

    timestamp: datetime
    carbon_intensity: float
    production_volume: float
    renewable_percentage: float
    efficiency: float
    environmental_score: int

    @classmethod
    def from_reading(cls, reading: Reading) -> TrendPoint:
        return cls(
            timestamp=reading.timestamp,
            carbon_intensity=reading.carbon_intensity,
            production_volume=reading.production_volume,
            renewable_percentage=reading.renewable_percentage,
            efficiency=reading.efficiency,
            environmental_score=reading.environmental_score,
        )
