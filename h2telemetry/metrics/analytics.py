"""Fleet analytics over current facility snapshots.

Groups facilities into carbon, renewable-usage and efficiency buckets for the
analytics endpoints.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from h2telemetry.domain.models import (
    CarbonClassification,
    EfficiencyRating,
    Reading,
    TrendDirection,
)
from h2telemetry.metrics.summary import RangeStats


@dataclass
class FacilityCarbonAnalytics:
    """Carbon intensity analytics for a single facility."""

    facility_id: int
    facility_name: str
    current_carbon_intensity: float
    carbon_classification: CarbonClassification | None = None
    trend: TrendDirection | None = None
    trend_strength: float | None = None
    moving_average_24h: float | None = None
    environmental_score: int = 0

    @classmethod
    def from_reading(cls, reading: Reading) -> FacilityCarbonAnalytics:
        insights = reading.ai_insights
        if insights is None:
            return cls(
                facility_id=reading.facility_id,
                facility_name=reading.facility_name,
                current_carbon_intensity=reading.carbon_intensity,
            )
        return cls(
            facility_id=reading.facility_id,
            facility_name=reading.facility_name,
            current_carbon_intensity=reading.carbon_intensity,
            carbon_classification=insights.carbon_classification,
            trend=insights.trend,
            trend_strength=insights.trend_strength,
            moving_average_24h=(
                insights.moving_average_24h.carbon_intensity
                if insights.moving_average_24h is not None
                else None
            ),
            environmental_score=insights.environmental_score,
        )


@dataclass
class CarbonIntensityAnalytics:
    """Fleet-wide carbon intensity analytics."""

    total_facilities: int = 0
    carbon_intensity: RangeStats = field(default_factory=RangeStats)
    facilities_by_classification: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_readings(cls, readings: Sequence[Reading]) -> CarbonIntensityAnalytics:
        counts = {band.value: 0 for band in CarbonClassification}
        for reading in readings:
            if reading.ai_insights is not None:
                counts[reading.ai_insights.carbon_classification.value] += 1
        return cls(
            total_facilities=len(readings),
            carbon_intensity=RangeStats.from_values(
                [r.carbon_intensity for r in readings], precision=4
            ),
            facilities_by_classification=counts,
        )


def _renewable_bucket(percentage: float) -> str:
    if percentage >= 80:
        return "excellent"
    if percentage >= 60:
        return "good"
    if percentage >= 40:
        return "moderate"
    return "poor"


def _efficiency_bucket(efficiency: float) -> str:
    if efficiency >= 80:
        return "excellent"
    if efficiency >= 70:
        return "good"
    if efficiency >= 60:
        return "average"
    return "below_average"


@dataclass
class RenewablePerformer:
    facility_id: int
    facility_name: str
    renewable_percentage: float
    carbon_intensity: float


@dataclass
class RenewableEnergyAnalytics:
    """Fleet-wide renewable energy usage analytics.

    Attributes:
        total_facilities: Facilities with a current snapshot.
        renewable_percentage: Renewable percentage statistics.
        facilities_by_renewable_usage: Counts per usage bucket.
        top_performers: Up to three facilities with the highest renewable share.
    """

    total_facilities: int = 0
    renewable_percentage: RangeStats = field(default_factory=RangeStats)
    facilities_by_renewable_usage: dict[str, int] = field(default_factory=dict)
    top_performers: list[RenewablePerformer] = field(default_factory=list)

    TOP_PERFORMER_COUNT = 3

    @classmethod
    def from_readings(cls, readings: Sequence[Reading]) -> RenewableEnergyAnalytics:
        counts = {"excellent": 0, "good": 0, "moderate": 0, "poor": 0}
        for reading in readings:
            counts[_renewable_bucket(reading.renewable_percentage)] += 1

        best = sorted(readings, key=lambda r: r.renewable_percentage, reverse=True)
        return cls(
            total_facilities=len(readings),
            renewable_percentage=RangeStats.from_values(
                [r.renewable_percentage for r in readings]
            ),
            facilities_by_renewable_usage=counts,
            top_performers=[
                RenewablePerformer(
                    facility_id=r.facility_id,
                    facility_name=r.facility_name,
                    renewable_percentage=r.renewable_percentage,
                    carbon_intensity=r.carbon_intensity,
                )
                for r in best[: cls.TOP_PERFORMER_COUNT]
            ],
        )


@dataclass
class FacilityEfficiency:
    facility_id: int
    facility_name: str
    efficiency: float
    efficiency_rating: EfficiencyRating


@dataclass
class EfficiencyAnalytics:
    """Fleet-wide efficiency analytics."""

    total_facilities: int = 0
    efficiency: RangeStats = field(default_factory=RangeStats)
    facilities_by_efficiency: dict[str, int] = field(default_factory=dict)
    efficiency_trends: list[FacilityEfficiency] = field(default_factory=list)

    @classmethod
    def from_readings(cls, readings: Sequence[Reading]) -> EfficiencyAnalytics:
        counts = {"excellent": 0, "good": 0, "average": 0, "below_average": 0}
        for reading in readings:
            counts[_efficiency_bucket(reading.efficiency)] += 1

        return cls(
            total_facilities=len(readings),
            efficiency=RangeStats.from_values([r.efficiency for r in readings]),
            facilities_by_efficiency=counts,
            efficiency_trends=[
                FacilityEfficiency(
                    facility_id=r.facility_id,
                    facility_name=r.facility_name,
                    efficiency=r.efficiency,
                    efficiency_rating=(
                        r.ai_insights.efficiency_rating
                        if r.ai_insights is not None
                        else EfficiencyRating.UNKNOWN
                    ),
                )
                for r in readings
            ],
        )
