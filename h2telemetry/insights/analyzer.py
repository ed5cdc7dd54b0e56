"""Insight and anomaly scoring for telemetry readings.

Every function here is pure: the result depends only on the reading and the
history passed in. Ratios against a trailing mean treat a zero (or
near-zero) mean as zero deviation so no NaN or infinity can reach a score.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from h2telemetry.domain.models import (
    CarbonClassification,
    EfficiencyRating,
    Insights,
    MovingAverages,
    Reading,
    TrendDirection,
)

_EPSILON = 1e-9

CARBON_WEIGHT = 0.7
PRODUCTION_WEIGHT = 0.3
TREND_SPAN = 6  # readings per trend half-window

# Upper bounds (inclusive) for each carbon band
CARBON_BANDS: tuple[tuple[float, CarbonClassification], ...] = (
    (0.5, CarbonClassification.VERY_LOW),
    (1.0, CarbonClassification.LOW),
    (2.0, CarbonClassification.MODERATE),
    (3.0, CarbonClassification.HIGH),
)

# Minimum ratio of current to average efficiency for each rating
EFFICIENCY_BANDS: tuple[tuple[float, EfficiencyRating], ...] = (
    (1.10, EfficiencyRating.EXCELLENT),
    (1.05, EfficiencyRating.GOOD),
    (0.95, EfficiencyRating.AVERAGE),
    (0.90, EfficiencyRating.BELOW_AVERAGE),
)


def _mean(values: Sequence[float]) -> float:
    return float(np.mean(values)) if len(values) > 0 else 0.0


def _relative_deviation(value: float, mean: float) -> float:
    """|value - mean| / mean, or 0 for a zero mean."""
    if abs(mean) < _EPSILON:
        return 0.0
    return abs(value - mean) / abs(mean)


def classify_carbon_intensity(carbon_intensity: float) -> CarbonClassification:
    """Classify a carbon intensity (kg CO2 / kg H2) into a band."""
    for upper, band in CARBON_BANDS:
        if carbon_intensity <= upper:
            return band
    return CarbonClassification.VERY_HIGH


def calculate_moving_averages(window: Sequence[Reading]) -> MovingAverages | None:
    """Mean carbon intensity and production volume over a window."""
    if not window:
        return None
    return MovingAverages(
        carbon_intensity=round(_mean([r.carbon_intensity for r in window]), 4),
        production_volume=round(_mean([r.production_volume for r in window]), 2),
    )


def calculate_anomaly_score(
    reading: Reading,
    window: Sequence[Reading],
) -> float:
    """Weighted deviation of a reading from its trailing window.

    Args:
        reading: Current reading.
        window: Trailing readings (non-empty).

    Returns:
        Score in [0, 1], rounded to 2 decimals.
    """
    mean_intensity = _mean([r.carbon_intensity for r in window])
    mean_production = _mean([r.production_volume for r in window])

    score = CARBON_WEIGHT * _relative_deviation(
        reading.carbon_intensity, mean_intensity
    ) + PRODUCTION_WEIGHT * _relative_deviation(
        reading.production_volume, mean_production
    )
    return min(1.0, max(0.0, round(score, 2)))


def calculate_trend(
    window: Sequence[Reading],
) -> tuple[TrendDirection, float] | None:
    """Compare mean carbon intensity of the last two 6-reading spans.

    Returns:
        ``(direction, strength)`` or ``None`` with fewer than 12 readings.
    """
    if len(window) < 2 * TREND_SPAN:
        return None

    recent = _mean([r.carbon_intensity for r in window[-TREND_SPAN:]])
    older = _mean([r.carbon_intensity for r in window[-2 * TREND_SPAN : -TREND_SPAN]])

    direction = TrendDirection.IMPROVING if recent < older else TrendDirection.DECLINING
    return direction, round(_relative_deviation(recent, older), 2)


def rate_efficiency(efficiency: float, window: Sequence[Reading]) -> EfficiencyRating:
    """Rate efficiency against the trailing-window average."""
    if not window:
        return EfficiencyRating.UNKNOWN

    average = _mean([r.efficiency for r in window])
    if average < _EPSILON:
        return EfficiencyRating.UNKNOWN

    for ratio, rating in EFFICIENCY_BANDS:
        if efficiency >= average * ratio:
            return rating
    return EfficiencyRating.POOR


def calculate_environmental_score(
    renewable_percentage: float,
    carbon_intensity: float,
    efficiency: float,
    is_anomaly: bool = False,
) -> int:
    """Composite 0-100 environmental score.

    Starts from the renewable share, adds tiered bonuses for low carbon
    intensity and high efficiency, and subtracts 10 for an anomaly.
    """
    score = renewable_percentage

    if carbon_intensity <= 0.5:
        score += 15
    elif carbon_intensity <= 1.0:
        score += 10
    elif carbon_intensity <= 2.0:
        score += 5

    if efficiency >= 80:
        score += 10
    elif efficiency >= 70:
        score += 5

    if is_anomaly:
        score -= 10

    # Half-up rounding
    return int(max(0, min(100, math.floor(score + 0.5))))


def attach_insights(
    reading: Reading,
    history: Sequence[Reading],
    window: int = 24,
    anomaly_threshold: float = 0.3,
) -> Reading:
    """Return a copy of ``reading`` with insights computed from ``history``.

    Args:
        reading: Freshly generated reading.
        history: Facility history, oldest first. Not modified.
        window: Trailing window size for averages and ratings.
        anomaly_threshold: Score above which the reading is anomalous.

    Returns:
        Reading with ``ai_insights`` set.
    """
    trailing = list(history[-window:]) if window > 0 else []

    moving_average = None
    anomaly_score = None
    is_anomaly = False
    trend = None
    trend_strength = None

    if trailing:
        moving_average = calculate_moving_averages(trailing)
        anomaly_score = calculate_anomaly_score(reading, trailing)
        is_anomaly = anomaly_score > anomaly_threshold

        trend_result = calculate_trend(trailing)
        if trend_result is not None:
            trend, trend_strength = trend_result

    insights = Insights(
        moving_average_24h=moving_average,
        anomaly_score=anomaly_score,
        is_anomaly=is_anomaly,
        trend=trend,
        trend_strength=trend_strength,
        efficiency_rating=rate_efficiency(reading.efficiency, trailing),
        carbon_classification=classify_carbon_intensity(reading.carbon_intensity),
        environmental_score=calculate_environmental_score(
            reading.renewable_percentage,
            reading.carbon_intensity,
            reading.efficiency,
            is_anomaly,
        ),
    )
    return reading.with_insights(insights)
