"""Insight and anomaly scoring layer."""

from h2telemetry.insights.analyzer import (
    attach_insights,
    calculate_anomaly_score,
    calculate_environmental_score,
    calculate_moving_averages,
    calculate_trend,
    classify_carbon_intensity,
    rate_efficiency,
)

__all__ = [
    "attach_insights",
    "calculate_anomaly_score",
    "calculate_environmental_score",
    "calculate_moving_averages",
    "calculate_trend",
    "classify_carbon_intensity",
    "rate_efficiency",
]
