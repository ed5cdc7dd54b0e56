"""Synthetic telemetry generators and the facility registry."""

from h2telemetry.generators.history import HistoryStore
from h2telemetry.generators.random_source import RandomSource, default_random_source
from h2telemetry.generators.registry import DEFAULT_FACILITIES, FacilityRegistry
from h2telemetry.generators.telemetry import FacilityTelemetryGenerator

__all__ = [
    "DEFAULT_FACILITIES",
    "FacilityRegistry",
    "FacilityTelemetryGenerator",
    "HistoryStore",
    "RandomSource",
    "default_random_source",
]
