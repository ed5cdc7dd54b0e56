"""Test fixtures for reproducible telemetry scenarios.

Provides:
- Fixed timestamps (spring equinox noon, night)
- A scripted random source for golden-value generation
- A reading factory for insight and aggregation tests
- Seeded simulators with and without pre-warmed history
"""

from collections.abc import Callable, Iterable
from datetime import datetime, timedelta

import pytest

from h2telemetry.domain.models import (
    FacilityArchetype,
    FacilityProfile,
    Reading,
    SimulationConfig,
)
from h2telemetry.generators.registry import FacilityRegistry
from h2telemetry.simulation.driver import TelemetrySimulator

# =============================================================================
# Random Source
# =============================================================================


class SequenceRandomSource:
    """Deterministic random source replaying scripted unit values.

    ``random()`` returns the next scripted value; ``uniform(low, high)`` maps
    the next value onto ``[low, high]``. Once the script runs out every draw
    returns ``default``.
    """

    def __init__(self, values: Iterable[float] = (), default: float = 0.5) -> None:
        self._values = list(values)
        self.default = default
        self.draws = 0

    def _next(self) -> float:
        self.draws += 1
        if self._values:
            return self._values.pop(0)
        return self.default

    def random(self) -> float:
        return self._next()

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self._next()


@pytest.fixture
def constant_random() -> SequenceRandomSource:
    """Random source returning 0.5 for every draw."""
    return SequenceRandomSource()


@pytest.fixture
def scripted_random() -> Callable[..., SequenceRandomSource]:
    """Factory for random sources replaying the given unit values."""
    return SequenceRandomSource


# =============================================================================
# Time Fixtures
# =============================================================================


@pytest.fixture
def equinox_noon() -> datetime:
    """Day 80 of the year at noon (seasonal factor 0.8, full solar)."""
    return datetime(2025, 3, 21, 12, 0, 0)


@pytest.fixture
def base_timestamp() -> datetime:
    """Standard base timestamp for testing (midnight, summer day)."""
    return datetime(2025, 7, 15, 0, 0, 0)


# =============================================================================
# Reading Fixtures
# =============================================================================

ReadingFactory = Callable[..., Reading]


@pytest.fixture
def make_reading(base_timestamp: datetime) -> ReadingFactory:
    """Factory for readings with controllable key metrics."""

    def _make(
        carbon_intensity: float = 1.0,
        production_volume: float = 40.0,
        efficiency: float = 60.0,
        renewable_percentage: float = 50.0,
        facility_id: int = 1,
        hour: int = 0,
        facility_name: str = "GreenTech Mumbai",
        facility_type: FacilityArchetype = FacilityArchetype.SOLAR_HEAVY,
    ) -> Reading:
        return Reading(
            facility_id=facility_id,
            facility_name=facility_name,
            facility_type=facility_type,
            timestamp=base_timestamp + timedelta(hours=hour),
            production_volume=production_volume,
            carbon_intensity=carbon_intensity,
            energy_source="Solar",
            efficiency=efficiency,
            temperature=25.0,
            pressure=1.0,
            humidity=50.0,
            wind_speed=5.0,
            renewable_percentage=renewable_percentage,
            weather_factor=0.9,
            grid_usage=100.0 - renewable_percentage,
        )

    return _make


@pytest.fixture
def steady_history(make_reading: ReadingFactory) -> list[Reading]:
    """24 identical hourly readings: CI 1.0, production 40, efficiency 60."""
    return [make_reading(hour=h) for h in range(24)]


# =============================================================================
# Registry & Simulator Fixtures
# =============================================================================


@pytest.fixture
def three_facility_registry() -> FacilityRegistry:
    """Small registry with one facility per renewable archetype."""
    return FacilityRegistry(
        [
            FacilityProfile(
                id=1,
                name="Alpha Solar",
                archetype=FacilityArchetype.SOLAR_HEAVY,
                base_intensity=0.5,
                renewable_fraction=0.8,
            ),
            FacilityProfile(
                id=2,
                name="Beta Wind",
                archetype=FacilityArchetype.WIND_HEAVY,
                base_intensity=0.3,
                renewable_fraction=0.9,
            ),
            FacilityProfile(
                id=3,
                name="Gamma Mixed",
                archetype=FacilityArchetype.MIXED_ENERGY,
                base_intensity=1.2,
                renewable_fraction=0.6,
            ),
        ]
    )


@pytest.fixture
def simulator() -> TelemetrySimulator:
    """Seeded simulator over the default registry, no pre-warmed history."""
    sim = TelemetrySimulator(SimulationConfig(seed=7, prewarm_hours=0))
    yield sim
    sim.shutdown()


@pytest.fixture
def warm_simulator() -> TelemetrySimulator:
    """Seeded simulator with 24 hours of pre-warmed history."""
    sim = TelemetrySimulator(SimulationConfig(seed=11, prewarm_hours=24))
    sim.initialize()
    yield sim
    sim.shutdown()
