"""Tests for the facility registry, history store and telemetry generator."""

from datetime import datetime, timedelta

import pytest

from h2telemetry.domain.errors import FacilityNotFoundError
from h2telemetry.domain.models import FacilityArchetype
from h2telemetry.generators import (
    DEFAULT_FACILITIES,
    FacilityRegistry,
    FacilityTelemetryGenerator,
    HistoryStore,
)


class TestFacilityRegistry:
    """Tests for FacilityRegistry."""

    def test_default_registry_has_five_facilities(self) -> None:
        """Test the default registry seeds the five demo sites in order."""
        registry = FacilityRegistry()

        assert len(registry) == 5
        assert registry.ids == [1, 2, 3, 4, 5]
        assert registry.get(4).archetype == FacilityArchetype.GRID_DEPENDENT

    def test_unknown_facility_raises(self) -> None:
        """Test that lookups of unknown ids raise FacilityNotFoundError."""
        registry = FacilityRegistry()

        with pytest.raises(FacilityNotFoundError, match="Facility 99 not found"):
            registry.get(99)
        assert 99 not in registry

    def test_duplicate_ids_rejected(self) -> None:
        """Test that duplicate facility ids are rejected."""
        with pytest.raises(ValueError, match="Duplicate"):
            FacilityRegistry([DEFAULT_FACILITIES[0], DEFAULT_FACILITIES[0]])


class TestHistoryStore:
    """Tests for HistoryStore."""

    def test_evicts_oldest_beyond_capacity(self, make_reading) -> None:
        """Test FIFO eviction keeps the most recent readings."""
        store = HistoryStore(capacity=3)
        for hour in range(5):
            store.append(make_reading(hour=hour))

        kept = store.get(1)
        assert len(kept) == 3
        assert [r.timestamp.hour for r in kept] == [2, 3, 4]

    def test_trailing_returns_most_recent(self, make_reading) -> None:
        """Test trailing() returns the newest readings oldest first."""
        store = HistoryStore()
        for hour in range(10):
            store.append(make_reading(hour=hour))

        assert [r.timestamp.hour for r in store.trailing(1, 3)] == [7, 8, 9]
        assert store.trailing(1, 0) == []
        assert store.trailing(2, 5) == []

    def test_get_returns_copy(self, make_reading) -> None:
        """Test that callers cannot mutate the buffer through get()."""
        store = HistoryStore()
        store.append(make_reading())

        store.get(1).clear()
        assert store.length(1) == 1

    def test_total_points_spans_facilities(self, make_reading) -> None:
        """Test total_points counts every buffered reading."""
        store = HistoryStore()
        store.append(make_reading(facility_id=1))
        store.append(make_reading(facility_id=2))
        store.append(make_reading(facility_id=2, hour=1))

        assert store.total_points() == 3

    def test_invalid_capacity(self) -> None:
        """Test non-positive capacity is rejected."""
        with pytest.raises(ValueError):
            HistoryStore(capacity=0)


class TestFacilityTelemetryGenerator:
    """Tests for FacilityTelemetryGenerator."""

    @pytest.fixture
    def generator(self) -> FacilityTelemetryGenerator:
        """Create a seeded generator for reproducibility."""
        return FacilityTelemetryGenerator(seed=42)

    def test_empty_registry_is_kept(self) -> None:
        generator = FacilityTelemetryGenerator(registry=FacilityRegistry([]))

        assert len(generator.registry) == 0
        with pytest.raises(FacilityNotFoundError):
            generator.generate(1, datetime(2025, 3, 21, 12, 0, 0))

    def test_golden_values_with_scripted_randomness(
        self, constant_random, equinox_noon: datetime
    ) -> None:
        """Test exact output for a wind-heavy facility with all draws at 0.5."""
        generator = FacilityTelemetryGenerator(random_source=constant_random)
        reading = generator.generate(2, equinox_noon)

        # seasonal 0.8 x normal weather 1.0; solar 1.0, wind 0.6
        # renewable = 0.9 * (0.2 * 1.0 + 0.8 * 0.6) * 0.8 = 0.4896
        assert reading.facility_name == "CleanEnergy Gujarat"
        assert reading.energy_source == "Wind"
        assert reading.weather_factor == pytest.approx(0.8)
        assert reading.renewable_percentage == pytest.approx(49.0)
        assert reading.grid_usage == pytest.approx(51.0)
        assert reading.production_volume == pytest.approx(37.24)
        assert reading.efficiency == pytest.approx(58.5, abs=0.05)
        assert reading.carbon_intensity == pytest.approx(0.4530, abs=1e-4)
        assert reading.pressure == pytest.approx(1.0)
        assert reading.humidity == pytest.approx(55.0)
        assert reading.wind_speed == pytest.approx(6.0)
        assert reading.temperature == pytest.approx(34.7)
        assert reading.timestamp == equinox_noon
        assert reading.ai_insights is None

    def test_draw_order_is_fixed(
        self, constant_random, equinox_noon: datetime
    ) -> None:
        """Test a normal-weather reading consumes exactly ten draws."""
        generator = FacilityTelemetryGenerator(random_source=constant_random)
        generator.generate(1, equinox_noon)

        assert constant_random.draws == 10

    def test_bad_weather_event(self, scripted_random, equinox_noon: datetime) -> None:
        """Test the 5% bad-weather branch multiplies the baseline by 0.3."""
        source = scripted_random([0.01])
        reading = FacilityTelemetryGenerator(random_source=source).generate(
            1, equinox_noon
        )

        assert reading.weather_factor == pytest.approx(0.24)

    def test_excellent_weather_is_capped(
        self, scripted_random, equinox_noon: datetime
    ) -> None:
        """Test the excellent-weather branch is capped at 1.0."""
        summer = equinox_noon.replace(month=6, day=21)  # seasonal ~1.2
        source = scripted_random([0.10])
        reading = FacilityTelemetryGenerator(random_source=source).generate(1, summer)

        assert reading.weather_factor == pytest.approx(1.0)

    def test_no_solar_at_night(self, scripted_random, equinox_noon: datetime) -> None:
        """Test solar-heavy renewable share only reflects wind at night."""
        night = equinox_noon.replace(hour=2)
        source = scripted_random()
        reading = FacilityTelemetryGenerator(random_source=source).generate(1, night)

        # 0.8 * (0.2 * 0.6) * 0.8 = 0.0768
        assert reading.renewable_percentage == pytest.approx(7.7)

    def test_solar_availability_shape(self) -> None:
        """Test the diurnal ramp is zero outside 6-18 and peaks at noon."""
        solar = FacilityTelemetryGenerator._solar_availability

        assert solar(5) == 0.0
        assert solar(19) == 0.0
        assert solar(6) == pytest.approx(0.0)
        assert solar(12) == pytest.approx(1.0)
        assert solar(9) < solar(12)

    def test_seasonal_factor_centred_on_day_80(self) -> None:
        """Test the seasonal sinusoid sits at baseline on day 80."""
        seasonal = FacilityTelemetryGenerator._seasonal_factor

        assert seasonal(80) == pytest.approx(0.8)
        assert seasonal(80 + 91) == pytest.approx(1.2, abs=0.01)

    def test_range_invariants(self, generator: FacilityTelemetryGenerator) -> None:
        """Test generated readings stay within documented ranges."""
        start = datetime(2025, 1, 1, 0, 0, 0)
        for step in range(0, 24 * 60, 7):
            ts = start + timedelta(hours=step)
            for facility_id in generator.registry.ids:
                reading = generator.generate(facility_id, ts)

                assert 0 <= reading.renewable_percentage <= 100
                assert reading.carbon_intensity >= 0
                assert 52.0 <= reading.efficiency <= 65.0
                assert reading.production_volume >= 0
                assert reading.grid_usage == pytest.approx(
                    100 - reading.renewable_percentage, abs=0.11
                )

    def test_reproducibility_with_seed(self, equinox_noon: datetime) -> None:
        """Test that same seed produces same results."""
        gen1 = FacilityTelemetryGenerator(seed=42)
        gen2 = FacilityTelemetryGenerator(seed=42)

        assert gen1.generate(3, equinox_noon) == gen2.generate(3, equinox_noon)

    def test_unknown_facility(self, generator: FacilityTelemetryGenerator) -> None:
        """Test generating for an unknown facility fails with not found."""
        with pytest.raises(FacilityNotFoundError):
            generator.generate(42)

    def test_generate_does_not_store(
        self, generator: FacilityTelemetryGenerator, equinox_noon: datetime
    ) -> None:
        """Test generate() has no side effect on history."""
        generator.generate(1, equinox_noon)
        generator.generate_with_insights(1, equinox_noon)

        assert generator.history(1) == []

    def test_generate_with_insights_uses_history(
        self, generator: FacilityTelemetryGenerator, equinox_noon: datetime
    ) -> None:
        """Test insights are computed against stored history."""
        for hour in range(24):
            generator.store(
                generator.generate(1, equinox_noon - timedelta(hours=24 - hour))
            )

        reading = generator.generate_with_insights(1, equinox_noon)

        assert reading.ai_insights is not None
        assert reading.ai_insights.moving_average_24h is not None
        assert reading.ai_insights.trend is not None

    def test_history_bounded(self, equinox_noon: datetime) -> None:
        """Test history keeps only the configured capacity."""
        generator = FacilityTelemetryGenerator(seed=1, history_capacity=168)
        for hour in range(200):
            generator.store(generator.generate(1, equinox_noon + timedelta(hours=hour)))

        history = generator.history(1)
        assert len(history) == 168
        assert history[0].timestamp == equinox_noon + timedelta(hours=32)
        assert history[-1].timestamp == equinox_noon + timedelta(hours=199)
