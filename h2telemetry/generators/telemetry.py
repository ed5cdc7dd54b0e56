"""Synthetic facility telemetry generator.

Produces hydrogen-production readings with:
- Seasonal weather baseline (peaks around the spring equinox, day 80)
- Random weather events (bad / excellent / normal)
- Diurnal solar availability and random wind availability
- Archetype-specific solar/wind blending
- Reproducible via an injected random source or numpy seed
"""

from datetime import datetime

import numpy as np

from h2telemetry.domain.models import FacilityProfile, Reading
from h2telemetry.generators.history import HistoryStore
from h2telemetry.generators.random_source import RandomSource, default_random_source
from h2telemetry.generators.registry import FacilityRegistry
from h2telemetry.insights.analyzer import attach_insights


class FacilityTelemetryGenerator:
    """Generates synthetic telemetry readings for registered facilities.

    The generator owns the per-facility history buffers. ``generate`` itself is
    side-effect free; callers decide when a reading is stored.
    """

    MAX_CAPACITY_MW: float = 50.0
    GRID_CARBON_INTENSITY: float = 0.5
    RENEWABLE_CARBON_INTENSITY: float = 0.02
    BASE_EFFICIENCY: float = 0.65

    BAD_WEATHER_PROBABILITY: float = 0.05
    EXCELLENT_WEATHER_PROBABILITY: float = 0.10

    def __init__(
        self,
        registry: FacilityRegistry | None = None,
        random_source: RandomSource | None = None,
        seed: int | None = None,
        history_capacity: int = 168,
    ) -> None:
        """Initialize the telemetry generator.

        Args:
            registry: Facility registry. Defaults to the five demo facilities.
            random_source: Source of randomness. Overrides ``seed`` if given.
            seed: Random seed for the default numpy source.
            history_capacity: Readings retained per facility.
        """
        self.registry = registry if registry is not None else FacilityRegistry()
        self._rng: RandomSource = (
            random_source if random_source is not None else default_random_source(seed)
        )
        self._history = HistoryStore(history_capacity)

    # -------------------------------------------------------------------------
    # Condition models
    # -------------------------------------------------------------------------

    @staticmethod
    def _seasonal_factor(day_of_year: int) -> float:
        """Seasonal weather baseline in [0.4, 1.2], centred on day 80."""
        return float(0.8 + 0.4 * np.sin((day_of_year - 80) * 2 * np.pi / 365))

    def _weather_factor(self, seasonal_factor: float) -> float:
        """Apply a random weather event to the seasonal baseline."""
        event = float(self._rng.random())
        if event < self.BAD_WEATHER_PROBABILITY:
            return seasonal_factor * 0.3
        if event < self.BAD_WEATHER_PROBABILITY + self.EXCELLENT_WEATHER_PROBABILITY:
            return min(1.0, seasonal_factor * 1.3)
        return seasonal_factor * float(self._rng.uniform(0.8, 1.2))

    @staticmethod
    def _solar_availability(hour: int) -> float:
        """Half-sine daylight ramp peaking at noon, zero at night."""
        if hour < 6 or hour > 18:
            return 0.0
        return float(np.sin((hour - 6) * np.pi / 12))

    def _wind_availability(self) -> float:
        return float(self._rng.uniform(0.3, 0.9))

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate(self, facility_id: int, timestamp: datetime | None = None) -> Reading:
        """Synthesize one reading for a facility.

        Args:
            facility_id: Registered facility id.
            timestamp: Reading timestamp. Defaults to now.

        Returns:
            Reading without insights attached.

        Raises:
            FacilityNotFoundError: If the facility is not registered.
        """
        facility = self.registry.get(facility_id)
        if timestamp is None:
            timestamp = datetime.now()
        return self._build_reading(facility, timestamp)

    def _build_reading(self, facility: FacilityProfile, timestamp: datetime) -> Reading:
        day_of_year = timestamp.timetuple().tm_yday
        hour = timestamp.hour

        weather_factor = self._weather_factor(self._seasonal_factor(day_of_year))
        solar = self._solar_availability(hour)
        wind = self._wind_availability()

        mix = facility.energy_mix
        renewable_actual = (
            facility.renewable_fraction
            * (mix.solar_weight * solar + mix.wind_weight * wind)
            * weather_factor
        )
        renewable_actual = min(1.0, max(0.0, renewable_actual))
        grid_usage = max(0.0, 1.0 - renewable_actual)

        production_volume = (
            self.MAX_CAPACITY_MW
            * (0.5 + 0.5 * renewable_actual)
            * float(self._rng.uniform(0.8, 1.2))
        )

        weighted_intensity = (
            renewable_actual * self.RENEWABLE_CARBON_INTENSITY
            + grid_usage * self.GRID_CARBON_INTENSITY
        ) * float(self._rng.uniform(0.9, 1.1))
        efficiency = self.BASE_EFFICIENCY * float(self._rng.uniform(0.8, 1.0))
        carbon_intensity = weighted_intensity / efficiency

        # Ambient conditions are descriptive only
        temperature = (
            20
            + 15 * np.sin(day_of_year * 2 * np.pi / 365)
            + 5 * (float(self._rng.random()) - 0.5)
        )
        pressure = 1.0 + 0.1 * (float(self._rng.random()) - 0.5)
        humidity = 40 + 30 * float(self._rng.random())
        wind_speed = 2 + 8 * float(self._rng.random())

        return Reading(
            facility_id=facility.id,
            facility_name=facility.name,
            facility_type=facility.archetype,
            timestamp=timestamp,
            production_volume=round(production_volume, 2),
            carbon_intensity=round(carbon_intensity, 4),
            energy_source=mix.energy_source,
            efficiency=round(efficiency * 100, 1),
            temperature=round(float(temperature), 1),
            pressure=round(pressure, 3),
            humidity=round(humidity, 1),
            wind_speed=round(wind_speed, 1),
            renewable_percentage=round(renewable_actual * 100, 1),
            weather_factor=round(weather_factor, 3),
            grid_usage=round(grid_usage * 100, 1),
        )

    def generate_with_insights(
        self,
        facility_id: int,
        timestamp: datetime | None = None,
        window: int = 24,
        anomaly_threshold: float = 0.3,
    ) -> Reading:
        """Generate a reading and attach insights against stored history.

        The reading is not stored.
        """
        reading = self.generate(facility_id, timestamp)
        return attach_insights(
            reading,
            self._history.get(facility_id),
            window=window,
            anomaly_threshold=anomaly_threshold,
        )

    # -------------------------------------------------------------------------
    # History access
    # -------------------------------------------------------------------------

    def store(self, reading: Reading) -> None:
        """Append a reading to its facility's history buffer."""
        self.registry.get(reading.facility_id)
        self._history.append(reading)

    def history(self, facility_id: int) -> list[Reading]:
        """Return a copy of a facility's history, oldest first."""
        self.registry.get(facility_id)
        return self._history.get(facility_id)

    def trailing(self, facility_id: int, count: int) -> list[Reading]:
        """Return up to ``count`` most recent readings for a facility."""
        self.registry.get(facility_id)
        return self._history.trailing(facility_id, count)

    def total_data_points(self) -> int:
        return self._history.total_points()

    @property
    def history_capacity(self) -> int:
        return self._history.capacity
