"""Simulation driver for continuous facility telemetry.

Orchestrates periodic generation passes across all registered facilities:
- Generates a reading per facility and attaches insights
- Stores readings in history and in the current-snapshot map
- Raises anomaly alerts (bounded, oldest evicted)
- Notifies observers with each pass's batch
- Answers dashboard and report queries

Passes are serialized by a lock and the repeating schedule runs on a single
daemon ticker thread cancelled through a ``threading.Event``.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable
from datetime import datetime, timedelta
from uuid import uuid4

from h2telemetry.domain.models import (
    AlertDetails,
    AlertSeverity,
    AnomalyAlert,
    Reading,
    SimulationConfig,
    SimulatorState,
)
from h2telemetry.generators.random_source import RandomSource, default_random_source
from h2telemetry.generators.registry import FacilityRegistry
from h2telemetry.generators.telemetry import FacilityTelemetryGenerator
from h2telemetry.insights.analyzer import (
    calculate_environmental_score,
    classify_carbon_intensity,
)
from h2telemetry.metrics.analytics import (
    CarbonIntensityAnalytics,
    EfficiencyAnalytics,
    FacilityCarbonAnalytics,
    RenewableEnergyAnalytics,
)
from h2telemetry.metrics.dashboard import (
    FacilityStatus,
    MonitoringDashboard,
    SimulationStats,
    SystemStatus,
)
from h2telemetry.metrics.summary import (
    EnvironmentalSummary,
    FacilityComparison,
    TrendPoint,
    rank_facilities,
)

logger = logging.getLogger(__name__)

DataObserver = Callable[[list[Reading]], None]

TICKER_THREAD_NAME = "h2telemetry-ticker"
DASHBOARD_ALERT_COUNT = 10


class TelemetrySimulator:
    """Drives telemetry generation for every registered facility.

    States are ``stopped`` and ``running``. Restarting after a stop resumes
    from the existing history.
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        registry: FacilityRegistry | None = None,
        random_source: RandomSource | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the simulator.

        Args:
            config: Simulation parameters. Defaults to ``SimulationConfig()``.
            registry: Facility registry. Defaults to the five demo facilities.
            random_source: Source of randomness shared with the generator.
            clock: Callable returning the current time. Defaults to now.
        """
        self.config = config or SimulationConfig()
        self._rng: RandomSource = (
            random_source
            if random_source is not None
            else default_random_source(self.config.seed)
        )
        self.generator = FacilityTelemetryGenerator(
            registry=registry,
            random_source=self._rng,
            history_capacity=self.config.history_capacity,
        )
        self._clock = clock or datetime.now

        self._state = SimulatorState.STOPPED
        self._snapshots: dict[int, Reading] = {}
        self._alerts: deque[AnomalyAlert] = deque(maxlen=self.config.alert_capacity)
        self._observers: list[DataObserver] = []
        self._passes_completed = 0
        self._last_update: datetime | None = None
        self._initialized = False

        # Lock order: _pass_lock -> _state_lock, _pass_lock -> _data_lock.
        # _state_lock is only held for state transitions, never across a pass.
        self._state_lock = threading.RLock()
        self._pass_lock = threading.Lock()
        self._data_lock = threading.RLock()
        self._stop_event = threading.Event()
        self._ticker: threading.Thread | None = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def registry(self) -> FacilityRegistry:
        return self.generator.registry

    @property
    def state(self) -> SimulatorState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == SimulatorState.RUNNING

    def initialize(self) -> None:
        """Pre-warm each facility's history with hourly readings.

        Readings are stored once, without alerts or observer notification.
        Calling this more than once has no effect.
        """
        with self._pass_lock:
            if self._initialized:
                return
            self._initialized = True

            hours = self.config.prewarm_hours
            now = self._clock()
            for offset in range(hours - 1, -1, -1):
                timestamp = now - timedelta(hours=offset)
                for facility in self.registry:
                    try:
                        reading = self._generate(facility.id, timestamp)
                    except Exception:
                        logger.exception(
                            "Error pre-warming history for facility %s", facility.id
                        )
                        continue
                    with self._data_lock:
                        self.generator.store(reading)

        logger.info(
            "Historical data initialized for %d facilities (%d hours)",
            len(self.registry),
            hours,
        )

    def start(self, interval_ms: int | None = None) -> None:
        """Start periodic generation.

        Runs one pass immediately, then one every ``interval_ms``. Starting a
        running simulator logs a warning and does nothing.

        Args:
            interval_ms: Tick interval. Defaults to ``config.tick_interval_ms``.

        Raises:
            ValueError: If the interval is not positive.
        """
        interval = self.config.tick_interval_ms if interval_ms is None else interval_ms
        if interval <= 0:
            raise ValueError(f"Tick interval must be > 0 ms, got {interval}")

        with self._state_lock:
            if self._state == SimulatorState.RUNNING:
                logger.warning("Telemetry simulation is already running")
                return

            logger.info("Starting telemetry simulation")
            self._state = SimulatorState.RUNNING
            stop_event = threading.Event()
            self._stop_event = stop_event

        # The state lock is never held while waiting on the pass lock
        self.run_generation_pass()

        with self._state_lock:
            if stop_event.is_set():
                logger.info("Telemetry simulation stopped during its first pass")
                return
            self._ticker = threading.Thread(
                target=self._run_ticker,
                args=(interval / 1000.0, stop_event),
                name=TICKER_THREAD_NAME,
                daemon=True,
            )
            self._ticker.start()

        logger.info("Telemetry simulation started with %.1fs intervals", interval / 1000)

    def stop(self) -> None:
        """Stop periodic generation.

        No scheduled pass runs after this returns. Stopping a stopped
        simulator logs a warning and does nothing.
        """
        with self._state_lock:
            if self._state == SimulatorState.STOPPED:
                logger.warning("Telemetry simulation is not running")
                return

            logger.info("Stopping telemetry simulation")
            self._stop_event.set()
            ticker, self._ticker = self._ticker, None
            self._state = SimulatorState.STOPPED

        # A pass in progress finishes first; an observer calling stop() from
        # the ticker thread cannot join itself.
        if ticker is not None and ticker is not threading.current_thread():
            ticker.join()

        logger.info("Telemetry simulation stopped")

    def shutdown(self) -> None:
        """Stop the simulation if running. Safe to call at any time."""
        if self.is_running:
            self.stop()

    def _run_ticker(self, interval_s: float, stop_event: threading.Event) -> None:
        while not stop_event.wait(interval_s):
            with self._pass_lock:
                if stop_event.is_set():
                    break
                self._generation_pass(None)

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def _generate(self, facility_id: int, timestamp: datetime) -> Reading:
        return self.generator.generate_with_insights(
            facility_id,
            timestamp,
            window=self.config.trailing_window,
            anomaly_threshold=self.config.anomaly_threshold,
        )

    def run_generation_pass(self, timestamp: datetime | None = None) -> list[Reading]:
        """Generate, score and store one reading per facility.

        A failure for one facility is logged and skipped; the remaining
        facilities are still generated.

        Args:
            timestamp: Timestamp for the batch. Defaults to the clock.

        Returns:
            Readings produced in this pass, in registry order.
        """
        with self._pass_lock:
            return self._generation_pass(timestamp)

    def _generation_pass(self, timestamp: datetime | None) -> list[Reading]:
        timestamp = timestamp or self._clock()
        batch: list[Reading] = []

        for facility in self.registry:
            try:
                reading = self._generate(facility.id, timestamp)
            except Exception:
                logger.exception("Error generating data for facility %s", facility.id)
                continue

            with self._data_lock:
                self.generator.store(reading)
                self._snapshots[facility.id] = reading
                if reading.is_anomaly:
                    self._raise_alert(reading)
            batch.append(reading)

        with self._data_lock:
            self._passes_completed += 1
            self._last_update = timestamp

        logger.debug("Generated data for %d facilities", len(batch))
        anomalies = sum(1 for r in batch if r.is_anomaly)
        if anomalies:
            logger.info("%d anomalies detected at %s", anomalies, timestamp)

        self._notify(batch)
        return batch

    def _raise_alert(self, reading: Reading) -> AnomalyAlert:
        insights = reading.ai_insights
        score = insights.anomaly_score if insights is not None else None
        average = insights.moving_average_24h if insights is not None else None

        expected_range = None
        if average is not None:
            expected_range = (
                f"{average.carbon_intensity * 0.7:.4f} - "
                f"{average.carbon_intensity * 1.3:.4f}"
            )

        severity = (
            AlertSeverity.HIGH
            if score is not None and score > self.config.high_severity_threshold
            else AlertSeverity.MEDIUM
        )
        alert = AnomalyAlert(
            id=f"alert_{uuid4().hex[:12]}_{reading.facility_id}",
            facility_id=reading.facility_id,
            facility_name=reading.facility_name,
            timestamp=reading.timestamp,
            severity=severity,
            message=f"Anomaly detected in {reading.facility_name}",
            details=AlertDetails(
                carbon_intensity=reading.carbon_intensity,
                expected_range=expected_range,
                anomaly_score=score,
                production_volume=reading.production_volume,
                efficiency=reading.efficiency,
            ),
        )
        with self._data_lock:
            self._alerts.append(alert)

        logger.warning("Anomaly alert: %s (score: %s)", alert.message, score)
        return alert

    # -------------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------------

    def subscribe(self, observer: DataObserver) -> Callable[[], None]:
        """Register an observer for each pass's batch.

        Returns:
            Callable that unregisters the observer.
        """
        with self._data_lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._data_lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def _notify(self, batch: list[Reading]) -> None:
        with self._data_lock:
            observers = list(self._observers)
        for observer in observers:
            try:
                observer(batch)
            except Exception:
                logger.exception("Error in data observer %r", observer)

    # -------------------------------------------------------------------------
    # Emergency override
    # -------------------------------------------------------------------------

    def simulate_emergency_scenario(self, facility_id: int) -> Reading:
        """Force a pathological reading for one facility.

        The reading replaces the facility's current snapshot and raises one
        alert. It is not added to history, so later baselines are unaffected.

        Raises:
            FacilityNotFoundError: If the facility is not registered.
        """
        facility = self.registry.get(facility_id)
        logger.warning("Simulating emergency scenario for %s", facility.name)

        with self._pass_lock:
            base = self._generate(facility_id, self._clock())

            carbon_intensity = round(float(self._rng.uniform(5.0, 7.0)), 4)
            efficiency = round(float(self._rng.uniform(30.0, 50.0)), 1)
            renewable = round(float(self._rng.uniform(10.0, 30.0)), 1)
            anomaly_score = round(float(self._rng.uniform(0.8, 1.0)), 2)

            insights = base.ai_insights.model_copy(
                update={
                    "is_anomaly": True,
                    "anomaly_score": anomaly_score,
                    "carbon_classification": classify_carbon_intensity(
                        carbon_intensity
                    ),
                    "environmental_score": calculate_environmental_score(
                        renewable, carbon_intensity, efficiency, is_anomaly=True
                    ),
                }
            )
            reading = base.model_copy(
                update={
                    "carbon_intensity": carbon_intensity,
                    "efficiency": efficiency,
                    "renewable_percentage": renewable,
                    "grid_usage": round(100.0 - renewable, 1),
                    "ai_insights": insights,
                }
            )

            with self._data_lock:
                self._snapshots[facility_id] = reading
                self._raise_alert(reading)

        logger.info("Emergency scenario simulated for %s", facility.name)
        return reading

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_facility_data(self, facility_id: int) -> Reading | None:
        """Current snapshot for a facility, None before its first pass.

        Raises:
            FacilityNotFoundError: If the facility is not registered.
        """
        self.registry.get(facility_id)
        with self._data_lock:
            return self._snapshots.get(facility_id)

    def get_all_facilities_data(self) -> list[Reading]:
        """Current snapshots in registry order."""
        with self._data_lock:
            return [
                self._snapshots[facility.id]
                for facility in self.registry
                if facility.id in self._snapshots
            ]

    def get_facility_history(self, facility_id: int) -> list[Reading]:
        with self._data_lock:
            return self.generator.history(facility_id)

    def get_facility_comparison(self) -> list[FacilityComparison]:
        """Rank facilities by score over their own trailing window."""
        comparisons = []
        with self._data_lock:
            for facility in self.registry:
                window = self.generator.trailing(
                    facility.id, self.config.trailing_window
                )
                entry = FacilityComparison.from_history(facility, window)
                if entry is not None:
                    comparisons.append(entry)
        return rank_facilities(comparisons)

    def get_carbon_intensity_trends(
        self, facility_id: int, hours: int = 168
    ) -> list[TrendPoint]:
        """Trend series over the most recent ``hours`` readings.

        Raises:
            ValueError: If ``hours`` is outside 1..history capacity.
            FacilityNotFoundError: If the facility is not registered.
        """
        self.registry.get(facility_id)
        capacity = self.generator.history_capacity
        if not 1 <= hours <= capacity:
            raise ValueError(f"hours must be between 1 and {capacity}, got {hours}")
        with self._data_lock:
            window = self.generator.trailing(facility_id, hours)
        return [TrendPoint.from_reading(r) for r in window]

    def get_environmental_summary(self) -> EnvironmentalSummary:
        return EnvironmentalSummary.from_readings(self.get_all_facilities_data())

    def get_anomaly_alerts(self, limit: int = 50) -> list[AnomalyAlert]:
        """Most recent alerts, oldest first.

        Raises:
            ValueError: If ``limit`` is less than 1.
        """
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        with self._data_lock:
            return list(self._alerts)[-limit:]

    def get_monitoring_dashboard(self) -> MonitoringDashboard:
        readings = self.get_all_facilities_data()
        recent_alerts = self.get_anomaly_alerts(DASHBOARD_ALERT_COUNT)
        now = self._clock()
        return MonitoringDashboard(
            timestamp=now,
            summary=EnvironmentalSummary.from_readings(readings),
            facilities=[FacilityStatus.from_reading(r) for r in readings],
            comparison=self.get_facility_comparison(),
            recent_alerts=recent_alerts,
            system_status=SystemStatus(
                is_running=self.is_running,
                total_facilities=len(readings),
                anomalies_detected=len(recent_alerts),
                last_update=self._last_update or now,
            ),
        )

    def get_simulation_stats(self) -> SimulationStats:
        with self._data_lock:
            return SimulationStats(
                state=self._state,
                total_facilities=len(self.registry),
                total_data_points=self.generator.total_data_points(),
                anomaly_alerts=len(self._alerts),
                passes_completed=self._passes_completed,
                last_update=self._last_update,
            )

    def get_facility_carbon_analytics(
        self, facility_id: int
    ) -> FacilityCarbonAnalytics | None:
        """Carbon analytics for one facility, None before its first pass."""
        reading = self.get_facility_data(facility_id)
        if reading is None:
            return None
        return FacilityCarbonAnalytics.from_reading(reading)

    def get_carbon_intensity_analytics(self) -> CarbonIntensityAnalytics:
        return CarbonIntensityAnalytics.from_readings(self.get_all_facilities_data())

    def get_renewable_energy_analytics(self) -> RenewableEnergyAnalytics:
        return RenewableEnergyAnalytics.from_readings(self.get_all_facilities_data())

    def get_efficiency_analytics(self) -> EfficiencyAnalytics:
        return EfficiencyAnalytics.from_readings(self.get_all_facilities_data())
