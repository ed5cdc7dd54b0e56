"""Simulation driver for periodic facility telemetry."""

from h2telemetry.simulation.driver import (
    TICKER_THREAD_NAME,
    DataObserver,
    TelemetrySimulator,
)

__all__ = [
    "TICKER_THREAD_NAME",
    "DataObserver",
    "TelemetrySimulator",
]
