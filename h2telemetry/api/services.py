"""Service wiring between the API and the simulation driver.

The simulator is owned by the application (``app.state.simulator``) and
injected into routes, so tests can supply their own seeded instance.
"""

from __future__ import annotations

from fastapi import Request

from h2telemetry.domain.models import SimulationConfig
from h2telemetry.simulation.driver import TelemetrySimulator


def build_simulator(config: SimulationConfig | None = None) -> TelemetrySimulator:
    """Create a simulator configured from the environment by default."""
    return TelemetrySimulator(config or SimulationConfig.from_env())


def get_simulator(request: Request) -> TelemetrySimulator:
    """FastAPI dependency returning the application's simulator."""
    return request.app.state.simulator
