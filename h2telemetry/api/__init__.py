"""FastAPI endpoints for the telemetry engine.

This module provides the REST API over the simulation driver for dashboard,
report and control clients.
"""

from h2telemetry.api.main import app, create_app
from h2telemetry.api.schemas import (
    EmergencyScenarioRequest,
    MonitoringDashboardResponse,
    SimulationStartRequest,
    SimulationStatsResponse,
)

__all__ = [
    "app",
    "create_app",
    "EmergencyScenarioRequest",
    "MonitoringDashboardResponse",
    "SimulationStartRequest",
    "SimulationStatsResponse",
]
