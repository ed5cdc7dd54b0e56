"""FastAPI router for telemetry monitoring and simulation control."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from h2telemetry.api.schemas import (
    CarbonIntensityAnalyticsResponse,
    EfficiencyAnalyticsResponse,
    EmergencyScenarioRequest,
    EnvironmentalSummaryResponse,
    FacilityCarbonAnalyticsResponse,
    FacilityComparisonResponse,
    MonitoringDashboardResponse,
    RenewableEnergyAnalyticsResponse,
    SimulationControlResponse,
    SimulationStartRequest,
    SimulationStatsResponse,
    TrendPointResponse,
)
from h2telemetry.api.services import get_simulator
from h2telemetry.domain.errors import FacilityNotFoundError
from h2telemetry.domain.models import AnomalyAlert, Reading
from h2telemetry.simulation.driver import TelemetrySimulator

router = APIRouter(prefix="/api/v1/iot", tags=["iot"])


@router.get("/status", response_model=SimulationStatsResponse)
async def get_status(
    simulator: TelemetrySimulator = Depends(get_simulator),
) -> SimulationStatsResponse:
    """Get simulation statistics."""
    return SimulationStatsResponse.model_validate(simulator.get_simulation_stats())


@router.get("/dashboard", response_model=MonitoringDashboardResponse)
async def get_dashboard(
    simulator: TelemetrySimulator = Depends(get_simulator),
) -> MonitoringDashboardResponse:
    """Get the real-time monitoring dashboard."""
    return MonitoringDashboardResponse.model_validate(
        simulator.get_monitoring_dashboard()
    )


@router.get("/facilities", response_model=list[Reading])
async def list_facilities(
    simulator: TelemetrySimulator = Depends(get_simulator),
) -> list[Reading]:
    """Get current readings for all facilities."""
    return simulator.get_all_facilities_data()


@router.get("/facilities/{facility_id}", response_model=Reading)
async def get_facility(
    facility_id: int,
    simulator: TelemetrySimulator = Depends(get_simulator),
) -> Reading:
    """Get the current reading for one facility."""
    try:
        reading = simulator.get_facility_data(facility_id)
    except FacilityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    if reading is None:
        raise HTTPException(status_code=404, detail="No data for facility yet")
    return reading


@router.get("/facilities/{facility_id}/trends", response_model=list[TrendPointResponse])
async def get_facility_trends(
    facility_id: int,
    hours: int = Query(default=168, ge=1, le=168, description="Hours of history"),
    simulator: TelemetrySimulator = Depends(get_simulator),
) -> list[TrendPointResponse]:
    """Get the carbon intensity trend series for one facility."""
    try:
        points = simulator.get_carbon_intensity_trends(facility_id, hours)
    except FacilityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return [TrendPointResponse.model_validate(p) for p in points]


@router.get("/comparison", response_model=list[FacilityComparisonResponse])
async def get_comparison(
    simulator: TelemetrySimulator = Depends(get_simulator),
) -> list[FacilityComparisonResponse]:
    """Rank facilities by environmental score."""
    return [
        FacilityComparisonResponse.model_validate(entry)
        for entry in simulator.get_facility_comparison()
    ]


@router.get("/alerts", response_model=list[AnomalyAlert])
async def get_alerts(
    limit: int = Query(default=50, ge=1, le=100, description="Maximum alerts"),
    simulator: TelemetrySimulator = Depends(get_simulator),
) -> list[AnomalyAlert]:
    """Get the most recent anomaly alerts."""
    return simulator.get_anomaly_alerts(limit)


@router.get("/summary", response_model=EnvironmentalSummaryResponse)
async def get_summary(
    simulator: TelemetrySimulator = Depends(get_simulator),
) -> EnvironmentalSummaryResponse:
    """Get the environmental performance summary."""
    return EnvironmentalSummaryResponse.model_validate(
        simulator.get_environmental_summary()
    )


# =============================================================================
# Simulation Control
# =============================================================================


@router.post("/simulation/start", response_model=SimulationControlResponse)
async def start_simulation(
    request: SimulationStartRequest | None = None,
    simulator: TelemetrySimulator = Depends(get_simulator),
) -> SimulationControlResponse:
    """Start the periodic simulation (no-op if already running)."""
    interval_ms = request.interval_ms if request is not None else None
    try:
        simulator.start(interval_ms)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    return SimulationControlResponse(
        message="Simulation running", state=simulator.state
    )


@router.post("/simulation/stop", response_model=SimulationControlResponse)
async def stop_simulation(
    simulator: TelemetrySimulator = Depends(get_simulator),
) -> SimulationControlResponse:
    """Stop the periodic simulation (no-op if already stopped)."""
    try:
        simulator.stop()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    return SimulationControlResponse(
        message="Simulation stopped", state=simulator.state
    )


@router.post("/simulation/emergency", response_model=Reading)
async def trigger_emergency(
    request: EmergencyScenarioRequest,
    simulator: TelemetrySimulator = Depends(get_simulator),
) -> Reading:
    """Force an emergency reading for one facility."""
    try:
        return simulator.simulate_emergency_scenario(request.facility_id)
    except FacilityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e)) from e


# =============================================================================
# Analytics
# =============================================================================


@router.get(
    "/analytics/carbon-intensity",
    response_model=CarbonIntensityAnalyticsResponse | FacilityCarbonAnalyticsResponse,
)
async def get_carbon_intensity_analytics(
    facility_id: int | None = Query(default=None, alias="facilityId", ge=1),
    simulator: TelemetrySimulator = Depends(get_simulator),
) -> CarbonIntensityAnalyticsResponse | FacilityCarbonAnalyticsResponse:
    """Carbon intensity analytics for the fleet or a single facility."""
    if facility_id is None:
        return CarbonIntensityAnalyticsResponse.model_validate(
            simulator.get_carbon_intensity_analytics()
        )
    try:
        analytics = simulator.get_facility_carbon_analytics(facility_id)
    except FacilityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    if analytics is None:
        raise HTTPException(status_code=404, detail="No data for facility yet")
    return FacilityCarbonAnalyticsResponse.model_validate(analytics)


@router.get(
    "/analytics/renewable-energy", response_model=RenewableEnergyAnalyticsResponse
)
async def get_renewable_energy_analytics(
    simulator: TelemetrySimulator = Depends(get_simulator),
) -> RenewableEnergyAnalyticsResponse:
    """Renewable energy usage analytics."""
    return RenewableEnergyAnalyticsResponse.model_validate(
        simulator.get_renewable_energy_analytics()
    )


@router.get("/analytics/efficiency", response_model=EfficiencyAnalyticsResponse)
async def get_efficiency_analytics(
    simulator: TelemetrySimulator = Depends(get_simulator),
) -> EfficiencyAnalyticsResponse:
    """Efficiency analytics."""
    return EfficiencyAnalyticsResponse.model_validate(
        simulator.get_efficiency_analytics()
    )
