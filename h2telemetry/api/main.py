"""FastAPI application for the hydrogen facility telemetry engine.

This module provides the FastAPI application, its lifespan (pre-warming and
starting the simulator, stopping it on shutdown) and root endpoints.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from h2telemetry import __version__
from h2telemetry.api.routes import router as iot_router
from h2telemetry.api.schemas import HealthResponse
from h2telemetry.api.services import build_simulator
from h2telemetry.simulation.driver import TelemetrySimulator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager."""
    simulator: TelemetrySimulator = app.state.simulator
    logger.info("Starting hydrogen telemetry API")
    simulator.initialize()
    if app.state.autostart:
        simulator.start()
    yield
    logger.info("Shutting down hydrogen telemetry API")
    simulator.shutdown()


def create_app(
    simulator: TelemetrySimulator | None = None,
    autostart: bool = True,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        simulator: Simulator to serve. Defaults to one built from the environment.
        autostart: Start periodic generation when the app starts.
    """
    app = FastAPI(
        title="Hydrogen Facility Telemetry Engine",
        description="""
Synthetic IoT telemetry and anomaly scoring for green-hydrogen facilities.

## Key Endpoints

- `GET /api/v1/iot/dashboard`: Real-time monitoring dashboard
- `GET /api/v1/iot/comparison`: Facilities ranked by environmental score
- `GET /api/v1/iot/alerts`: Recent anomaly alerts
- `POST /api/v1/iot/simulation/start`: Start periodic generation
- `POST /api/v1/iot/simulation/emergency`: Force an emergency reading
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.simulator = simulator or build_simulator()
    app.state.autostart = autostart

    # Add CORS middleware for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(iot_router)

    @app.get("/", response_class=JSONResponse)
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": "Hydrogen Facility Telemetry Engine",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            timestamp=datetime.now(),
            simulation_state=app.state.simulator.state,
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(
        "h2telemetry.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
