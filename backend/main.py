"""BoxSim Backend — FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from backend.routes import design, library
from boxsim.config import Settings, load_settings
from boxsim.driver_database import DriverDatabase
from boxsim.environment import Environment


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    settings = app.state.settings
    db = DriverDatabase(settings.driver_dir)
    app.state.driver_db = db
    app.state.environment = Environment.from_settings(db, settings)
    yield


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app; settings are read once here and shared by logging, CORS and startup."""
    if settings is None:
        settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="BoxSim API",
        description="Loudspeaker driver and enclosure response simulation",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS: configured frontend plus local dev origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url] if settings.frontend_url else [],
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register route modules
    app.include_router(design.router, prefix="/api", tags=["Design"])
    app.include_router(library.router, prefix="/api", tags=["Library"])
    app.add_api_route("/api/health", health_check, methods=["GET"])
    return app


async def health_check(request: Request):
    return {
        "status": "healthy",
        "service": "boxsim-backend",
        "drivers": request.app.state.driver_db.count,
    }


app = create_app()
