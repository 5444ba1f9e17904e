# File: src/parkmeter/main.py
"""FastAPI application factory for the parking meter service."""

import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI

from parkmeter.core.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for startup and shutdown events."""
    start_time = datetime.now()
    logger.info("app.startup", message="ParkMeter starting up", timestamp=start_time.isoformat())

    from parkmeter.api.health import set_app_start_time

    set_app_start_time(start_time)

    yield

    from parkmeter.core.db import engine

    await engine.dispose()
    logger.info("app.shutdown", message="ParkMeter shutting down gracefully")


def _setup_middleware(app: FastAPI) -> None:
    """Configure all middleware in correct order."""
    # Last added = first executed: RequestIDMiddleware must wrap Sentry context
    from parkmeter.middleware.logging import RequestIDMiddleware
    from parkmeter.middleware.sentry import SentryContextMiddleware

    app.add_middleware(SentryContextMiddleware)
    app.add_middleware(RequestIDMiddleware)


def _register_routers(app: FastAPI) -> None:
    """Register all API routers."""
    from parkmeter.api.health import router as health_router
    from parkmeter.api.parking import router as parking_router

    app.include_router(health_router)
    app.include_router(parking_router)


def create_app() -> FastAPI:
    """Application factory for ParkMeter."""
    from parkmeter.api.health import SERVICE_NAME, SERVICE_VERSION
    from parkmeter.core.exception_handlers import register_exception_handlers
    from parkmeter.core.sentry import init_sentry

    init_sentry()

    app = FastAPI(
        title=SERVICE_NAME,
        description="Paid parking time tracking for license plates",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )

    register_exception_handlers(app)
    _setup_middleware(app)
    _register_routers(app)

    logger.info("app.configured", message="FastAPI application created successfully")

    return app


def run() -> None:
    """Development server entrypoint."""
    uvicorn.run(
        "parkmeter.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("ENVIRONMENT", "development") == "development",
    )
