"""FastAPI application factory for the report service."""

import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI

from pinreport import __version__
from pinreport.core.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for startup and shutdown events."""
    start_time = datetime.now()
    logger.info("app.startup", message="PinReport starting up", timestamp=start_time.isoformat())

    from pinreport.api.health import set_app_start_time

    set_app_start_time(start_time)

    yield

    logger.info("app.shutdown", message="PinReport shutting down gracefully")


def _setup_middleware(app: FastAPI) -> None:
    """Configure all middleware in correct order."""
    # Last added = first executed: RequestIDMiddleware runs first
    from pinreport.middleware.logging import RequestIDMiddleware
    from pinreport.middleware.sentry import SentryContextMiddleware

    app.add_middleware(SentryContextMiddleware)
    app.add_middleware(RequestIDMiddleware)


def _register_routers(app: FastAPI) -> None:
    """Register all API routers."""
    from pinreport.api.health import router as health_router
    from pinreport.api.reports import router as reports_router

    app.include_router(health_router)
    app.include_router(reports_router)


def create_app() -> FastAPI:
    """Application factory for PinReport."""
    environment = os.getenv("ENVIRONMENT", "development")

    app = FastAPI(
        title="PinReport API",
        description="Daily financial reports for sales, repairs and cash book",
        version=__version__,
        lifespan=lifespan,
        docs_url=None if environment == "production" else "/docs",
    )

    from pinreport.core.exception_handlers import register_exception_handlers
    from pinreport.core.sentry import init_sentry

    init_sentry()
    register_exception_handlers(app)
    _setup_middleware(app)
    _register_routers(app)

    logger.info("app.configured", message="FastAPI application created successfully")

    return app


def run() -> None:
    """Development server entrypoint."""
    uvicorn.run(
        "pinreport.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
