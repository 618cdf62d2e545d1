"""Clinic back-office FastAPI application."""
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from src.core.config import settings
from src.core.database.session import async_session
from src.core.exceptions import AppException
from src.core.exceptions.handlers import (
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from src.core.logging import configure_logging
from src.core.notifications.router import router as notifications_router
from src.modules.bookings.router import router as bookings_router
from src.modules.exports.dependencies import create_export_orchestrator
from src.modules.exports.router import router as exports_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Starting clinic back office ({})", settings.app_env)
    yield
    logger.info("Shutting down")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    configure_logging()

    app = FastAPI(
        title="Clinic Back Office",
        description="Bookings, memberships, patient records and data export for the clinic",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # One orchestrator per process: its state is the export re-entrancy guard.
    app.state.export_orchestrator = create_export_orchestrator(async_session)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    # Routers
    app.include_router(bookings_router, prefix="/api/v1")
    app.include_router(notifications_router, prefix="/api/v1")
    app.include_router(exports_router, prefix="/api/v1")

    return app


app = create_app()
