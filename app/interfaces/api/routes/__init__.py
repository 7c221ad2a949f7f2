from fastapi import FastAPI

from .announcements import router as announcements_router
from .health import router as health_router
from .notifications import router as notifications_router
from .registrations import router as registrations_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router)
    app.include_router(announcements_router)
    app.include_router(notifications_router)
    app.include_router(registrations_router)
