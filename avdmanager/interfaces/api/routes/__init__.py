from fastapi import FastAPI

from .applications import router as applications_router
from .audit_logs import router as audit_logs_router
from .auth import router as auth_router
from .base_images import router as base_images_router
from .business_units import router as business_units_router
from .contacts import router as contacts_router
from .dashboard import router as dashboard_router
from .health import router as health_router
from .templates import router as templates_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(business_units_router)
    app.include_router(contacts_router)
    app.include_router(applications_router)
    app.include_router(base_images_router)
    app.include_router(templates_router)
    app.include_router(audit_logs_router)
    app.include_router(dashboard_router)
