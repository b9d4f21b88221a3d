"""Root API router with /api/v1 prefix and middleware registration."""

from fastapi import APIRouter, FastAPI

from ward_registry.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware, setup_cors
from ward_registry.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root API router with all sub-routers included.

    Args:
        settings: Application settings.

    Returns:
        Configured API router.
    """
    from ward_registry.api.v1.printing import printing_router
    from ward_registry.api.v1.reports import reports_router
    from ward_registry.api.v1.statistics import statistics_router

    root_router = APIRouter(prefix=settings.api_v1_prefix)
    root_router.include_router(reports_router)
    root_router.include_router(printing_router)
    root_router.include_router(statistics_router)

    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    setup_cors(app, settings)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
