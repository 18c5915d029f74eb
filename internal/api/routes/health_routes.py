"""
Health Check API Routes.
"""

from fastapi import APIRouter, Request

from core import get_settings
from internal.api.schemas import HealthResponse
from internal.api.schemas.common_schemas import StandardResponse
from internal.api.utils import error_response, success_response


def create_health_routes(app) -> APIRouter:
    """
    Factory function to create health routes.

    Args:
        app: FastAPI application instance

    Returns:
        APIRouter: Configured router with health endpoints
    """
    router = APIRouter(tags=["Health"])

    @router.get(
        "/",
        response_model=StandardResponse,
        summary="Root Endpoint",
        description="Get basic API information",
        operation_id="get_root",
    )
    async def root():
        settings = get_settings()
        return success_response(
            message="API service is running",
            data={
                "service": settings.app_name,
                "version": settings.app_version,
                "status": "running",
            },
        )

    @router.get(
        "/health",
        response_model=StandardResponse,
        summary="Health Check",
        description="Check service and MongoDB health",
        operation_id="health_check",
    )
    async def health_check(request: Request):
        """
        Health check endpoint.

        **Returns:**
        - Overall status (healthy / unhealthy)
        - Service name and version
        - Database connectivity
        """
        settings = get_settings()

        db = getattr(request.app.state, "db", None)
        db_healthy = db is not None and await db.health_check()

        health_data = HealthResponse(
            status="healthy" if db_healthy else "unhealthy",
            service=settings.app_name,
            version=settings.app_version,
            database="connected" if db_healthy else "disconnected",
        ).model_dump()

        if not db_healthy:
            return error_response(message="Database unavailable", data=health_data)
        return success_response(message="Service is healthy", data=health_data)

    return router
