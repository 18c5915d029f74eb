"""
FastAPI Service - Main entry point for the Task Manager API.
- Routes are separated into modules
- MongoDB for data persistence
- Domain errors rendered as the standard response envelope
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import get_settings
from core.container import bootstrap_container
from core.database import MongoDB
from core.logger import format_exception_short, logger
from domain.errors import AuthenticationError, TaskManagerError, ValidationFailure
from internal.api.routes import (
    create_auth_routes,
    create_health_routes,
    create_task_routes,
)
from internal.api.utils import domain_error_response, error_response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan - startup and shutdown.
    Connects to MongoDB and wires the container on startup.
    """
    settings = get_settings()
    logger.info(
        f"========== Starting {settings.app_name} v{settings.app_version} API service =========="
    )
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"API: {settings.api_host}:{settings.api_port}")

    db = MongoDB(settings)
    try:
        logger.info("Initializing MongoDB connection...")
        await db.connect()
        await db.create_indexes()
        bootstrap_container(db, settings)
        app.state.db = db
    except Exception as e:
        logger.error(f"Failed to initialize MongoDB: {e}")
        logger.exception("MongoDB initialization error details:")
        raise

    logger.info(f"========== {settings.app_name} API service started successfully ==========")

    yield

    logger.info("========== Shutting down API service ==========")
    try:
        await db.disconnect()
    except Exception as e:
        logger.error(f"Error disconnecting from MongoDB: {e}")
        logger.exception("MongoDB disconnect error details:")

    logger.info("========== API service stopped successfully ==========")


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as {error_code, message, data} with a matching HTTP status."""

    @app.exception_handler(TaskManagerError)
    async def handle_domain_error(request: Request, exc: TaskManagerError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {format_exception_short(exc)}")
        else:
            logger.warning(f"{request.method} {request.url.path}: {exc.status_code} {exc.message}")

        headers = None
        if isinstance(exc, AuthenticationError):
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=exc.status_code,
            content=domain_error_response(exc),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(part) for part in error.get("loc", ())),
                "message": error.get("msg", ""),
            }
            for error in exc.errors()
        ]
        logger.warning(f"{request.method} {request.url.path}: validation failed: {errors}")
        return JSONResponse(
            status_code=422,
            content=error_response(
                message="Validation error",
                error_code=ValidationFailure.error_code,
                data={"errors": errors},
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(message=str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.opt(exception=exc).error(
            f"{request.method} {request.url.path}: "
            f"{format_exception_short(exc, 'Unhandled error')}"
        )
        return JSONResponse(
            status_code=500,
            content=error_response(message="Internal server error"),
        )


def create_app() -> FastAPI:
    """
    Factory function to create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    logger.info("Creating FastAPI application...")
    settings = get_settings()

    description = """
## Task Manager API

Team task management backed by MongoDB.

### Key Features

* **Authentication** - Register, log in and receive a JWT bearer token
* **Tasks** - Create tasks and assign them to registered users
* **Filtering** - Filter your tasks by status, due date range and free-text search
* **Statistics** - Count your tasks per status
* **Health Monitoring** - Service and MongoDB health checks

### Authentication

Send `Authorization: Bearer <token>` using the token returned by `/api/auth/login`.
    """

    tags_metadata = [
        {
            "name": "Authentication",
            "description": "User registration, login and profile.",
        },
        {
            "name": "Tasks",
            "description": "Task CRUD, filtering and per-status statistics for the current user.",
        },
        {
            "name": "Health",
            "description": "Health check endpoints for monitoring API status and MongoDB.",
        },
    ]

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=description,
        lifespan=lifespan,
        openapi_tags=tags_metadata,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(create_auth_routes(), prefix=settings.api_prefix)
    logger.info("Auth routes registered")

    app.include_router(create_task_routes(), prefix=settings.api_prefix)
    logger.info("Task routes registered")

    app.include_router(create_health_routes(app))
    logger.info("Health routes registered")

    logger.info("FastAPI application created successfully")
    return app


app = create_app()


# Run with: uvicorn cmd.api.main:app --host 0.0.0.0 --port 3001 --reload
if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    logger.info("========== Starting Uvicorn Server ==========")
    logger.info(f"Host: {settings.api_host}")
    logger.info(f"Port: {settings.api_port}")
    logger.info(f"Reload: {settings.api_reload}")

    # reload and multiple workers need an import string, not the app instance
    if settings.api_reload or settings.api_workers > 1:
        uvicorn.run(
            "cmd.api.main:app",
            host=settings.api_host,
            port=settings.api_port,
            reload=settings.api_reload,
            workers=None if settings.api_reload else settings.api_workers,
            log_level="info" if settings.debug else "warning",
        )
    else:
        uvicorn.run(
            app,
            host=settings.api_host,
            port=settings.api_port,
            log_level="info" if settings.debug else "warning",
        )
