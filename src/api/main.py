"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures middleware, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from psycopg_pool import ConnectionPool
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.adapters.repository.memory import InMemoryAccountStore
from src.adapters.repository.postgres import PostgresAccountStore, run_migrations
from src.api.models import ApiResponse, FieldErrorModel
from src.api.v1 import router as v1_router
from src.api.v1.routes import server_error_response
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "User Registration API v1 - Validate and create user accounts",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Configures logging
    - Creates the account store (in-memory or PostgreSQL pool + migrations)
    - Closes the connection pool on shutdown
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logger.info("Starting application...")

    pool = None
    if settings.store_backend == "postgres":
        logger.info("Connecting to database...")
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )

        logger.info("Running database migrations...")
        run_migrations(pool)
        app.state.store = PostgresAccountStore(pool)
    else:
        logger.info("Using in-memory account store")
        app.state.store = InMemoryAccountStore()

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="signup-api",
    description="User Registration API - Field validation with atomic email uniqueness",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1/users")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every incoming request."""
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Undecodable bodies (not a JSON object, non-scalar fields) are client errors.

    Reported in the same envelope as field validation failures.
    """
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(loc) or "body"
        errors.append(FieldErrorModel(field=field, message=error.get("msg", "Invalid value")))
    body = ApiResponse(success=False, message="Validation failed", errors=errors)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.to_content())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap routing errors (404, 405) in the standard envelope."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        body = ApiResponse(
            success=False,
            message="Endpoint not found",
            errors=[
                FieldErrorModel(
                    field="route", message=f"Cannot {request.method} {request.url.path}"
                )
            ],
        )
    else:
        body = ApiResponse(success=False, message=str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code, content=body.to_content(), headers=exc.headers
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler. Details go to the log only."""
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return server_error_response()


def run() -> None:
    """Serve the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
