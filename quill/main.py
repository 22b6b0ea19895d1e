# quill/main.py

"""Quill Backend - blog posts with stateless token authentication."""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from quill.configs import settings
from quill.db import engine
from quill.errors import BaseAppError, app_exception_handler, validation_exception_handler
from quill.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from quill.monitoring import configure_logging, get_logger
from quill.routes import auth_router, posts_router
from quill.schemas import HealthCheckResponse
from quill.utils.helpers import today_str

configure_logging()
logger = get_logger("quill.main")

app = FastAPI(
    title=settings.APP_NAME,
    description="Quill blog API: accounts, posts, search and pagination",
    version=settings.VERSION,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)


routes = [
    auth_router,
    posts_router,
]

_ = [app.include_router(router, prefix=settings.API_PREFIX) for router in routes]

errors = [
    (BaseAppError, app_exception_handler),
    (RequestValidationError, validation_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "ok",
                        "timestamp": "2025-01-01 10:00:00",
                        "database": "connected",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
async def health_check() -> ORJSONResponse:
    """
    Health check endpoint with database connectivity.

    Returns
    -------
    ORJSONResponse
        Health status; ``status`` is ``degraded`` when the database is unreachable.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"version": "1.0.0", "status": "ok", "timestamp": "...", "database": "connected"}
    """
    database = "connected"
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError):
        logger.exception("Health check could not reach the database")
        database = "unavailable"

    response_data = HealthCheckResponse(
        version=app.version,
        status="ok" if database == "connected" else "degraded",
        timestamp=today_str(),
        database=database,
    )
    return ORJSONResponse(response_data.model_dump())


@app.get(
    "/",
    tags=["🏠 Root"],
    summary="Root access",
    response_model=dict[str, str],
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"message": "Welcome to Quill"},
                },
            },
        },
    },
    operation_id="root_access",
)
async def root() -> ORJSONResponse:
    """
    Root endpoint.

    Returns
    -------
    ORJSONResponse
        Welcome message payload.
    """
    return ORJSONResponse(content={"message": f"Welcome to {settings.APP_NAME}"})
