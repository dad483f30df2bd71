"""Projects API Service - FastAPI with SQLAlchemy."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
import time
import uuid

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
import httpx
from sqlalchemy.exc import SQLAlchemyError
import structlog

from shared.logging_config import setup_logging

from . import routers
from .database import dispose_engine


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    setup_logging(service_name="projects-api")
    yield
    await dispose_engine()


app = FastAPI(
    title="Workspace Projects API",
    description="Projects, branch overviews and prebuild status",
    version="0.1.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def correlation_middleware(request: Request, call_next):
    correlation_id = request.headers.get("X-Correlation-ID", f"req_{uuid.uuid4().hex[:8]}")
    structlog.contextvars.bind_contextvars(
        correlation_id=correlation_id, method=request.method, path=request.url.path
    )

    start = time.time()
    logger = structlog.get_logger()

    try:
        response = await call_next(request)
        duration_ms = (time.time() - start) * 1000

        if response.status_code >= 500:  # noqa: PLR2004
            logger.error(
                "http_request_failed",
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )
        else:
            logger.info(
                "http_request", status_code=response.status_code, duration_ms=round(duration_ms, 2)
            )

        response.headers["X-Correlation-ID"] = correlation_id
        return response
    except Exception as e:
        duration_ms = (time.time() - start) * 1000
        logger.error(
            "http_request_exception",
            error=str(e),
            error_type=type(e).__name__,
            duration_ms=round(duration_ms, 2),
            exc_info=True,
        )
        raise
    finally:
        structlog.contextvars.clear_contextvars()


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Store failures -> 503."""
    structlog.get_logger().error(
        "store_error",
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "store_unavailable"},
    )


@app.exception_handler(httpx.HTTPError)
async def provider_error_handler(request: Request, exc: httpx.HTTPError) -> JSONResponse:
    """Repository provider failures -> 502."""
    upstream_status = (
        exc.response.status_code if isinstance(exc, httpx.HTTPStatusError) else None
    )
    structlog.get_logger().error(
        "provider_error",
        error=str(exc),
        error_type=type(exc).__name__,
        upstream_status=upstream_status,
    )
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "provider_error", "upstream_status": upstream_status},
    )


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "Workspace Projects API",
        "version": "0.1.0",
        "description": "Projects, branch overviews and prebuild status",
    }


app.include_router(routers.health.router)
app.include_router(routers.teams.router, prefix="/api")
app.include_router(routers.projects.router, prefix="/api")
