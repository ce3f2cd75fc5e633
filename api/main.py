"""
FastAPI Application
===================

Main FastAPI application serving the observed posts GraphQL schema.
"""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import __version__
from api.middleware.telemetry import TelemetryMiddleware
from api.posts import PostDao
from api.routes.books import router as books_router
from api.routes.graphql import router as graphql_router
from api.routes.health import router as health_router
from api.schema import build_posts_schema
from api.schemas import ErrorResponse
from graphql_observer.config import ObserverSettings, build_observer, build_sink
from graphql_observer.engine import ObservedExecutor
from graphql_observer.sinks import PrometheusSink, TelemetrySink
from observability.logging_config import get_logger, setup_logging
from observability.metrics import (
    GRAPHQL_NOTICED_ERRORS,
    GRAPHQL_OPERATION_CALLS,
    metrics_endpoint,
    setup_metrics,
)
from observability.tracing import setup_tracing

DEFAULT_GRAPHQL_ENDPOINT = "http://localhost:8000/graphql"


def create_executor(
    settings: ObserverSettings,
    sink: TelemetrySink,
    dao: Optional[PostDao] = None,
) -> ObservedExecutor:
    """Create the observed executor for the posts schema."""
    schema = build_posts_schema(dao or PostDao())
    return ObservedExecutor(schema, build_observer(settings, sink))


def create_app(
    settings: Optional[ObserverSettings] = None,
    sink: Optional[TelemetrySink] = None,
    dao: Optional[PostDao] = None,
    graphql_client: Optional[httpx.AsyncClient] = None,
    enable_tracing: bool = True,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Observer settings (default: from environment)
        sink: Telemetry sink (default: built from settings.sinks)
        dao: Post store (default: sample data)
        graphql_client: HTTP client for the books route (default: created on startup)
        enable_tracing: Configure OpenTelemetry on startup
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator:
        """Application lifespan handler."""
        setup_logging()
        if enable_tracing:
            setup_tracing(app)
        logger = get_logger(__name__)

        observer_settings = settings or ObserverSettings.from_env()
        telemetry_sink = sink or build_sink(
            observer_settings.sinks,
            prometheus_sink=PrometheusSink(GRAPHQL_OPERATION_CALLS, GRAPHQL_NOTICED_ERRORS),
        )
        app.state.executor = create_executor(observer_settings, telemetry_sink, dao)

        owns_client = graphql_client is None
        app.state.graphql_client = graphql_client or httpx.AsyncClient(timeout=10.0)
        app.state.graphql_endpoint = os.getenv("GRAPHQL_ENDPOINT", DEFAULT_GRAPHQL_ENDPOINT)

        logger.info(
            "Starting posts GraphQL API",
            version=__version__,
            notice_errors=observer_settings.notice_errors,
            elide_secure_values=observer_settings.elide_secure_values,
        )

        yield

        if owns_client:
            await app.state.graphql_client.aclose()
        logger.info("Shutting down posts GraphQL API")

    app = FastAPI(
        title="Posts GraphQL API",
        description="Posts/authors GraphQL service with operation-level telemetry.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(TelemetryMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(graphql_router)
    app.include_router(books_router)

    setup_metrics(app, environment=os.getenv("ENVIRONMENT", "development"))
    app.add_route("/metrics", metrics_endpoint)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle uncaught exceptions."""
        get_logger(__name__).exception("Unhandled error", error=str(exc))
        request_id = getattr(request.state, "request_id", None)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="InternalServerError",
                message="An unexpected error occurred",
                request_id=request_id,
            ).model_dump(),
        )

    return app


# Create app instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
