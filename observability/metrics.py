"""
Prometheus Metrics
==================

Application metrics for monitoring and alerting.
"""

import time
from typing import Callable

from fastapi import FastAPI, Request, Response
from prometheus_client import (
    Counter,
    Histogram,
    Gauge,
    Info,
    generate_latest,
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    multiprocess,
)

from api import __version__
from graphql_observer.sinks.prometheus import create_observer_counters

# Create a custom registry for this application
REGISTRY = CollectorRegistry()

GRAPHQL_PATH = "/graphql"

# Application info
APP_INFO = Info(
    "posts_graphql",
    "Posts GraphQL API information",
    registry=REGISTRY,
)

# GraphQL execution metrics
GRAPHQL_EXECUTIONS_TOTAL = Counter(
    "posts_graphql_executions_total",
    "Total GraphQL operations executed",
    ["status"],  # success, error
    registry=REGISTRY,
)

GRAPHQL_EXECUTION_DURATION = Histogram(
    "posts_graphql_execution_duration_seconds",
    "GraphQL execution duration in seconds",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
    registry=REGISTRY,
)

# HTTP metrics
HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
    registry=REGISTRY,
)

HTTP_REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
    registry=REGISTRY,
)

# In-flight GraphQL operations gauge
ACTIVE_OPERATIONS = Gauge(
    "posts_graphql_active_operations",
    "Number of GraphQL operations currently being executed",
    registry=REGISTRY,
)

# Operation observer field counters and noticed errors
GRAPHQL_OPERATION_CALLS, GRAPHQL_NOTICED_ERRORS = create_observer_counters(REGISTRY)


def setup_metrics(app: FastAPI, environment: str = "development") -> None:
    """
    Set up Prometheus metrics for the FastAPI application.

    Args:
        app: FastAPI application instance
        environment: Deployment environment reported in the info metric
    """
    APP_INFO.info({
        "version": __version__,
        "environment": environment,
    })

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next: Callable) -> Response:
        """Middleware to track HTTP metrics."""
        start_time = time.perf_counter()

        is_graphql_endpoint = request.url.path == GRAPHQL_PATH
        if is_graphql_endpoint:
            ACTIVE_OPERATIONS.inc()

        try:
            response = await call_next(request)
            duration = time.perf_counter() - start_time

            HTTP_REQUESTS_TOTAL.labels(
                method=request.method,
                endpoint=request.url.path,
                status=response.status_code,
            ).inc()

            HTTP_REQUEST_DURATION.labels(
                method=request.method,
                endpoint=request.url.path,
            ).observe(duration)

            return response
        finally:
            if is_graphql_endpoint:
                ACTIVE_OPERATIONS.dec()


def track_graphql_execution(error_count: int, duration_seconds: float) -> None:
    """
    Track metrics for a completed GraphQL execution.

    Args:
        error_count: Number of errors in the result
        duration_seconds: Total execution time
    """
    GRAPHQL_EXECUTIONS_TOTAL.labels(status="error" if error_count else "success").inc()
    GRAPHQL_EXECUTION_DURATION.observe(duration_seconds)


async def metrics_endpoint(request: Request) -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format.
    """
    # Handle multiprocess mode if using gunicorn
    try:
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)
        metrics = generate_latest(registry)
    except ValueError:
        # Not in multiprocess mode
        metrics = generate_latest(REGISTRY)

    return Response(
        content=metrics,
        media_type=CONTENT_TYPE_LATEST,
    )
