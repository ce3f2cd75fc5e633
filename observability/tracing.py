"""
OpenTelemetry Tracing
=====================

Distributed tracing and OTel metrics for request flow visualization.
"""

import os
from typing import Optional

from fastapi import FastAPI
from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from api import __version__
from observability.logging_config import get_logger

logger = get_logger(__name__)


def setup_tracing(
    app: FastAPI,
    service_name: str = "posts-graphql-api",
    otlp_endpoint: Optional[str] = None,
) -> None:
    """
    Set up OpenTelemetry tracing and metrics for the application.

    The GraphQL observer renames the span current inside the route
    handler; the FastAPI server span keeps its "METHOD path" name.

    Args:
        app: FastAPI application instance
        service_name: Name of the service for traces
        otlp_endpoint: OTLP collector endpoint (default: from env or localhost:4317)
    """
    endpoint = otlp_endpoint or os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "localhost:4317")

    resource = Resource.create({
        SERVICE_NAME: service_name,
        "service.version": __version__,
        "deployment.environment": os.getenv("ENVIRONMENT", "development"),
    })

    provider = TracerProvider(resource=resource)
    metric_readers = []

    # Add OTLP exporters if endpoint is configured
    if endpoint and endpoint != "disabled":
        try:
            provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=True)))
            metric_readers.append(
                PeriodicExportingMetricReader(OTLPMetricExporter(endpoint=endpoint, insecure=True))
            )
        except Exception as e:
            logger.warning("Failed to configure OTLP exporter", endpoint=endpoint, error=str(e))

    trace.set_tracer_provider(provider)
    metrics.set_meter_provider(MeterProvider(resource=resource, metric_readers=metric_readers))

    FastAPIInstrumentor.instrument_app(app)
