"""API Middleware."""

from api.middleware.telemetry import TelemetryMiddleware

__all__ = ["TelemetryMiddleware"]
