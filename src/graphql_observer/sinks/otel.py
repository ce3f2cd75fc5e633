"""
OpenTelemetry Sink
==================

Reports observer telemetry on the current OpenTelemetry span.
"""

from opentelemetry import metrics, trace

from graphql_observer.sinks.base import TelemetrySink


class OpenTelemetrySink(TelemetrySink):
    """
    Telemetry sink backed by the global OpenTelemetry providers.

    The "transaction" is whatever span is current when the observer runs.
    Under the FastAPI instrumentation that is the innermost active span
    around the route handler, not the outer server span.
    """

    def __init__(self, instrumentation_name: str = "graphql_observer") -> None:
        meter = metrics.get_meter(instrumentation_name)
        self._operation_counter = meter.create_counter(
            "graphql.operation.calls",
            description="GraphQL operation field invocations",
        )

    def set_transaction_name(self, category: str, name: str) -> None:
        trace.get_current_span().update_name(f"{category}/{name}")

    def add_custom_parameter(self, key: str, value: str) -> None:
        trace.get_current_span().set_attribute(key, value)

    def increment_counter(self, key: str) -> None:
        self._operation_counter.add(1, {"metric": key})

    def notice_error(self, message: str, expected: bool) -> None:
        span = trace.get_current_span()
        span.add_event(
            "graphql.error",
            attributes={"error.message": message, "error.expected": expected},
        )
        if not expected:
            span.set_status(trace.Status(trace.StatusCode.ERROR, message))
