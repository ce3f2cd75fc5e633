"""
Prometheus Sink
===============

Exposes observer counters as Prometheus metrics.
"""

from prometheus_client import CollectorRegistry, Counter

from graphql_observer.sinks.base import TelemetrySink


def create_observer_counters(
    registry: CollectorRegistry,
    namespace: str = "graphql",
) -> tuple[Counter, Counter]:
    """
    Register the observer call and error counters.

    Counters can only be registered once per registry, so applications
    should call this at import time and share the result.

    Returns:
        Tuple of (field call counter, noticed error counter)
    """
    calls = Counter(
        f"{namespace}_operation_calls_total",
        "GraphQL operation field invocations",
        ["metric"],
        registry=registry,
    )
    errors = Counter(
        f"{namespace}_noticed_errors_total",
        "GraphQL errors reported outside field resolution",
        ["expected"],
        registry=registry,
    )
    return calls, errors


class PrometheusSink(TelemetrySink):
    """
    Telemetry sink that records counters and noticed errors.

    Transaction names and custom parameters have no Prometheus
    equivalent and are ignored.
    """

    def __init__(self, calls: Counter, errors: Counter) -> None:
        self.calls = calls
        self.errors = errors

    @classmethod
    def for_registry(cls, registry: CollectorRegistry, namespace: str = "graphql") -> "PrometheusSink":
        """Create a sink with freshly registered counters."""
        return cls(*create_observer_counters(registry, namespace))

    def set_transaction_name(self, category: str, name: str) -> None:
        pass

    def add_custom_parameter(self, key: str, value: str) -> None:
        pass

    def increment_counter(self, key: str) -> None:
        self.calls.labels(metric=key).inc()

    def notice_error(self, message: str, expected: bool) -> None:
        self.errors.labels(expected=str(expected).lower()).inc()
