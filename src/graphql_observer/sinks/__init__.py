"""
Telemetry Sinks
===============

Backends the operation observer reports to.
"""

from graphql_observer.sinks.base import CompositeSink, TelemetrySink
from graphql_observer.sinks.structured import StructlogSink
from graphql_observer.sinks.otel import OpenTelemetrySink
from graphql_observer.sinks.prometheus import PrometheusSink
from graphql_observer.sinks.recording import NoticedError, RecordingSink

__all__ = [
    "TelemetrySink",
    "CompositeSink",
    "RecordingSink",
    "NoticedError",
    "OpenTelemetrySink",
    "PrometheusSink",
    "StructlogSink",
]
