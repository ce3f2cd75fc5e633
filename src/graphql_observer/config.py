"""
Observer Configuration
======================

Environment-driven settings for the operation observer.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from graphql_observer.observer import OperationObserver
from graphql_observer.sinks import (
    CompositeSink,
    OpenTelemetrySink,
    PrometheusSink,
    RecordingSink,
    StructlogSink,
    TelemetrySink,
)

TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES


@dataclass(frozen=True)
class ObserverSettings:
    """Observer configuration, fixed for the lifetime of the process."""

    notice_errors: bool = False
    elide_secure_values: bool = False
    elision_keep_chars: Optional[int] = None
    sinks: tuple[str, ...] = field(default_factory=lambda: ("otel", "prometheus", "log"))

    @classmethod
    def from_env(cls) -> "ObserverSettings":
        """
        Read settings from the environment.

        Variables:
            GRAPHQL_NOTICE_ERRORS: Report non-resolver errors (default: false)
            GRAPHQL_ELIDE_SECURE_VALUES: Elide SecureString variables (default: false)
            GRAPHQL_ELISION_KEEP_CHARS: Characters kept when eliding (default: 4)
            GRAPHQL_TELEMETRY_SINKS: Comma separated sink names (default: otel,prometheus,log)
        """
        keep_chars = os.getenv("GRAPHQL_ELISION_KEEP_CHARS")
        sinks = os.getenv("GRAPHQL_TELEMETRY_SINKS", "otel,prometheus,log")
        return cls(
            notice_errors=_env_flag("GRAPHQL_NOTICE_ERRORS"),
            elide_secure_values=_env_flag("GRAPHQL_ELIDE_SECURE_VALUES"),
            elision_keep_chars=int(keep_chars) if keep_chars else None,
            sinks=tuple(name.strip().lower() for name in sinks.split(",") if name.strip()),
        )


def build_sink(
    names: tuple[str, ...],
    prometheus_sink: Optional[PrometheusSink] = None,
) -> TelemetrySink:
    """
    Create the telemetry sink for a list of sink names.

    Args:
        names: Sink names (otel, prometheus, log, recording)
        prometheus_sink: Sink over the application's shared Prometheus
            counters, used when "prometheus" is named

    Raises:
        ValueError: If a sink name is unknown, or "prometheus" is named
            without a prometheus_sink
    """
    sinks: list[TelemetrySink] = []
    for name in names:
        if name == "otel":
            sinks.append(OpenTelemetrySink())
        elif name == "prometheus":
            if prometheus_sink is None:
                raise ValueError("The prometheus sink needs shared counters; pass prometheus_sink")
            sinks.append(prometheus_sink)
        elif name == "log":
            sinks.append(StructlogSink())
        elif name == "recording":
            sinks.append(RecordingSink())
        else:
            raise ValueError(f"Unknown telemetry sink: {name}")

    if len(sinks) == 1:
        return sinks[0]
    return CompositeSink(sinks)


def build_observer(settings: ObserverSettings, sink: TelemetrySink) -> OperationObserver:
    """Create an observer from settings."""
    return OperationObserver(
        sink,
        notice_errors=settings.notice_errors,
        elide_secure_values=settings.elide_secure_values,
        elision_char_count=settings.elision_keep_chars,
    )
