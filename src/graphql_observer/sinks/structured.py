"""
Structured Log Sink
===================

Writes observer telemetry as structured log events.
"""

import structlog

from graphql_observer.sinks.base import TelemetrySink


class StructlogSink(TelemetrySink):
    """Telemetry sink that logs every call through structlog."""

    def __init__(self, logger_name: str = "graphql_observer.telemetry") -> None:
        self.logger = structlog.get_logger(logger_name)

    def set_transaction_name(self, category: str, name: str) -> None:
        self.logger.info("graphql.transaction_named", category=category, name=name)

    def add_custom_parameter(self, key: str, value: str) -> None:
        self.logger.debug("graphql.parameter", key=key, value=value)

    def increment_counter(self, key: str) -> None:
        self.logger.debug("graphql.counter_incremented", metric=key)

    def notice_error(self, message: str, expected: bool) -> None:
        if expected:
            self.logger.warning("graphql.error_noticed", error=message, expected=True)
        else:
            self.logger.error("graphql.error_noticed", error=message, expected=False)
