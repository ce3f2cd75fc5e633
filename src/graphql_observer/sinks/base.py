"""
Base Telemetry Sink
===================

Abstract interface for the process-wide telemetry backend.
"""

from abc import ABC, abstractmethod


class TelemetrySink(ABC):
    """
    Capabilities the observer invokes on a telemetry backend.

    All calls are fire-and-forget. Implementations must be safe for
    concurrent use from multiple threads and tasks.
    """

    @abstractmethod
    def set_transaction_name(self, category: str, name: str) -> None:
        """Rename the active transaction or trace span."""
        pass

    @abstractmethod
    def add_custom_parameter(self, key: str, value: str) -> None:
        """Attach a key/value attribute to the active transaction."""
        pass

    @abstractmethod
    def increment_counter(self, key: str) -> None:
        """Increment a cumulative counter by one."""
        pass

    @abstractmethod
    def notice_error(self, message: str, expected: bool) -> None:
        """
        Report an error to the error-tracking backend.

        Args:
            message: String form of the error
            expected: True for handled errors that are not crashes
        """
        pass


class CompositeSink(TelemetrySink):
    """Fans every call out to several sinks in order."""

    def __init__(self, sinks: list[TelemetrySink]) -> None:
        self.sinks = list(sinks)

    def set_transaction_name(self, category: str, name: str) -> None:
        for sink in self.sinks:
            sink.set_transaction_name(category, name)

    def add_custom_parameter(self, key: str, value: str) -> None:
        for sink in self.sinks:
            sink.add_custom_parameter(key, value)

    def increment_counter(self, key: str) -> None:
        for sink in self.sinks:
            sink.increment_counter(key)

    def notice_error(self, message: str, expected: bool) -> None:
        for sink in self.sinks:
            sink.notice_error(message, expected)
