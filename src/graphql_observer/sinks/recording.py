"""
Recording Sink
==============

In-memory sink that keeps every call, for tests and local inspection.
"""

import threading
from collections import Counter
from dataclasses import dataclass

from graphql_observer.sinks.base import TelemetrySink


@dataclass(frozen=True)
class NoticedError:
    """An error passed to :meth:`RecordingSink.notice_error`."""

    message: str
    expected: bool


class RecordingSink(TelemetrySink):
    """
    Thread-safe in-memory telemetry sink.

    Transaction names and parameters reflect the most recent call; counters
    accumulate for the lifetime of the sink.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.transaction_names: list[tuple[str, str]] = []
        self.parameters: dict[str, str] = {}
        self.counters: Counter = Counter()
        self.errors: list[NoticedError] = []
        self._parameter_calls = 0

    @property
    def transaction_name(self) -> str | None:
        """Full name of the last transaction rename, e.g. ``GraphQL/QUERY/books``."""
        with self._lock:
            if not self.transaction_names:
                return None
            category, name = self.transaction_names[-1]
            return f"{category}/{name}"

    @property
    def call_count(self) -> int:
        """Total number of sink calls received."""
        with self._lock:
            return (
                len(self.transaction_names)
                + self._parameter_calls
                + sum(self.counters.values())
                + len(self.errors)
            )

    def set_transaction_name(self, category: str, name: str) -> None:
        with self._lock:
            self.transaction_names.append((category, name))

    def add_custom_parameter(self, key: str, value: str) -> None:
        with self._lock:
            self.parameters[key] = value
            self._parameter_calls += 1

    def increment_counter(self, key: str) -> None:
        with self._lock:
            self.counters[key] += 1

    def notice_error(self, message: str, expected: bool) -> None:
        with self._lock:
            self.errors.append(NoticedError(message=message, expected=expected))

    def reset(self) -> None:
        """Drop everything recorded so far."""
        with self._lock:
            self.transaction_names = []
            self.parameters = {}
            self.counters = Counter()
            self.errors = []
            self._parameter_calls = 0
