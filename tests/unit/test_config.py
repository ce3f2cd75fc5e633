"""
Unit Tests for Observer Configuration
=====================================
"""

import pytest
from prometheus_client import CollectorRegistry

from graphql_observer.config import ObserverSettings, build_observer, build_sink
from graphql_observer.secure import ELISION_MASK, SecureValue
from graphql_observer.sinks import CompositeSink, PrometheusSink, RecordingSink, StructlogSink


class TestObserverSettings:
    """Tests for reading settings from the environment."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "GRAPHQL_NOTICE_ERRORS",
            "GRAPHQL_ELIDE_SECURE_VALUES",
            "GRAPHQL_ELISION_KEEP_CHARS",
            "GRAPHQL_TELEMETRY_SINKS",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = ObserverSettings.from_env()

        assert settings.notice_errors is False
        assert settings.elide_secure_values is False
        assert settings.elision_keep_chars is None
        assert settings.sinks == ("otel", "prometheus", "log")

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GRAPHQL_NOTICE_ERRORS", "true")
        monkeypatch.setenv("GRAPHQL_ELIDE_SECURE_VALUES", "1")
        monkeypatch.setenv("GRAPHQL_ELISION_KEEP_CHARS", "2")
        monkeypatch.setenv("GRAPHQL_TELEMETRY_SINKS", "log, Recording")

        settings = ObserverSettings.from_env()

        assert settings.notice_errors is True
        assert settings.elide_secure_values is True
        assert settings.elision_keep_chars == 2
        assert settings.sinks == ("log", "recording")


class TestBuildSink:
    """Tests for building sinks by name."""

    def test_single_sink(self) -> None:
        assert isinstance(build_sink(("recording",)), RecordingSink)

    def test_composite(self) -> None:
        prometheus_sink = PrometheusSink.for_registry(CollectorRegistry())
        sink = build_sink(("log", "prometheus"), prometheus_sink=prometheus_sink)

        assert isinstance(sink, CompositeSink)
        assert [type(s) for s in sink.sinks] == [StructlogSink, PrometheusSink]
        assert sink.sinks[1] is prometheus_sink

    def test_prometheus_requires_shared_counters(self) -> None:
        with pytest.raises(ValueError, match="prometheus_sink"):
            build_sink(("prometheus",))

    def test_unknown_sink(self) -> None:
        with pytest.raises(ValueError, match="Unknown telemetry sink"):
            build_sink(("newrelic",))


class TestBuildObserver:
    """Tests for building the observer from settings."""

    def test_elision_keep_chars(self) -> None:
        settings = ObserverSettings(elide_secure_values=True, elision_keep_chars=2)
        observer = build_observer(settings, RecordingSink())

        assert observer.elide_secure_values is True
        assert observer.sanitize_variables({"p": SecureValue("secret")}) == {"p": "se" + ELISION_MASK}

    def test_elision_default_keep_chars(self) -> None:
        observer = build_observer(ObserverSettings(elide_secure_values=True), RecordingSink())
        assert observer.sanitize_variables({"p": SecureValue("secret")}) == {"p": "secr" + ELISION_MASK}
