"""Unit tests for clock Prometheus metrics."""

from __future__ import annotations

import pytest
from prometheus_client import CollectorRegistry

from time_manager.infrastructure.monitoring.metrics import (
    OUTCOME_DENIED,
    OUTCOME_OFFSET_ADJUSTED,
    ClockMetrics,
    generate_metrics,
    get_clock_metrics,
    reset_clock_metrics,
)


@pytest.fixture
def metrics(monkeypatch: pytest.MonkeyPatch) -> ClockMetrics:
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.delenv("SERVICE_NAME", raising=False)
    return ClockMetrics(registry=CollectorRegistry())


@pytest.fixture
def clean_singleton():
    reset_clock_metrics()
    yield
    reset_clock_metrics()


class TestClockMetrics:
    def test_set_requests_are_labelled(self, metrics: ClockMetrics) -> None:
        metrics.record_set_request("host", OUTCOME_OFFSET_ADJUSTED)
        metrics.record_set_request("host", OUTCOME_OFFSET_ADJUSTED)
        metrics.record_set_request("controller", OUTCOME_DENIED)

        registry = metrics.get_registry()
        labels = {"service": "time-manager", "environment": "test"}
        assert (
            registry.get_sample_value(
                "time_set_requests_total",
                {**labels, "clock": "host", "outcome": "offset_adjusted"},
            )
            == 2.0
        )
        assert (
            registry.get_sample_value(
                "time_set_requests_total",
                {**labels, "clock": "controller", "outcome": "denied"},
            )
            == 1.0
        )

    def test_host_offset_gauge_can_go_negative(self, metrics: ClockMetrics) -> None:
        metrics.set_host_offset(-60_000_000)

        value = metrics.get_registry().get_sample_value(
            "host_offset_microseconds",
            {"service": "time-manager", "environment": "test"},
        )
        assert value == -60_000_000.0

    def test_controller_time_changes(self, metrics: ClockMetrics) -> None:
        metrics.increment_controller_time_changes()

        value = metrics.get_registry().get_sample_value(
            "controller_time_changes_total",
            {"service": "time-manager", "environment": "test"},
        )
        assert value == 1.0


class TestMetricsSingleton:
    def test_singleton_is_reused(self, clean_singleton) -> None:
        assert get_clock_metrics() is get_clock_metrics()

    def test_reset_creates_new_instance(self, clean_singleton) -> None:
        first = get_clock_metrics()
        reset_clock_metrics()

        assert get_clock_metrics() is not first

    def test_generate_metrics_exposition(self, clean_singleton) -> None:
        get_clock_metrics().set_host_offset(5)

        output = generate_metrics()

        assert b"host_offset_microseconds" in output
