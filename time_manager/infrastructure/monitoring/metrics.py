"""Prometheus metrics for the controller and host clocks.

Operational metrics only:
- time_set_requests_total{clock, outcome}: manual set requests by result
- host_offset_microseconds: current host clock offset
- controller_time_changes_total: controller clock change notifications

Labels: service, environment on every metric.
"""

import os
import threading

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    generate_latest,
)

# Outcome label values for time_set_requests_total
OUTCOME_DENIED = "denied"
OUTCOME_FORWARDED = "forwarded"
OUTCOME_OFFSET_ADJUSTED = "offset_adjusted"
OUTCOME_SET = "set"
OUTCOME_FAILED = "failed"

_collector_lock = threading.Lock()


class ClockMetrics:
    """Collects and manages clock Prometheus metrics.

    Attributes:
        time_set_requests_total: Counter of manual set requests.
        host_offset_microseconds: Gauge of the current host offset.
        controller_time_changes_total: Counter of change notifications.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize clock metrics.

        Args:
            registry: Optional custom registry for testing isolation.
        """
        self._registry = registry or CollectorRegistry()
        self._environment = os.environ.get("ENVIRONMENT", "development")
        self._service_name = os.environ.get("SERVICE_NAME", "time-manager")

        self.time_set_requests_total = Counter(
            name="time_set_requests_total",
            documentation="Total manual time set requests by clock and outcome",
            labelnames=["service", "environment", "clock", "outcome"],
            registry=self._registry,
        )

        self.host_offset_microseconds = Gauge(
            name="host_offset_microseconds",
            documentation="Current host clock offset from the controller clock",
            labelnames=["service", "environment"],
            registry=self._registry,
        )

        self.controller_time_changes_total = Counter(
            name="controller_time_changes_total",
            documentation="Total controller clock change notifications",
            labelnames=["service", "environment"],
            registry=self._registry,
        )

    def record_set_request(self, clock: str, outcome: str) -> None:
        """Increment the set request counter.

        Args:
            clock: "controller" or "host".
            outcome: One of the OUTCOME_* values.
        """
        self.time_set_requests_total.labels(
            service=self._service_name,
            environment=self._environment,
            clock=clock,
            outcome=outcome,
        ).inc()

    def set_host_offset(self, offset_us: int) -> None:
        """Set the host offset gauge."""
        self.host_offset_microseconds.labels(
            service=self._service_name,
            environment=self._environment,
        ).set(offset_us)

    def increment_controller_time_changes(self) -> None:
        """Increment the controller time change counter."""
        self.controller_time_changes_total.labels(
            service=self._service_name,
            environment=self._environment,
        ).inc()

    def get_registry(self) -> CollectorRegistry:
        """Get the collector registry."""
        return self._registry


# Singleton instance
_clock_metrics: ClockMetrics | None = None


def get_clock_metrics() -> ClockMetrics:
    """Get the singleton ClockMetrics instance (thread-safe)."""
    global _clock_metrics
    if _clock_metrics is None:
        with _collector_lock:
            if _clock_metrics is None:
                _clock_metrics = ClockMetrics()
    return _clock_metrics


def generate_metrics() -> bytes:
    """Generate Prometheus metrics in exposition format."""
    return generate_latest(get_clock_metrics().get_registry())


def reset_clock_metrics() -> None:
    """Reset the singleton collector (for testing only)."""
    global _clock_metrics
    with _collector_lock:
        _clock_metrics = None
