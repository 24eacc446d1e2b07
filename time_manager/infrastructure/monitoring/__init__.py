"""Operational monitoring for the time manager."""

from time_manager.infrastructure.monitoring.metrics import (
    ClockMetrics,
    generate_metrics,
    get_clock_metrics,
    reset_clock_metrics,
)

__all__: list[str] = [
    "ClockMetrics",
    "generate_metrics",
    "get_clock_metrics",
    "reset_clock_metrics",
]
