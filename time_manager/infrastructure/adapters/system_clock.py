"""Production SystemClockProtocol backed by the process clocks."""

from __future__ import annotations

import time

from time_manager.application.ports.system_clock import SystemClockProtocol


class SystemClock(SystemClockProtocol):
    """Reads CLOCK_REALTIME and CLOCK_MONOTONIC in microseconds."""

    def realtime_us(self) -> int:
        return time.time_ns() // 1_000

    def monotonic_us(self) -> int:
        return time.monotonic_ns() // 1_000
