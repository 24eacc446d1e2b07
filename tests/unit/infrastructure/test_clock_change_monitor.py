"""Unit tests for ClockChangeMonitor."""

from __future__ import annotations

import asyncio

import pytest

from tests.helpers import FakeSystemClock
from time_manager.infrastructure.adapters.clock_change_monitor import (
    ClockChangeMonitor,
)


class ChangeCounter:
    def __init__(self) -> None:
        self.count = 0

    def __call__(self) -> None:
        self.count += 1


@pytest.fixture
def counter() -> ChangeCounter:
    return ChangeCounter()


@pytest.fixture
def monitor(fake_clock: FakeSystemClock, counter: ChangeCounter) -> ClockChangeMonitor:
    return ClockChangeMonitor(
        fake_clock, counter, poll_interval_seconds=0.01, jump_threshold_us=100_000
    )


class TestCheckOnce:
    def test_no_change_when_time_passes_normally(
        self, monitor: ClockChangeMonitor, fake_clock: FakeSystemClock, counter: ChangeCounter
    ) -> None:
        fake_clock.advance(seconds=30)

        assert monitor.check_once() is False
        assert counter.count == 0

    @pytest.mark.parametrize("seconds", [2, -2])
    def test_wall_clock_jump_is_signalled_once(
        self,
        monitor: ClockChangeMonitor,
        fake_clock: FakeSystemClock,
        counter: ChangeCounter,
        seconds: int,
    ) -> None:
        fake_clock.jump(seconds=seconds)

        assert monitor.check_once() is True
        assert monitor.check_once() is False
        assert counter.count == 1

    def test_small_drift_is_ignored(
        self, monitor: ClockChangeMonitor, fake_clock: FakeSystemClock, counter: ChangeCounter
    ) -> None:
        fake_clock.jump(microseconds=50_000)

        assert monitor.check_once() is False
        assert counter.count == 0


class TestMonitoringLoop:
    async def test_start_and_stop(self, monitor: ClockChangeMonitor) -> None:
        assert monitor.is_monitoring is False

        await monitor.start_monitoring()
        assert monitor.is_monitoring is True

        await monitor.stop_monitoring()
        assert monitor.is_monitoring is False

    async def test_stop_when_not_running_is_noop(self, monitor: ClockChangeMonitor) -> None:
        await monitor.stop_monitoring()

        assert monitor.is_monitoring is False

    async def test_loop_detects_jump(
        self, monitor: ClockChangeMonitor, fake_clock: FakeSystemClock, counter: ChangeCounter
    ) -> None:
        await monitor.start_monitoring()
        try:
            fake_clock.jump(seconds=5)
            await asyncio.sleep(0.1)
        finally:
            await monitor.stop_monitoring()

        assert counter.count == 1

    async def test_loop_survives_callback_failure(self, fake_clock: FakeSystemClock) -> None:
        calls: list[int] = []

        def failing() -> None:
            calls.append(1)
            raise RuntimeError("listener failed")

        monitor = ClockChangeMonitor(
            fake_clock, failing, poll_interval_seconds=0.01, jump_threshold_us=100_000
        )
        await monitor.start_monitoring()
        try:
            fake_clock.jump(seconds=5)
            await asyncio.sleep(0.05)
            fake_clock.jump(seconds=5)
            await asyncio.sleep(0.05)
            assert monitor.is_monitoring is True
        finally:
            await monitor.stop_monitoring()

        assert len(calls) == 2
