"""Bootstrap wiring for the controller and host clocks.

Builds the production object graph:

    SystemClock ─┬─> ControllerClock ──(listener)──> HostClock
                 │         ^                              |
    TimedatedTimeSetter ───┘        FileOffsetStore <─────┘
                 │
    ClockChangeMonitor ──> ControllerClock.on_time_change

The property layer drives Mode/Owner changes through set_mode() and
set_owner(), which fan out to both clocks.
"""

from __future__ import annotations

import asyncio

import structlog

from time_manager.application.ports.offset_store import OffsetStoreProtocol
from time_manager.application.ports.system_clock import SystemClockProtocol
from time_manager.application.ports.time_setter import TimeSetterProtocol
from time_manager.application.services.controller_clock import ControllerClock
from time_manager.application.services.host_clock import HostClock
from time_manager.config.time_manager_config import TimeManagerConfig
from time_manager.domain.models.time_policy import (
    DEFAULT_MODE,
    DEFAULT_OWNER,
    Mode,
    Owner,
)
from time_manager.infrastructure.adapters.clock_change_monitor import (
    ClockChangeMonitor,
)
from time_manager.infrastructure.adapters.file_offset_store import FileOffsetStore
from time_manager.infrastructure.adapters.system_clock import SystemClock
from time_manager.infrastructure.adapters.timedated_time_setter import (
    TimedatedTimeSetter,
)
from time_manager.infrastructure.monitoring.metrics import (
    ClockMetrics,
    get_clock_metrics,
)

log = structlog.get_logger()


class TimeManager:
    """Owns the two clocks and the clock change monitor."""

    def __init__(
        self,
        controller_clock: ControllerClock,
        host_clock: HostClock,
        monitor: ClockChangeMonitor,
    ) -> None:
        self._controller = controller_clock
        self._host = host_clock
        self._monitor = monitor
        self._log = log.bind(service="time_manager")

    @classmethod
    def build(
        cls,
        config: TimeManagerConfig,
        *,
        mode: Mode = DEFAULT_MODE,
        owner: Owner = DEFAULT_OWNER,
        system_clock: SystemClockProtocol | None = None,
        time_setter: TimeSetterProtocol | None = None,
        offset_store: OffsetStoreProtocol | None = None,
        metrics: ClockMetrics | None = None,
    ) -> TimeManager:
        """Wire the clocks from a config.

        Any port may be overridden, which is how tests and dry runs
        avoid touching the real system clock or offset file.
        """
        system_clock = system_clock or SystemClock()
        time_setter = time_setter or TimedatedTimeSetter(
            timeout_seconds=config.set_time_timeout_seconds
        )
        offset_store = offset_store or FileOffsetStore(config.host_offset_file)
        metrics = metrics or get_clock_metrics()

        controller = ControllerClock(
            system_clock, time_setter, mode=mode, owner=owner, metrics=metrics
        )
        host = HostClock(
            controller,
            system_clock,
            offset_store,
            mode=mode,
            owner=owner,
            metrics=metrics,
        )
        controller.set_change_listener(host)
        monitor = ClockChangeMonitor(
            system_clock,
            controller.on_time_change,
            poll_interval_seconds=config.clock_poll_interval_seconds,
            jump_threshold_us=config.clock_jump_threshold_us,
        )
        return cls(controller, host, monitor)

    @property
    def controller_clock(self) -> ControllerClock:
        return self._controller

    @property
    def host_clock(self) -> HostClock:
        return self._host

    @property
    def monitor(self) -> ClockChangeMonitor:
        return self._monitor

    def set_mode(self, mode: Mode) -> None:
        """Propagate a Mode property change to both clocks."""
        self._controller.on_mode_changed(mode)
        self._host.on_mode_changed(mode)

    def set_owner(self, owner: Owner) -> None:
        """Propagate an Owner property change to both clocks.

        The host goes first; if it cannot persist the offset reset, the
        change is rejected before the controller sees it.
        """
        self._host.on_owner_changed(owner)
        self._controller.on_owner_changed(owner)

    async def run(self, stop_event: asyncio.Event) -> None:
        """Monitor clock changes until stop_event is set."""
        await self._monitor.start_monitoring()
        self._log.info(
            "time_manager_started",
            mode=self._host.mode.value,
            owner=self._host.owner.value,
            offset_us=self._host.offset,
        )
        try:
            await stop_event.wait()
        finally:
            await self._monitor.stop_monitoring()
            self._log.info("time_manager_stopped")


_time_manager: TimeManager | None = None


def get_time_manager() -> TimeManager:
    """Get the time manager, building it from the environment on first use."""
    global _time_manager
    if _time_manager is None:
        _time_manager = TimeManager.build(TimeManagerConfig.from_environment())
    return _time_manager


def set_time_manager(manager: TimeManager) -> None:
    """Set custom time manager (testing override)."""
    global _time_manager
    _time_manager = manager


def reset_time_manager() -> None:
    """Reset time manager singleton."""
    global _time_manager
    _time_manager = None
