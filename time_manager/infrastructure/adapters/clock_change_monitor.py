"""Clock change monitor - detects wall clock jumps and signals them.

Stands in for the OS clock change channel (timerfd with cancel-on-set).
The monitor samples realtime minus monotonic at a fixed interval. That
difference only moves when someone sets the wall clock (or by slow
slewing), so a move larger than the jump threshold is reported as one
clock change through the supplied callback, normally
ControllerClock.on_time_change.

Callbacks run on the event loop thread, which is the single dispatch
context for the clocks.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from time_manager.application.ports.system_clock import SystemClockProtocol

logger = structlog.get_logger()

DEFAULT_POLL_INTERVAL_SECONDS: float = 1.0
DEFAULT_JUMP_THRESHOLD_US: int = 500_000


class ClockChangeMonitor:
    """Poll for wall clock jumps and invoke a callback for each one.

    Example:
        >>> monitor = ClockChangeMonitor(SystemClock(), controller.on_time_change)
        >>> await monitor.start_monitoring()
        >>> ...
        >>> await monitor.stop_monitoring()
    """

    def __init__(
        self,
        system_clock: SystemClockProtocol,
        on_change: Callable[[], None],
        *,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        jump_threshold_us: int = DEFAULT_JUMP_THRESHOLD_US,
    ) -> None:
        """Initialize the monitor.

        Args:
            system_clock: Clock pair to sample.
            on_change: Called once per detected jump.
            poll_interval_seconds: Delay between samples.
            jump_threshold_us: Minimum move of realtime-minus-monotonic
                that counts as a jump.
        """
        self._system_clock = system_clock
        self._on_change = on_change
        self._poll_interval_seconds = poll_interval_seconds
        self._jump_threshold_us = jump_threshold_us
        self._baseline_us = self._sample()
        self._is_monitoring = False
        self._monitoring_task: asyncio.Task[None] | None = None
        self._log = logger.bind(service="clock_change_monitor")

    @property
    def is_monitoring(self) -> bool:
        """Check if monitoring is currently active."""
        return self._is_monitoring

    @property
    def poll_interval_seconds(self) -> float:
        """Delay between samples."""
        return self._poll_interval_seconds

    def check_once(self) -> bool:
        """Sample the clocks and signal a change if the wall clock jumped.

        Returns:
            True if a jump was detected and the callback invoked.
        """
        sample_us = self._sample()
        jump_us = sample_us - self._baseline_us
        self._baseline_us = sample_us
        if abs(jump_us) <= self._jump_threshold_us:
            return False
        self._log.info("clock_jump_detected", jump_us=jump_us)
        self._on_change()
        return True

    async def start_monitoring(self) -> None:
        """Start the background polling task."""
        if self._is_monitoring:
            self._log.warning("monitoring_already_running")
            return

        self._baseline_us = self._sample()
        self._is_monitoring = True
        self._monitoring_task = asyncio.create_task(self._monitoring_loop())
        self._log.info(
            "clock_monitoring_started",
            interval_seconds=self._poll_interval_seconds,
            threshold_us=self._jump_threshold_us,
        )

    async def stop_monitoring(self) -> None:
        """Stop the background polling task."""
        if not self._is_monitoring:
            self._log.debug("monitoring_not_running")
            return

        self._is_monitoring = False

        if self._monitoring_task is not None:
            self._monitoring_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._monitoring_task
            self._monitoring_task = None

        self._log.info("clock_monitoring_stopped")

    async def _monitoring_loop(self) -> None:
        while self._is_monitoring:
            try:
                await asyncio.sleep(self._poll_interval_seconds)
            except asyncio.CancelledError:
                break

            try:
                self.check_once()
            except asyncio.CancelledError:
                break
            except Exception as e:
                self._log.error("clock_change_handling_failed", error=str(e), exc_info=True)

    def _sample(self) -> int:
        return self._system_clock.realtime_us() - self._system_clock.monotonic_us()
