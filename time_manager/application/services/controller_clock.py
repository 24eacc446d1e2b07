"""Controller clock service - the platform's own absolute clock.

Wraps the local system clock and applies the controller side of the
time policy. A permitted manual set is never applied locally; it is
handed to the external time service, and the resulting wall clock jump
comes back through on_time_change() like any other external change.

Change notification fan-out:
- Exactly one ControllerTimeChangeListener, registered once at wiring
- on_time_change() is the entry point for the OS clock change channel
- The listener is invoked synchronously with the new reading; no
  filtering, no coalescing
- write() never notifies directly
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from time_manager.application.services.base import LoggingMixin
from time_manager.domain.errors.time_setting import (
    ListenerAlreadyRegisteredError,
    MethodCallFailedError,
    NotAllowedError,
)
from time_manager.domain.models.time_policy import (
    DEFAULT_MODE,
    DEFAULT_OWNER,
    Mode,
    Owner,
    Requester,
    SetTimeDecision,
)
from time_manager.domain.services.time_policy import decide
from time_manager.infrastructure.monitoring.metrics import (
    OUTCOME_DENIED,
    OUTCOME_FAILED,
    OUTCOME_SET,
)

if TYPE_CHECKING:
    from time_manager.application.ports.clock_change_listener import (
        ControllerTimeChangeListener,
    )
    from time_manager.application.ports.system_clock import SystemClockProtocol
    from time_manager.application.ports.time_setter import TimeSetterProtocol
    from time_manager.infrastructure.monitoring.metrics import ClockMetrics


class ControllerClock(LoggingMixin):
    """The controller's absolute clock.

    Example:
        >>> clock = ControllerClock(SystemClock(), TimedatedTimeSetter())
        >>> clock.set_change_listener(host_clock)
        >>> now = clock.read()
        >>> clock.write(now + 60_000_000)  # Raises NotAllowedError if denied
    """

    def __init__(
        self,
        system_clock: SystemClockProtocol,
        time_setter: TimeSetterProtocol,
        *,
        mode: Mode = DEFAULT_MODE,
        owner: Owner = DEFAULT_OWNER,
        metrics: ClockMetrics | None = None,
    ) -> None:
        """Initialize the controller clock.

        Args:
            system_clock: Source of wall clock readings.
            time_setter: External time service used for absolute sets.
            mode: Initial synchronization mode (default MANUAL).
            owner: Initial time owner (default BOTH).
            metrics: Optional metrics collector.
        """
        self._system_clock = system_clock
        self._time_setter = time_setter
        self._mode = mode
        self._owner = owner
        self._metrics = metrics
        self._listener: ControllerTimeChangeListener | None = None
        self._init_logger()

    @property
    def mode(self) -> Mode:
        """Active synchronization mode."""
        return self._mode

    @property
    def owner(self) -> Owner:
        """Active time owner."""
        return self._owner

    @property
    def has_listener(self) -> bool:
        """Whether a change listener has been registered."""
        return self._listener is not None

    def on_mode_changed(self, mode: Mode) -> None:
        """Apply a Mode change from the property layer."""
        self._log_operation("on_mode_changed").info(
            "time_mode_changed", old=self._mode.value, new=mode.value
        )
        self._mode = mode

    def on_owner_changed(self, owner: Owner) -> None:
        """Apply an Owner change from the property layer."""
        self._log_operation("on_owner_changed").info(
            "time_owner_changed", old=self._owner.value, new=owner.value
        )
        self._owner = owner

    def read(self) -> int:
        """Return the controller time in microseconds since the epoch."""
        return self._system_clock.realtime_us()

    def write(self, target_us: int) -> None:
        """Manually set the controller's absolute time.

        Args:
            target_us: Target time in microseconds since the epoch.

        Raises:
            NotAllowedError: If the active Mode/Owner forbids the set.
            MethodCallFailedError: If the external time service fails.
        """
        decision = decide(self._mode, self._owner, Requester.CONTROLLER)
        if decision is SetTimeDecision.DENIED:
            self._log_operation("write", target_us=target_us).warning(
                "time_set_denied",
                mode=self._mode.value,
                owner=self._owner.value,
            )
            self._record(OUTCOME_DENIED)
            raise NotAllowedError(self._mode, self._owner, Requester.CONTROLLER)

        self.set_absolute(target_us)

    def set_absolute(self, target_us: int) -> None:
        """Set the absolute time through the external time service.

        This path applies no policy. It serves write() after a
        SET_ABSOLUTE decision and the host clock's forwarded writes.

        Args:
            target_us: Target time in microseconds since the epoch.

        Raises:
            MethodCallFailedError: If the external time service fails.
        """
        log = self._log_operation("set_absolute", target_us=target_us)
        try:
            self._time_setter.set_time(target_us, relative=False, interactive=False)
        except MethodCallFailedError as e:
            log.error(
                "time_set_call_failed",
                method=e.method,
                path=e.path,
                interface=e.interface,
                misc=e.misc,
            )
            self._record(OUTCOME_FAILED)
            raise
        self._record(OUTCOME_SET)
        log.info("time_set_requested")

    def set_change_listener(self, listener: ControllerTimeChangeListener) -> None:
        """Register the single controller time change listener.

        Args:
            listener: The listener to notify on every clock change.

        Raises:
            ListenerAlreadyRegisteredError: If a listener is already set.
        """
        if self._listener is not None:
            raise ListenerAlreadyRegisteredError()
        self._listener = listener

    def on_time_change(self) -> None:
        """Handle a controller clock change from the OS notification channel.

        Reads the new controller time and hands it to the registered
        listener synchronously.
        """
        new_time_us = self.read()
        log = self._log_operation("on_time_change", new_time_us=new_time_us)
        if self._metrics is not None:
            self._metrics.increment_controller_time_changes()
        if self._listener is None:
            log.debug("controller_time_changed_no_listener")
            return
        log.info("controller_time_changed")
        self._listener.on_controller_time_changed(new_time_us)

    def _record(self, outcome: str) -> None:
        if self._metrics is not None:
            self._metrics.record_set_request("controller", outcome)
