"""Host clock service - the managed host's virtual clock.

Host time is the controller time, plus a persisted offset while the
owner is SPLIT:

    read() = controller.read() + offset   if owner == SPLIT
    read() = controller.read()            otherwise

Offset rules:
- Loaded from the offset store at construction
- Written to the store synchronously with every change
- Set to (target - controller time) by a SPLIT write
- Reset to 0 on every owner change to anything but SPLIT
- Re-derived on controller clock changes so host time stays continuous

Continuity:
    The host clock anchors its virtual time to the monotonic clock
    (diff_to_monotonic = monotonic - host_time). When the controller
    clock jumps, the monotonic clock does not, so the pre-jump host time
    is still monotonic - diff_to_monotonic and the offset absorbs the
    jump exactly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from time_manager.application.ports.clock_change_listener import (
    ControllerTimeChangeListener,
)
from time_manager.application.services.base import LoggingMixin
from time_manager.domain.errors.time_setting import NotAllowedError
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
    OUTCOME_FORWARDED,
    OUTCOME_OFFSET_ADJUSTED,
)

if TYPE_CHECKING:
    from time_manager.application.ports.offset_store import OffsetStoreProtocol
    from time_manager.application.ports.system_clock import SystemClockProtocol
    from time_manager.application.services.controller_clock import ControllerClock
    from time_manager.infrastructure.monitoring.metrics import ClockMetrics


class HostClock(LoggingMixin, ControllerTimeChangeListener):
    """The host's virtual clock.

    Attributes:
        _offset: Current offset in microseconds (mirrors the store).
        _diff_to_monotonic: monotonic_us() minus host time at the last anchor.

    Example:
        >>> host = HostClock(controller, SystemClock(), FileOffsetStore(path))
        >>> controller.set_change_listener(host)
        >>> host.on_owner_changed(Owner.SPLIT)
        >>> host.write(host.read() + 60_000_000)  # Host runs one minute ahead
    """

    def __init__(
        self,
        controller_clock: ControllerClock,
        system_clock: SystemClockProtocol,
        offset_store: OffsetStoreProtocol,
        *,
        mode: Mode = DEFAULT_MODE,
        owner: Owner = DEFAULT_OWNER,
        metrics: ClockMetrics | None = None,
    ) -> None:
        """Initialize the host clock and load the persisted offset.

        Args:
            controller_clock: The controller clock host time derives from.
            system_clock: Source of monotonic readings for continuity.
            offset_store: Durable storage for the offset.
            mode: Initial synchronization mode (default MANUAL).
            owner: Initial time owner (default BOTH).
            metrics: Optional metrics collector.
        """
        self._controller = controller_clock
        self._system_clock = system_clock
        self._store = offset_store
        self._mode = mode
        self._owner = owner
        self._metrics = metrics
        self._init_logger()

        self._offset = offset_store.load()
        self._diff_to_monotonic = 0
        self._anchor()
        if self._metrics is not None:
            self._metrics.set_host_offset(self._offset)

    @property
    def mode(self) -> Mode:
        """Active synchronization mode."""
        return self._mode

    @property
    def owner(self) -> Owner:
        """Active time owner."""
        return self._owner

    @property
    def offset(self) -> int:
        """Current offset in microseconds."""
        return self._offset

    def read(self) -> int:
        """Return the host time in microseconds since the epoch."""
        if self._owner is Owner.SPLIT:
            return self._controller.read() + self._offset
        return self._controller.read()

    def write(self, target_us: int) -> None:
        """Manually set the host time.

        Args:
            target_us: Target host time in microseconds since the epoch.

        Raises:
            NotAllowedError: If the active Mode/Owner forbids the set.
            MethodCallFailedError: If a forwarded set fails.
            OSError: If the adjusted offset cannot be saved; the offset
                is then left unchanged.
        """
        log = self._log_operation("write", target_us=target_us)
        decision = decide(self._mode, self._owner, Requester.HOST)

        if decision is SetTimeDecision.DENIED:
            log.warning(
                "time_set_denied",
                mode=self._mode.value,
                owner=self._owner.value,
            )
            self._record(OUTCOME_DENIED)
            raise NotAllowedError(self._mode, self._owner, Requester.HOST)

        if decision is SetTimeDecision.ADJUST_OFFSET:
            self._set_offset(target_us - self._controller.read())
            self._anchor()
            self._record(OUTCOME_OFFSET_ADJUSTED)
            log.info("host_offset_adjusted", offset_us=self._offset)
            return

        # SET_ABSOLUTE: the controller's own owner check does not apply here
        log.info("time_set_forwarded", owner=self._owner.value)
        self._controller.set_absolute(target_us)
        self._record(OUTCOME_FORWARDED)

    def on_mode_changed(self, mode: Mode) -> None:
        """Apply a Mode change from the property layer."""
        self._log_operation("on_mode_changed").info(
            "time_mode_changed", old=self._mode.value, new=mode.value
        )
        self._mode = mode

    def on_owner_changed(self, owner: Owner) -> None:
        """Apply an Owner change from the property layer.

        Leaving SPLIT (or being in any other owner) clears the offset.
        Entering SPLIT re-anchors host time to the monotonic clock.
        If the cleared offset cannot be saved, the owner is left as it was.

        Raises:
            OSError: If the offset store cannot persist the reset.
        """
        log = self._log_operation("on_owner_changed")
        if owner is not Owner.SPLIT:
            self._set_offset(0)
            log.info("host_offset_reset")
        log.info("time_owner_changed", old=self._owner.value, new=owner.value)
        self._owner = owner
        self._anchor()

    def on_controller_time_changed(self, new_time_us: int) -> None:
        """Re-derive the offset after a controller clock change.

        Args:
            new_time_us: Controller time after the change.
        """
        if self._owner is not Owner.SPLIT:
            return
        host_time_us = self._system_clock.monotonic_us() - self._diff_to_monotonic
        self._set_offset(host_time_us - new_time_us)
        self._log_operation(
            "on_controller_time_changed", new_time_us=new_time_us
        ).info("host_offset_rederived", offset_us=self._offset)

    def _set_offset(self, offset_us: int) -> None:
        # Memory follows storage, never leads it
        self._store.save(offset_us)
        self._offset = offset_us
        if self._metrics is not None:
            self._metrics.set_host_offset(offset_us)

    def _anchor(self) -> None:
        self._diff_to_monotonic = self._system_clock.monotonic_us() - self.read()

    def _record(self, outcome: str) -> None:
        if self._metrics is not None:
            self._metrics.record_set_request("host", outcome)
