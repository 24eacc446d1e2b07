"""Time setter stub for testing/development.

Records every SetTime call instead of touching the system clock, and
can be told to fail the next call.

WARNING: This stub is for development/testing only.
Production must use TimedatedTimeSetter.
"""

from __future__ import annotations

from dataclasses import dataclass

from time_manager.application.ports.time_setter import TimeSetterProtocol
from time_manager.domain.errors.time_setting import MethodCallFailedError
from time_manager.infrastructure.adapters.timedated_time_setter import (
    METHOD_SET_TIME,
    TIMEDATE_INTERFACE,
    TIMEDATE_PATH,
    TIMEDATE_SERVICE,
)


@dataclass(frozen=True)
class SetTimeCall:
    """One recorded SetTime call."""

    target_us: int
    relative: bool
    interactive: bool


class TimeSetterStub(TimeSetterProtocol):
    """In-memory TimeSetterProtocol.

    Example:
        >>> stub = TimeSetterStub()
        >>> stub.set_time(42)
        >>> stub.calls
        [SetTimeCall(target_us=42, relative=False, interactive=False)]
        >>> stub.fail_with("Access denied")
        >>> stub.set_time(43)  # Raises MethodCallFailedError
    """

    def __init__(self) -> None:
        self.calls: list[SetTimeCall] = []
        self._failure: str | None = None

    def set_time(
        self,
        target_us: int,
        *,
        relative: bool = False,
        interactive: bool = False,
    ) -> None:
        """Record the call, or raise if a failure was injected."""
        self.calls.append(SetTimeCall(target_us, relative, interactive))
        if self._failure is not None:
            raise MethodCallFailedError(
                METHOD_SET_TIME,
                service=TIMEDATE_SERVICE,
                path=TIMEDATE_PATH,
                interface=TIMEDATE_INTERFACE,
                misc=self._failure,
            )

    def fail_with(self, misc: str) -> None:
        """Make every following call fail with the given detail."""
        self._failure = misc

    def clear_failure(self) -> None:
        """Stop failing calls."""
        self._failure = None

    def clear(self) -> None:
        """Forget recorded calls."""
        self.calls.clear()
