"""Time Setter port - interface to the external time-setting service.

The controller clock never sets the system clock itself. After a
SET_ABSOLUTE decision it asks the external time service to do it, and
the resulting wall clock jump comes back through the clock change
notification channel.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class TimeSetterProtocol(ABC):
    """Abstract interface for the external time-setting service.

    Implementations must make exactly one call per invocation and must
    not retry. Failures surface as MethodCallFailedError carrying the
    identity of the failed call.
    """

    @abstractmethod
    def set_time(
        self,
        target_us: int,
        *,
        relative: bool = False,
        interactive: bool = False,
    ) -> None:
        """Set the system clock.

        Args:
            target_us: Target time in microseconds since the Unix epoch,
                or a delta when relative is True.
            relative: Whether target_us is relative to the current time.
            interactive: Whether the service may prompt for authorization.

        Raises:
            MethodCallFailedError: If the call fails or is rejected.
        """
        ...
