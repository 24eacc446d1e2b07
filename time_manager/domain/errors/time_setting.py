"""Time setting errors.

These exceptions are raised by the controller and host clocks when a
manual set request cannot be honored.

Error kinds:
- NotAllowedError: the active (Mode, Owner) pair forbids the set. Raised
  before any state mutation or external call. Do NOT retry; the caller
  must change Mode/Owner or abandon the request.
- MethodCallFailedError: the external time service rejected or failed
  the forwarded SetTime call. One attempt per write, no internal retry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from time_manager.domain.exceptions import TimeManagerError

if TYPE_CHECKING:
    from time_manager.domain.models.time_policy import Mode, Owner, Requester


class TimeSettingError(TimeManagerError):
    """Base exception for failed manual time set requests."""

    pass


class NotAllowedError(TimeSettingError):
    """Raised when the active Mode/Owner combination forbids a manual set.

    Attributes:
        mode: Active synchronization mode when the request was denied.
        owner: Active time owner when the request was denied.
        requester: Which clock the request targeted.
    """

    def __init__(
        self,
        mode: Mode | None = None,
        owner: Owner | None = None,
        requester: Requester | None = None,
        message: str = "Setting time is not allowed",
    ) -> None:
        """Initialize with the policy state that caused the denial.

        Args:
            mode: Active Mode.
            owner: Active Owner.
            requester: The clock that received the set request.
            message: Error description.
        """
        if mode is not None and owner is not None:
            message = f"{message}: mode={mode.value}, owner={owner.value}"
            if requester is not None:
                message = f"{message}, requester={requester.value}"
        super().__init__(message)
        self.mode = mode
        self.owner = owner
        self.requester = requester


class MethodCallFailedError(TimeSettingError):
    """Raised when a call to an external bus method fails.

    Carries the identity of the failed call so the failure can be
    diagnosed without reproducing it.

    Attributes:
        service: Bus service name that was called.
        path: Object path that was called.
        interface: Interface of the called method.
        method: Method name.
        misc: Free-form detail (stderr text, exit code, property name).
    """

    def __init__(
        self,
        method: str,
        *,
        service: str = "",
        path: str = "",
        interface: str = "",
        misc: str = "",
    ) -> None:
        """Initialize with the failed call identity.

        Args:
            method: The bus method name.
            service: The bus service name.
            path: The object path.
            interface: The interface name.
            misc: Additional detail about the failure.
        """
        message = (
            f"Method call failed: {method} "
            f"(service={service}, path={path}, interface={interface})"
        )
        if misc:
            message = f"{message}: {misc}"
        super().__init__(message)
        self.service = service
        self.path = path
        self.interface = interface
        self.method = method
        self.misc = misc


class ListenerAlreadyRegisteredError(TimeManagerError):
    """Raised when a second controller time change listener is registered.

    The controller clock has exactly one listener, set once at wiring
    time. A second registration is a wiring bug, not an overwrite.
    """

    def __init__(
        self, message: str = "Controller time change listener already registered"
    ) -> None:
        """Initialize with default message."""
        super().__init__(message)


class InvalidTimeSettingError(TimeManagerError, ValueError):
    """Raised when a Mode or Owner string cannot be parsed.

    Attributes:
        setting: Which setting was being parsed ("mode" or "owner").
        value: The rejected string.
    """

    def __init__(self, setting: str, value: str) -> None:
        """Initialize with the rejected value.

        Args:
            setting: Name of the setting being parsed.
            value: The string that did not match any known value.
        """
        super().__init__(f"Invalid time {setting}: {value!r}")
        self.setting = setting
        self.value = value
