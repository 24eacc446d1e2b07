"""Unit tests for time setting errors."""

from __future__ import annotations

from time_manager.domain.errors import (
    InvalidTimeSettingError,
    ListenerAlreadyRegisteredError,
    MethodCallFailedError,
    NotAllowedError,
    TimeSettingError,
)
from time_manager.domain.exceptions import TimeManagerError
from time_manager.domain.models.time_policy import Mode, Owner, Requester


class TestNotAllowedError:
    def test_inherits_from_time_setting_error(self) -> None:
        assert issubclass(NotAllowedError, TimeSettingError)
        assert issubclass(TimeSettingError, TimeManagerError)

    def test_carries_policy_state(self) -> None:
        error = NotAllowedError(Mode.AUTOMATIC, Owner.HOST, Requester.HOST)

        assert error.mode is Mode.AUTOMATIC
        assert error.owner is Owner.HOST
        assert error.requester is Requester.HOST
        assert "mode=automatic" in str(error)
        assert "owner=host" in str(error)
        assert "requester=host" in str(error)

    def test_default_message(self) -> None:
        assert str(NotAllowedError()) == "Setting time is not allowed"


class TestMethodCallFailedError:
    def test_carries_call_identity(self) -> None:
        error = MethodCallFailedError(
            "SetTime",
            service="org.freedesktop.timedate1",
            path="/org/freedesktop/timedate1",
            interface="org.freedesktop.timedate1",
            misc="Access denied",
        )

        assert error.method == "SetTime"
        assert error.service == "org.freedesktop.timedate1"
        assert error.path == "/org/freedesktop/timedate1"
        assert error.interface == "org.freedesktop.timedate1"
        assert "SetTime" in str(error)
        assert "Access denied" in str(error)

    def test_is_time_setting_error(self) -> None:
        assert isinstance(MethodCallFailedError("Get"), TimeSettingError)


class TestOtherErrors:
    def test_listener_already_registered_is_not_a_setting_error(self) -> None:
        error = ListenerAlreadyRegisteredError()

        assert isinstance(error, TimeManagerError)
        assert not isinstance(error, TimeSettingError)

    def test_invalid_setting_is_value_error(self) -> None:
        error = InvalidTimeSettingError("owner", "nobody")

        assert isinstance(error, ValueError)
        assert "nobody" in str(error)
