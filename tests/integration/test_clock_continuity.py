"""Integration tests for host clock behaviour on the real system clock.

Real wall clock readings move between calls, so assertions allow a
two second tolerance. The file-backed store is used throughout.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from time_manager.application.services.controller_clock import ControllerClock
from time_manager.application.services.host_clock import HostClock
from time_manager.domain.models.time_policy import Mode, Owner
from time_manager.infrastructure.adapters.file_offset_store import FileOffsetStore
from time_manager.infrastructure.adapters.system_clock import SystemClock
from time_manager.infrastructure.stubs import TimeSetterStub

pytestmark = pytest.mark.integration

ONE_MINUTE_US = 60_000_000
TOLERANCE_US = 2_000_000


@pytest.fixture
def offset_path(tmp_path: Path) -> Path:
    return tmp_path / "host_offset"


def _clocks(
    offset_path: Path, *, mode: Mode, owner: Owner
) -> tuple[ControllerClock, HostClock, TimeSetterStub]:
    system_clock = SystemClock()
    setter = TimeSetterStub()
    controller = ControllerClock(system_clock, setter, mode=mode, owner=owner)
    host = HostClock(
        controller, system_clock, FileOffsetStore(offset_path), mode=mode, owner=owner
    )
    controller.set_change_listener(host)
    return controller, host, setter


class TestSplitOnRealClock:
    def test_future_write(self, offset_path: Path) -> None:
        controller, host, setter = _clocks(offset_path, mode=Mode.AUTOMATIC, owner=Owner.SPLIT)

        host.write(host.read() + ONE_MINUTE_US)

        assert ONE_MINUTE_US - TOLERANCE_US <= host.offset <= ONE_MINUTE_US
        assert abs(host.read() - controller.read() - ONE_MINUTE_US) <= TOLERANCE_US
        assert setter.calls == []

    def test_past_write(self, offset_path: Path) -> None:
        controller, host, _ = _clocks(offset_path, mode=Mode.MANUAL, owner=Owner.SPLIT)

        host.write(host.read() - ONE_MINUTE_US)

        assert -ONE_MINUTE_US - TOLERANCE_US <= host.offset <= -ONE_MINUTE_US + TOLERANCE_US
        assert abs(host.read() - controller.read() + ONE_MINUTE_US) <= TOLERANCE_US

    def test_offset_survives_restart(self, offset_path: Path) -> None:
        _, host, _ = _clocks(offset_path, mode=Mode.MANUAL, owner=Owner.SPLIT)
        host.write(host.read() + ONE_MINUTE_US)
        saved = host.offset

        _, restarted, _ = _clocks(offset_path, mode=Mode.MANUAL, owner=Owner.SPLIT)

        assert restarted.offset == saved
        assert offset_path.read_text() == f"{saved}\n"

    def test_leaving_split_persists_zero(self, offset_path: Path) -> None:
        controller, host, _ = _clocks(offset_path, mode=Mode.MANUAL, owner=Owner.SPLIT)
        host.write(host.read() + ONE_MINUTE_US)

        host.on_owner_changed(Owner.BOTH)

        assert host.offset == 0
        assert FileOffsetStore(offset_path).load() == 0
        assert abs(host.read() - controller.read()) <= TOLERANCE_US


class TestForwardingOnRealClock:
    def test_manual_host_forwards_target(self, offset_path: Path) -> None:
        controller, host, setter = _clocks(offset_path, mode=Mode.MANUAL, owner=Owner.HOST)
        target = controller.read() + 180_000_000

        host.write(target)

        assert [call.target_us for call in setter.calls] == [target]
        assert host.offset == 0
        assert not offset_path.exists()


class TestContinuityOnRealClock:
    def test_controller_change_keeps_host_time(self, offset_path: Path) -> None:
        controller, host, _ = _clocks(offset_path, mode=Mode.MANUAL, owner=Owner.SPLIT)
        host.write(host.read() + ONE_MINUTE_US)
        host_before = host.read()

        # Notify as if the controller had just jumped back 30 s
        new_controller_us = controller.read() - 30_000_000
        host.on_controller_time_changed(new_controller_us)

        assert abs(new_controller_us + host.offset - host_before) <= TOLERANCE_US
        assert FileOffsetStore(offset_path).load() == host.offset

    def test_notification_at_written_time_brings_offset_near_zero(
        self, offset_path: Path
    ) -> None:
        _, host, _ = _clocks(offset_path, mode=Mode.MANUAL, owner=Owner.SPLIT)
        target = host.read() + ONE_MINUTE_US
        host.write(target)

        host.on_controller_time_changed(target)

        assert abs(host.offset) <= TOLERANCE_US
