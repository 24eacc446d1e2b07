"""Controller time change listener stub for testing."""

from __future__ import annotations

from time_manager.application.ports.clock_change_listener import (
    ControllerTimeChangeListener,
)


class ControllerTimeChangeListenerStub(ControllerTimeChangeListener):
    """Records every notification it receives."""

    def __init__(self) -> None:
        self.notifications: list[int] = []

    def on_controller_time_changed(self, new_time_us: int) -> None:
        self.notifications.append(new_time_us)
