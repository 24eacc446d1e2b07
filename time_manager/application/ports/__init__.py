"""Ports (abstract interfaces) for the time manager application layer."""

from time_manager.application.ports.clock_change_listener import (
    ControllerTimeChangeListener,
)
from time_manager.application.ports.offset_store import OffsetStoreProtocol
from time_manager.application.ports.system_clock import SystemClockProtocol
from time_manager.application.ports.time_setter import TimeSetterProtocol

__all__: list[str] = [
    "ControllerTimeChangeListener",
    "OffsetStoreProtocol",
    "SystemClockProtocol",
    "TimeSetterProtocol",
]
