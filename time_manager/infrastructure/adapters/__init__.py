"""Production adapters for the time manager ports."""

from time_manager.infrastructure.adapters.clock_change_monitor import (
    ClockChangeMonitor,
)
from time_manager.infrastructure.adapters.file_offset_store import FileOffsetStore
from time_manager.infrastructure.adapters.system_clock import SystemClock
from time_manager.infrastructure.adapters.timedated_time_setter import (
    TimedatedTimeSetter,
)

__all__: list[str] = [
    "ClockChangeMonitor",
    "FileOffsetStore",
    "SystemClock",
    "TimedatedTimeSetter",
]
