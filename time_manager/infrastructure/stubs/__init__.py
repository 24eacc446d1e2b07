"""Stub implementations of the time manager ports.

WARNING: These stubs are for development/testing only.
"""

from time_manager.infrastructure.stubs.clock_change_listener_stub import (
    ControllerTimeChangeListenerStub,
)
from time_manager.infrastructure.stubs.offset_store_stub import OffsetStoreStub
from time_manager.infrastructure.stubs.time_setter_stub import (
    SetTimeCall,
    TimeSetterStub,
)

__all__: list[str] = [
    "ControllerTimeChangeListenerStub",
    "OffsetStoreStub",
    "SetTimeCall",
    "TimeSetterStub",
]
