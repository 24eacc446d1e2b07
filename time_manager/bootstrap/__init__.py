"""Bootstrap wiring for the time manager process."""

from time_manager.bootstrap.logging import configure_structlog
from time_manager.bootstrap.time_manager import (
    TimeManager,
    get_time_manager,
    reset_time_manager,
    set_time_manager,
)

__all__: list[str] = [
    "TimeManager",
    "configure_structlog",
    "get_time_manager",
    "reset_time_manager",
    "set_time_manager",
]
