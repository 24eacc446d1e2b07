"""Application services for the time manager."""

from time_manager.application.services.base import LoggingMixin
from time_manager.application.services.controller_clock import ControllerClock
from time_manager.application.services.host_clock import HostClock

__all__: list[str] = ["ControllerClock", "HostClock", "LoggingMixin"]
