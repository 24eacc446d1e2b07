"""Domain errors for the time manager.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from TimeManagerError.
"""

from time_manager.domain.errors.time_setting import (
    InvalidTimeSettingError,
    ListenerAlreadyRegisteredError,
    MethodCallFailedError,
    NotAllowedError,
    TimeSettingError,
)

__all__: list[str] = [
    "InvalidTimeSettingError",
    "ListenerAlreadyRegisteredError",
    "MethodCallFailedError",
    "NotAllowedError",
    "TimeSettingError",
]
