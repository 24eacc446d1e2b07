"""Configuration module for the time manager.

Available Configurations:
- TimeManagerConfig: offset file, logging environment, clock monitor tuning
"""

from time_manager.config.time_manager_config import (
    DEFAULT_TIME_MANAGER_CONFIG,
    TEST_TIME_MANAGER_CONFIG,
    TimeManagerConfig,
)

__all__ = [
    "TimeManagerConfig",
    "DEFAULT_TIME_MANAGER_CONFIG",
    "TEST_TIME_MANAGER_CONFIG",
]
