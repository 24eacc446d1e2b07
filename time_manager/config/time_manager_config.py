"""Time manager configuration.

Defines runtime configuration for the time manager with environment
variable overrides.

Environment Variables:
- TIME_MANAGER_HOST_OFFSET_FILE: Host offset file (default: /var/lib/time-manager/host_offset)
- ENVIRONMENT: 'production' for JSON logs, else console (default: production)
- TIME_MANAGER_CLOCK_POLL_INTERVAL: Clock change poll interval seconds (default: 1.0)
- TIME_MANAGER_CLOCK_JUMP_THRESHOLD_US: Minimum jump reported as a change (default: 500000)
- TIME_MANAGER_SET_TIME_TIMEOUT: SetTime call timeout seconds (default: unset, no timeout)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_HOST_OFFSET_FILE = Path("/var/lib/time-manager/host_offset")
DEFAULT_ENVIRONMENT = "production"
DEFAULT_CLOCK_POLL_INTERVAL_SECONDS = 1.0
DEFAULT_CLOCK_JUMP_THRESHOLD_US = 500_000


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float | None) -> float | None:
    """Get float environment variable with default."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class TimeManagerConfig:
    """Configuration for the time manager.

    Attributes:
        host_offset_file: File persisting the host offset.
        environment: Logging environment ('production' renders JSON).
        clock_poll_interval_seconds: Delay between clock change samples.
        clock_jump_threshold_us: Wall clock move that counts as a change.
        set_time_timeout_seconds: Limit on the external SetTime call,
            None for no limit.
    """

    host_offset_file: Path = DEFAULT_HOST_OFFSET_FILE
    environment: str = DEFAULT_ENVIRONMENT
    clock_poll_interval_seconds: float = DEFAULT_CLOCK_POLL_INTERVAL_SECONDS
    clock_jump_threshold_us: int = DEFAULT_CLOCK_JUMP_THRESHOLD_US
    set_time_timeout_seconds: float | None = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.clock_poll_interval_seconds <= 0:
            raise ValueError(
                "clock_poll_interval_seconds must be positive, "
                f"got {self.clock_poll_interval_seconds}"
            )
        if self.clock_jump_threshold_us < 0:
            raise ValueError(
                "clock_jump_threshold_us must be non-negative, "
                f"got {self.clock_jump_threshold_us}"
            )
        if self.set_time_timeout_seconds is not None and self.set_time_timeout_seconds <= 0:
            raise ValueError(
                "set_time_timeout_seconds must be positive when set, "
                f"got {self.set_time_timeout_seconds}"
            )

    @classmethod
    def from_environment(cls) -> TimeManagerConfig:
        """Create config from environment variables with defaults.

        Returns:
            TimeManagerConfig with values from environment or defaults.
        """
        return cls(
            host_offset_file=Path(
                os.environ.get("TIME_MANAGER_HOST_OFFSET_FILE", str(DEFAULT_HOST_OFFSET_FILE))
            ),
            environment=os.environ.get("ENVIRONMENT", DEFAULT_ENVIRONMENT),
            clock_poll_interval_seconds=_get_float_env(
                "TIME_MANAGER_CLOCK_POLL_INTERVAL", DEFAULT_CLOCK_POLL_INTERVAL_SECONDS
            )
            or DEFAULT_CLOCK_POLL_INTERVAL_SECONDS,
            clock_jump_threshold_us=_get_int_env(
                "TIME_MANAGER_CLOCK_JUMP_THRESHOLD_US", DEFAULT_CLOCK_JUMP_THRESHOLD_US
            ),
            set_time_timeout_seconds=_get_float_env("TIME_MANAGER_SET_TIME_TIMEOUT", None),
        )


# Default production config
DEFAULT_TIME_MANAGER_CONFIG = TimeManagerConfig()

# Testing config: offset file under the working directory, fast polling
TEST_TIME_MANAGER_CONFIG = TimeManagerConfig(
    host_offset_file=Path("host_offset"),
    environment="development",
    clock_poll_interval_seconds=0.01,
    clock_jump_threshold_us=100_000,
)
