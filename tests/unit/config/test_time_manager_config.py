"""Unit tests for TimeManagerConfig."""

from __future__ import annotations

from pathlib import Path

import pytest

from time_manager.config.time_manager_config import (
    DEFAULT_TIME_MANAGER_CONFIG,
    TEST_TIME_MANAGER_CONFIG,
    TimeManagerConfig,
)

ENV_KEYS = (
    "TIME_MANAGER_HOST_OFFSET_FILE",
    "ENVIRONMENT",
    "TIME_MANAGER_CLOCK_POLL_INTERVAL",
    "TIME_MANAGER_CLOCK_JUMP_THRESHOLD_US",
    "TIME_MANAGER_SET_TIME_TIMEOUT",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestDefaults:
    def test_default_values(self) -> None:
        config = TimeManagerConfig()

        assert config.host_offset_file == Path("/var/lib/time-manager/host_offset")
        assert config.environment == "production"
        assert config.clock_poll_interval_seconds == 1.0
        assert config.clock_jump_threshold_us == 500_000
        assert config.set_time_timeout_seconds is None

    def test_module_configs(self) -> None:
        assert DEFAULT_TIME_MANAGER_CONFIG == TimeManagerConfig()
        assert TEST_TIME_MANAGER_CONFIG.environment == "development"
        assert TEST_TIME_MANAGER_CONFIG.clock_poll_interval_seconds < 1.0

    def test_is_frozen(self) -> None:
        config = TimeManagerConfig()

        with pytest.raises(AttributeError):
            config.environment = "development"  # type: ignore[misc]


class TestValidation:
    @pytest.mark.parametrize("interval", [0, -1.0])
    def test_poll_interval_must_be_positive(self, interval: float) -> None:
        with pytest.raises(ValueError, match="clock_poll_interval_seconds"):
            TimeManagerConfig(clock_poll_interval_seconds=interval)

    def test_threshold_must_be_non_negative(self) -> None:
        with pytest.raises(ValueError, match="clock_jump_threshold_us"):
            TimeManagerConfig(clock_jump_threshold_us=-1)

    def test_zero_threshold_is_allowed(self) -> None:
        assert TimeManagerConfig(clock_jump_threshold_us=0).clock_jump_threshold_us == 0

    def test_timeout_must_be_positive_when_set(self) -> None:
        with pytest.raises(ValueError, match="set_time_timeout_seconds"):
            TimeManagerConfig(set_time_timeout_seconds=0)


class TestFromEnvironment:
    def test_defaults_without_env(self, clean_env: pytest.MonkeyPatch) -> None:
        assert TimeManagerConfig.from_environment() == TimeManagerConfig()

    def test_reads_env_vars(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("TIME_MANAGER_HOST_OFFSET_FILE", "/tmp/offset")
        clean_env.setenv("ENVIRONMENT", "development")
        clean_env.setenv("TIME_MANAGER_CLOCK_POLL_INTERVAL", "0.5")
        clean_env.setenv("TIME_MANAGER_CLOCK_JUMP_THRESHOLD_US", "250000")
        clean_env.setenv("TIME_MANAGER_SET_TIME_TIMEOUT", "3")

        config = TimeManagerConfig.from_environment()

        assert config.host_offset_file == Path("/tmp/offset")
        assert config.environment == "development"
        assert config.clock_poll_interval_seconds == 0.5
        assert config.clock_jump_threshold_us == 250_000
        assert config.set_time_timeout_seconds == 3.0

    def test_invalid_numbers_fall_back_to_defaults(
        self, clean_env: pytest.MonkeyPatch
    ) -> None:
        clean_env.setenv("TIME_MANAGER_CLOCK_POLL_INTERVAL", "fast")
        clean_env.setenv("TIME_MANAGER_CLOCK_JUMP_THRESHOLD_US", "big")
        clean_env.setenv("TIME_MANAGER_SET_TIME_TIMEOUT", "never")

        config = TimeManagerConfig.from_environment()

        assert config.clock_poll_interval_seconds == 1.0
        assert config.clock_jump_threshold_us == 500_000
        assert config.set_time_timeout_seconds is None
