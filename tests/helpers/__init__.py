"""Test helpers for time manager tests.

Helpers:
    FakeSystemClock: Controllable wall/monotonic clocks for deterministic tests

Usage:
    from tests.helpers import FakeSystemClock
"""

from tests.helpers.fake_system_clock import DEFAULT_REALTIME_US, FakeSystemClock

__all__ = ["DEFAULT_REALTIME_US", "FakeSystemClock"]
