"""
Pytest configuration and shared fixtures for time manager tests.

Testing Standards:
- Async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
- Clock-dependent tests use FakeSystemClock unless they check real wall time
"""

import pytest

from tests.helpers import FakeSystemClock
from time_manager.infrastructure.stubs import OffsetStoreStub, TimeSetterStub


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from time_manager import __version__

    return __version__


@pytest.fixture
def fake_clock() -> FakeSystemClock:
    """Controllable system clock starting at 2026-01-01T00:00:00Z."""
    return FakeSystemClock()


@pytest.fixture
def time_setter() -> TimeSetterStub:
    """Recording time setter."""
    return TimeSetterStub()


@pytest.fixture
def offset_store() -> OffsetStoreStub:
    """In-memory offset store starting at zero."""
    return OffsetStoreStub()


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Restore structlog defaults so cached loggers never outlive a test."""
    import structlog

    yield
    structlog.reset_defaults()
