"""In-memory offset store stub for testing and dry runs."""

from __future__ import annotations

from time_manager.application.ports.offset_store import OffsetStoreProtocol


class OffsetStoreStub(OffsetStoreProtocol):
    """Keeps the offset in memory and records every save.

    Attributes:
        saved: Every value successfully passed to save(), in order.
    """

    def __init__(self, initial_offset_us: int = 0) -> None:
        self._offset_us = initial_offset_us
        self._failure: OSError | None = None
        self.saved: list[int] = []

    def load(self) -> int:
        return self._offset_us

    def save(self, offset_us: int) -> None:
        """Store the offset, or raise if a failure was injected."""
        if self._failure is not None:
            raise self._failure
        self._offset_us = offset_us
        self.saved.append(offset_us)

    def fail_with(self, error: OSError) -> None:
        """Make every following save raise error."""
        self._failure = error

    def clear_failure(self) -> None:
        """Stop failing saves."""
        self._failure = None

    @property
    def save_count(self) -> int:
        """Number of successful save() calls."""
        return len(self.saved)
