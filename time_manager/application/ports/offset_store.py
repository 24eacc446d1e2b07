"""Offset Store port - durable storage for the host clock offset.

The host offset is the only value the time manager persists. It must
survive a process restart; Mode and Owner are restored by the property
layer instead.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class OffsetStoreProtocol(ABC):
    """Abstract interface for single-value offset persistence.

    The store is owned exclusively by the host clock. No other
    component reads or writes it.
    """

    @abstractmethod
    def load(self) -> int:
        """Load the persisted offset in microseconds.

        Returns:
            The stored offset, or 0 when nothing usable is stored.

        Note:
            Missing or corrupt storage is not an error; it degrades to 0
            so that startup is never blocked.
        """
        ...

    @abstractmethod
    def save(self, offset_us: int) -> None:
        """Persist the offset, replacing any previous value.

        Args:
            offset_us: Signed offset in microseconds.
        """
        ...
