"""System Clock Protocol - interface for reading the local clocks.

Both the controller and host clocks read time through this port
instead of calling time.time() directly, so tests can drive wall clock
jumps deterministically.

Two readings are exposed:
1. **realtime**: wall clock, microseconds since the Unix epoch. Jumps
   when anyone sets the system time.
2. **monotonic**: steady clock, microseconds from an arbitrary origin.
   Never jumps; only differences are meaningful.
"""

from abc import ABC, abstractmethod


class SystemClockProtocol(ABC):
    """Abstract interface for the local system clocks.

    For production:
        Use SystemClock from time_manager/infrastructure/adapters/

    For testing:
        Use FakeSystemClock from tests/helpers/fake_system_clock.py
    """

    @abstractmethod
    def realtime_us(self) -> int:
        """Return the wall clock in microseconds since the Unix epoch."""
        ...

    @abstractmethod
    def monotonic_us(self) -> int:
        """Return the steady clock in microseconds.

        Note:
            Use this for tracking elapsed time across wall clock jumps.
            Values never decrease.
        """
        ...
