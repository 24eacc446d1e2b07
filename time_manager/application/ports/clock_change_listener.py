"""Controller time change listener port.

The controller clock notifies exactly one listener whenever its
absolute time changes, whatever the cause: its own write, the sync
agent, or any other actor.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ControllerTimeChangeListener(ABC):
    """Receives controller clock change notifications."""

    @abstractmethod
    def on_controller_time_changed(self, new_time_us: int) -> None:
        """Handle a controller clock change.

        Args:
            new_time_us: The controller clock reading after the change,
                in microseconds since the Unix epoch.
        """
        ...
