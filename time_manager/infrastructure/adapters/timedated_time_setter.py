"""Time setter adapter for the systemd timedated service.

Issues org.freedesktop.timedate1.SetTime(x usec_utc, b relative,
b interactive) on the system bus through the busctl command line tool.
One call per set, no retry. Any failure (non-zero exit, busctl missing,
timeout) becomes a MethodCallFailedError carrying the call identity.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence

import structlog

from time_manager.application.ports.time_setter import TimeSetterProtocol
from time_manager.domain.errors.time_setting import MethodCallFailedError

log = structlog.get_logger()

TIMEDATE_SERVICE = "org.freedesktop.timedate1"
TIMEDATE_PATH = "/org/freedesktop/timedate1"
TIMEDATE_INTERFACE = "org.freedesktop.timedate1"
METHOD_SET_TIME = "SetTime"
SET_TIME_SIGNATURE = "xbb"

DEFAULT_BUSCTL_COMMAND: tuple[str, ...] = ("busctl", "--system")


def _bool_arg(value: bool) -> str:
    return "true" if value else "false"


class TimedatedTimeSetter(TimeSetterProtocol):
    """Set the system clock through timedated.

    Example:
        >>> setter = TimedatedTimeSetter()
        >>> setter.set_time(1_767_225_600_000_000)
    """

    def __init__(
        self,
        *,
        busctl_command: Sequence[str] = DEFAULT_BUSCTL_COMMAND,
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize the setter.

        Args:
            busctl_command: Command prefix used to reach the bus.
            timeout_seconds: Optional limit on the call. None waits for
                the service however long it takes.
        """
        self._busctl_command = tuple(busctl_command)
        self._timeout_seconds = timeout_seconds
        self._log = log.bind(service="timedated_time_setter")

    def build_command(
        self, target_us: int, *, relative: bool = False, interactive: bool = False
    ) -> list[str]:
        """Build the busctl argument list for a SetTime call."""
        return [
            *self._busctl_command,
            "call",
            TIMEDATE_SERVICE,
            TIMEDATE_PATH,
            TIMEDATE_INTERFACE,
            METHOD_SET_TIME,
            SET_TIME_SIGNATURE,
            str(int(target_us)),
            _bool_arg(relative),
            _bool_arg(interactive),
        ]

    def set_time(
        self,
        target_us: int,
        *,
        relative: bool = False,
        interactive: bool = False,
    ) -> None:
        """Call SetTime once.

        Raises:
            MethodCallFailedError: If the call fails for any reason.
        """
        command = self.build_command(
            target_us, relative=relative, interactive=interactive
        )
        try:
            subprocess.run(
                command,
                check=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self._timeout_seconds,
            )
        except subprocess.CalledProcessError as e:
            raise self._failure(
                (e.stderr or "").strip() or f"exit status {e.returncode}"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise self._failure(f"timed out after {e.timeout}s") from e
        except OSError as e:
            raise self._failure(str(e)) from e

        self._log.info("set_time_called", target_us=target_us, relative=relative)

    def _failure(self, misc: str) -> MethodCallFailedError:
        return MethodCallFailedError(
            METHOD_SET_TIME,
            service=TIMEDATE_SERVICE,
            path=TIMEDATE_PATH,
            interface=TIMEDATE_INTERFACE,
            misc=misc,
        )
