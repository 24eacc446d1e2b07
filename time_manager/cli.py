"""Command line interface for the time manager.

Commands:
    show            Print controller time, host time and host offset
    set-controller  Manually set the controller clock
    set-host        Manually set the host clock
    run             Watch for controller clock changes until interrupted

Mode and Owner are not persisted; pass them per invocation with
--mode/--owner (bus strings or short names, default manual/both).
"""

import asyncio
import dataclasses
import json
import signal
from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from time_manager import __version__
from time_manager.bootstrap.logging import configure_structlog
from time_manager.bootstrap.time_manager import TimeManager
from time_manager.config.time_manager_config import TimeManagerConfig
from time_manager.domain.errors.time_setting import (
    InvalidTimeSettingError,
    MethodCallFailedError,
    NotAllowedError,
)
from time_manager.domain.models.time_policy import (
    DEFAULT_MODE,
    DEFAULT_OWNER,
    mode_from_str,
    owner_from_str,
)
from time_manager.infrastructure.adapters.timedated_time_setter import (
    TimedatedTimeSetter,
)
from time_manager.infrastructure.observability import request_scope


class OutputFormat(str, Enum):
    """Output format options."""

    text = "text"
    json = "json"


app = typer.Typer(
    name="time-manager",
    help="Controller and host clock ownership manager",
    add_completion=False,
)
console = Console()

MODE_OPTION = typer.Option(
    DEFAULT_MODE.value, "--mode", "-m", help="Synchronization mode: manual or automatic"
)
OWNER_OPTION = typer.Option(
    DEFAULT_OWNER.value,
    "--owner",
    "-O",
    help="Time owner: controller, host, both or split",
)
OFFSET_FILE_OPTION = typer.Option(
    None,
    "--offset-file",
    help="Host offset file (default: TIME_MANAGER_HOST_OFFSET_FILE)",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"time-manager version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Time Manager.

    Applies the Mode/Owner policy to manual sets of the controller and
    host clocks.
    """
    pass


def _build_manager(mode: str, owner: str, offset_file: Optional[Path]) -> TimeManager:
    config = TimeManagerConfig.from_environment()
    if offset_file is not None:
        config = dataclasses.replace(config, host_offset_file=offset_file)
    configure_structlog(config.environment)

    try:
        parsed_mode = mode_from_str(mode)
        parsed_owner = owner_from_str(owner)
    except InvalidTimeSettingError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold")
        raise typer.Exit(code=2)

    return TimeManager.build(
        config,
        mode=parsed_mode,
        owner=parsed_owner,
        time_setter=TimedatedTimeSetter(timeout_seconds=config.set_time_timeout_seconds),
    )


def _format_us(value_us: int) -> str:
    return datetime.fromtimestamp(value_us / 1_000_000, tz=timezone.utc).isoformat()


@app.command()
def show(
    mode: str = MODE_OPTION,
    owner: str = OWNER_OPTION,
    offset_file: Optional[Path] = OFFSET_FILE_OPTION,
    output_format: OutputFormat = typer.Option(
        OutputFormat.text,
        "--format",
        "-o",
        help="Output format: text or json",
    ),
) -> None:
    """Print controller time, host time and the stored host offset.

    Example:
        time-manager show --owner split
    """
    manager = _build_manager(mode, owner, offset_file)
    controller_us = manager.controller_clock.read()
    host_us = manager.host_clock.read()
    offset_us = manager.host_clock.offset

    if output_format is OutputFormat.json:
        payload = {
            "mode": manager.host_clock.mode.value,
            "owner": manager.host_clock.owner.value,
            "controller_time_us": controller_us,
            "host_time_us": host_us,
            "host_offset_us": offset_us,
        }
        console.print(json.dumps(payload, indent=2))
        return

    table = Table(title="Clocks")
    table.add_column("Clock")
    table.add_column("Microseconds", justify="right")
    table.add_column("UTC")
    table.add_row("controller", str(controller_us), _format_us(controller_us))
    table.add_row("host", str(host_us), _format_us(host_us))
    console.print(table)
    console.print(
        f"mode={manager.host_clock.mode.value} "
        f"owner={manager.host_clock.owner.value} offset_us={offset_us}"
    )


def _apply_write(clock_name: str, write: Callable[[int], None], target_us: int) -> None:
    try:
        with request_scope():
            write(target_us)
    except NotAllowedError as e:
        console.print(f"[red]Not allowed:[/red] {e}", style="bold")
        raise typer.Exit(code=1)
    except MethodCallFailedError as e:
        console.print(f"[red]Set time failed:[/red] {e}", style="bold")
        raise typer.Exit(code=1)
    console.print(f"[green]{clock_name} time set to {_format_us(target_us)}[/green]")


@app.command()
def set_controller(
    target_us: int = typer.Argument(..., help="Target time, microseconds since epoch"),
    mode: str = MODE_OPTION,
    owner: str = OWNER_OPTION,
    offset_file: Optional[Path] = OFFSET_FILE_OPTION,
) -> None:
    """Manually set the controller clock.

    Example:
        time-manager set-controller 1767225600000000 --owner controller
    """
    manager = _build_manager(mode, owner, offset_file)
    _apply_write("controller", manager.controller_clock.write, target_us)


@app.command()
def set_host(
    target_us: int = typer.Argument(..., help="Target time, microseconds since epoch"),
    mode: str = MODE_OPTION,
    owner: str = OWNER_OPTION,
    offset_file: Optional[Path] = OFFSET_FILE_OPTION,
) -> None:
    """Manually set the host clock.

    With --owner split this only updates the stored host offset.

    Example:
        time-manager set-host 1767225600000000 --owner split
    """
    manager = _build_manager(mode, owner, offset_file)
    _apply_write("host", manager.host_clock.write, target_us)


@app.command()
def run(
    mode: str = MODE_OPTION,
    owner: str = OWNER_OPTION,
    offset_file: Optional[Path] = OFFSET_FILE_OPTION,
) -> None:
    """Watch for controller clock changes and keep host time continuous.

    Runs until SIGINT or SIGTERM.
    """
    manager = _build_manager(mode, owner, offset_file)
    asyncio.run(_run_until_signalled(manager))


async def _run_until_signalled(manager: TimeManager) -> None:
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop_event.set)
    await manager.run(stop_event)


if __name__ == "__main__":
    app()
