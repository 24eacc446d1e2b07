"""File-backed offset store for the host clock.

The offset is stored as a single decimal integer (microseconds) in one
file. Writes go to a temp file in the same directory, are fsynced, then
replace the target, so a crash leaves either the old or the new value.

Reads never fail: a missing, empty, unreadable or unparsable file is
treated as "no prior offset" and yields 0.
"""

from __future__ import annotations

import os
from pathlib import Path

import structlog

from time_manager.application.ports.offset_store import OffsetStoreProtocol

log = structlog.get_logger()


class FileOffsetStore(OffsetStoreProtocol):
    """Persist the host offset in a flat file.

    Example:
        >>> store = FileOffsetStore(Path("/var/lib/time-manager/host_offset"))
        >>> store.save(1_234_567)
        >>> store.load()
        1234567
    """

    def __init__(self, path: Path | str) -> None:
        """Initialize the store.

        Args:
            path: File holding the offset. Parent directories are
                created on first save.
        """
        self._path = Path(path)
        self._log = log.bind(service="file_offset_store", path=str(self._path))

    @property
    def path(self) -> Path:
        """The file backing this store."""
        return self._path

    def load(self) -> int:
        """Load the offset, degrading to 0 on any read problem."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return 0
        except OSError as e:
            self._log.warning("offset_load_failed", error=str(e))
            return 0

        raw = raw.strip()
        if not raw:
            return 0
        try:
            return int(raw)
        except ValueError:
            self._log.warning("offset_load_failed", error="not an integer", raw=raw[:64])
            return 0

    def save(self, offset_us: int) -> None:
        """Atomically replace the stored offset.

        Raises:
            OSError: If the file cannot be written.
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self._path.with_name(f".tmp-{self._path.name}")
        try:
            with temp_path.open("w", encoding="utf-8") as handle:
                handle.write(f"{int(offset_us)}\n")
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_path, self._path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            self._log.error("offset_save_failed", offset_us=offset_us, error=str(e))
            raise
        _fsync_dir(self._path.parent)


def _fsync_dir(path: Path) -> None:
    if os.name == "nt":
        return
    fd = os.open(str(path), os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)
