"""Temporary blob storage for uploads and generated outputs."""

from __future__ import annotations

import asyncio
import secrets
import shutil
import time
from pathlib import Path
from typing import Iterable

from pdftoolkit.core.exceptions import ResourceError
from pdftoolkit.core.utils import get_logger

LOGGER = get_logger("pdftoolkit.storage")

ALLOWED_SUFFIXES = frozenset({".pdf", ".zip"})


class TempFileStore:
    """Stores request blobs under random names inside ``directory``.

    Names carry 128 bits of randomness so concurrent requests never collide.
    """

    def __init__(self, directory: str | Path, *, expiry_seconds: float = 3600.0) -> None:
        self.directory = Path(directory)
        self.expiry_seconds = expiry_seconds

    def ensure_directory(self) -> Path:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ResourceError(f"Unable to create temporary directory {self.directory}: {exc}") from exc
        return self.directory

    def _new_path(self, original_name: str | None) -> Path:
        suffix = Path(original_name or "").suffix.lower()
        if suffix not in ALLOWED_SUFFIXES:
            suffix = ""
        return self.directory / f"{secrets.token_hex(16)}{suffix}"

    def save(self, data: bytes, original_name: str | None = None) -> Path:
        """Write ``data`` to a new uniquely named file and return its path."""

        self.ensure_directory()
        path = self._new_path(original_name)
        try:
            path.write_bytes(data)
        except OSError as exc:
            LOGGER.error("Failed to save %s: %s", original_name, exc)
            raise ResourceError(f"Unable to save temporary file: {exc}") from exc
        LOGGER.debug("Saved %s as %s", original_name, path.name)
        return path

    def read_bytes(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ResourceError(f"Unable to read temporary file {path.name}: {exc}") from exc

    def delete(self, path: Path) -> None:
        """Delete ``path`` if it exists, raising :class:`ResourceError` on failure."""

        try:
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink(missing_ok=True)
        except OSError as exc:
            LOGGER.error("Error deleting file %s: %s", path, exc)
            raise ResourceError(f"Unable to delete temporary file {path.name}: {exc}") from exc
        LOGGER.debug("Deleted file: %s", path)

    def discard(self, *paths: Path | None) -> None:
        """Best-effort deletion used once a response has been sent."""

        for path in paths:
            if path is None:
                continue
            try:
                self.delete(path)
            except ResourceError as exc:
                LOGGER.warning("Ignoring cleanup failure: %s", exc)

    def _iter_entries(self) -> Iterable[Path]:
        if not self.directory.exists():
            return []
        return list(self.directory.iterdir())

    def sweep_expired(self, now: float | None = None) -> int:
        """Remove entries whose modification time is older than the expiry."""

        current = time.time() if now is None else now
        removed = 0
        for entry in self._iter_entries():
            try:
                age = current - entry.stat().st_mtime
            except FileNotFoundError:
                continue
            if age <= self.expiry_seconds:
                continue
            try:
                self.delete(entry)
            except ResourceError as exc:
                LOGGER.warning("Could not remove expired entry: %s", exc)
                continue
            removed += 1
        LOGGER.info("Cleanup completed, removed %d expired entries", removed)
        return removed


class TempFileSweeper:
    """Background task that periodically sweeps a :class:`TempFileStore`."""

    def __init__(self, store: TempFileStore, *, interval_seconds: float = 3600.0) -> None:
        self.store = store
        self.interval_seconds = interval_seconds
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run(self) -> None:
        while True:
            try:
                await asyncio.to_thread(self.store.sweep_expired)
            except Exception as exc:  # keep sweeping after unexpected filesystem errors
                LOGGER.error("Error during cleanup of expired files: %s", exc)
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        if self.running:
            return
        LOGGER.info("Starting temporary file sweeper (every %ss)", self.interval_seconds)
        self._task = asyncio.create_task(self._run(), name="temp-file-sweeper")

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        LOGGER.info("Temporary file sweeper stopped")


__all__ = ["ALLOWED_SUFFIXES", "TempFileStore", "TempFileSweeper"]
