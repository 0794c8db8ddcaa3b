"""Zip archive assembly for extracted pages."""

from __future__ import annotations

import io
import logging
import tempfile
import zipfile
from pathlib import Path
from typing import Iterable, List, Tuple

from .exceptions import ArchiveError

LOGGER = logging.getLogger("pdftoolkit.split")

ARCHIVE_COMPRESSION = zipfile.ZIP_DEFLATED
ARCHIVE_COMPRESSLEVEL = 9


def _validate_names(entries: List[Tuple[str, bytes]]) -> None:
    seen: set[str] = set()
    for name, _ in entries:
        if not name or not name.strip():
            raise ArchiveError("Archive entry names must not be empty")
        if "/" in name or "\\" in name:
            raise ArchiveError(f"Archive entry name must not contain path separators: {name!r}")
        if name in seen:
            raise ArchiveError(f"Duplicate archive entry name: {name!r}")
        seen.add(name)


def assemble_archive(
    entries: Iterable[Tuple[str, bytes]],
    *,
    staging_dir: str | Path | None = None,
) -> bytes:
    """Write ``entries`` into a zip archive and return its bytes.

    Entries are staged on disk in a private temporary directory (created
    under ``staging_dir`` when given) and written with maximum deflate
    compression in the order supplied. The staging directory is removed
    whether or not the archive could be produced.

    Raises:
        ArchiveError: If an entry name is invalid or writing fails.
    """

    materialised = list(entries)
    _validate_names(materialised)

    if staging_dir is not None:
        Path(staging_dir).mkdir(parents=True, exist_ok=True)

    buffer = io.BytesIO()
    try:
        with tempfile.TemporaryDirectory(prefix="archive-", dir=staging_dir) as staging:
            staging_path = Path(staging)
            with zipfile.ZipFile(
                buffer,
                "w",
                compression=ARCHIVE_COMPRESSION,
                compresslevel=ARCHIVE_COMPRESSLEVEL,
            ) as archive:
                for position, (name, data) in enumerate(materialised, start=1):
                    staged = staging_path / f"entry-{position:05d}"
                    staged.write_bytes(data)
                    archive.write(staged, arcname=name)
    except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as exc:
        LOGGER.error("Failed to assemble archive: %s", exc)
        raise ArchiveError(f"Failed to assemble archive: {exc}") from exc

    LOGGER.info("Assembled archive with %d entries", len(materialised))
    return buffer.getvalue()


def read_archive(data: bytes) -> List[Tuple[str, bytes]]:
    """Return the ``(name, bytes)`` entries of the zip archive in ``data``."""

    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            return [(info.filename, archive.read(info)) for info in archive.infolist()]
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"Not a valid archive: {exc}") from exc


__all__ = ["assemble_archive", "read_archive", "ARCHIVE_COMPRESSION", "ARCHIVE_COMPRESSLEVEL"]
