"""Compression policy and strategies for :mod:`pdftoolkit`."""

from __future__ import annotations

import dataclasses
import enum
import io
import logging
from typing import Callable, Optional, Protocol

from pypdf import PdfWriter

from ..core.document import count_pages, load_document
from .exceptions import CompressionError, InvalidCompressionLevelError
from .optimizers import GhostscriptCompression, probe_ghostscript

_LOGGER = logging.getLogger("pdftoolkit.compress")

DEFAULT_TIMEOUT = 120.0


class CompressionLevel(str, enum.Enum):
    """Compression tiers offered to clients."""

    BASIC = "basic"
    STRONG = "strong"

    @classmethod
    def parse(cls, value: str | CompressionLevel) -> CompressionLevel:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            valid = ", ".join(level.value for level in cls)
            raise InvalidCompressionLevelError(
                f"Invalid compression level. Valid values are: {valid}"
            ) from exc


class CompressionStrategy(Protocol):
    name: str

    def compress(self, data: bytes) -> bytes:
        """Return a recompressed copy of the PDF in *data*."""


class BasicCompression:
    """Structural recompression with :mod:`pypdf`.

    Content streams are deflated at the highest level, identical objects are
    collapsed and orphans dropped. Embedded images are left untouched.
    """

    name = "basic"

    def compress(self, data: bytes) -> bytes:
        buffer = io.BytesIO()
        with load_document(data) as document:
            try:
                writer = PdfWriter(clone_from=document.reader)
                for page in writer.pages:
                    page.compress_content_streams(level=9)
                writer.compress_identical_objects(remove_identicals=True, remove_orphans=True)
                writer.write(buffer)
            except Exception as exc:
                raise CompressionError(f"Compression failed: {exc}") from exc
        return buffer.getvalue()


GhostscriptProbe = Callable[[], Optional[str]]


def select_strategy(
    level: str | CompressionLevel,
    *,
    timeout: float | None = DEFAULT_TIMEOUT,
    probe: GhostscriptProbe | None = None,
) -> CompressionStrategy:
    """Map *level* to the strategy that will perform the compression.

    ``STRONG`` uses Ghostscript when *probe* reports it available and
    otherwise falls back to :class:`BasicCompression`. Failures of the
    external tool once started are not handled here.
    """

    resolved = CompressionLevel.parse(level)
    if resolved is CompressionLevel.BASIC:
        return BasicCompression()

    executable = (probe or probe_ghostscript)()
    if executable is None:
        _LOGGER.info("Ghostscript not available, falling back to basic compression")
        return BasicCompression()
    return GhostscriptCompression(executable=executable, timeout=timeout)


@dataclasses.dataclass(slots=True)
class CompressionResult:
    """Represents the outcome of a compression run."""

    data: bytes
    level: CompressionLevel
    strategy: str
    original_size: int

    @property
    def compressed_size(self) -> int:
        return len(self.data)

    @property
    def bytes_saved(self) -> int:
        return max(self.original_size - self.compressed_size, 0)

    @property
    def compression_ratio(self) -> float:
        if self.original_size == 0:
            return 1.0
        return self.compressed_size / self.original_size


def compress_pdf_bytes(
    data: bytes,
    level: str | CompressionLevel = CompressionLevel.BASIC,
    *,
    timeout: float | None = DEFAULT_TIMEOUT,
    probe: GhostscriptProbe | None = None,
) -> CompressionResult:
    """Compress the PDF in *data* with the strategy selected for *level*."""

    resolved = CompressionLevel.parse(level)
    page_count = count_pages(data)
    _LOGGER.debug("Compressing a %s page document (%s bytes)", page_count, len(data))

    strategy = select_strategy(resolved, timeout=timeout, probe=probe)
    _LOGGER.info("Compressing PDF with level %s using %s", resolved.value, strategy.name)
    compressed = strategy.compress(data)

    result = CompressionResult(
        data=compressed,
        level=resolved,
        strategy=strategy.name,
        original_size=len(data),
    )
    _LOGGER.info(
        "Original size: %s bytes, Compressed size: %s bytes",
        result.original_size,
        result.compressed_size,
    )
    return result


__all__ = [
    "CompressionLevel",
    "CompressionStrategy",
    "BasicCompression",
    "CompressionResult",
    "DEFAULT_TIMEOUT",
    "compress_pdf_bytes",
    "select_strategy",
]
