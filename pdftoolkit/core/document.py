"""Page-addressable PDF documents backed by :mod:`pypdf`."""

from __future__ import annotations

import io
import logging
from typing import Iterable, List

from pypdf import PageObject, PdfReader, PdfWriter

from .exceptions import DocumentParseError

LOGGER = logging.getLogger("pdftoolkit.core")


class SourceDocument:
    """A loaded PDF whose pages can be copied into other documents.

    Instances are owned by a single request and should be released with
    :meth:`close` (or by using the document as a context manager) once the
    operation has produced its output.
    """

    def __init__(self, reader: PdfReader, stream: io.BytesIO, size: int) -> None:
        self._reader: PdfReader | None = reader
        self._stream = stream
        self.size = size
        self.page_count = len(reader.pages)

    @classmethod
    def load(cls, data: bytes) -> "SourceDocument":
        """Load ``data`` as a PDF, raising :class:`DocumentParseError` on failure."""

        if not data:
            raise DocumentParseError("Cannot load an empty document")

        stream = io.BytesIO(data)
        try:
            reader = PdfReader(stream)
            if reader.is_encrypted:
                LOGGER.debug("Attempting to decrypt encrypted PDF with an empty password")
                reader.decrypt("")
            document = cls(reader, stream, len(data))
        except DocumentParseError:
            raise
        except Exception as exc:  # pypdf raises a wide range of errors on bad input
            stream.close()
            raise DocumentParseError(f"Failed to load PDF document: {exc}") from exc

        LOGGER.debug("Loaded PDF with %s pages (%s bytes)", document.page_count, document.size)
        return document

    @property
    def reader(self) -> PdfReader:
        if self._reader is None:
            raise ValueError("Document has been closed")
        return self._reader

    @property
    def metadata(self) -> dict[str, str]:
        raw = self.reader.metadata or {}
        return {key: str(value) for key, value in raw.items() if value is not None}

    def copy_pages(self, indices: Iterable[int]) -> List[PageObject]:
        """Return page handles for the 0-indexed ``indices``."""

        pages: List[PageObject] = []
        for index in indices:
            if index < 0 or index >= self.page_count:
                raise IndexError(f"Page index {index} is outside 0..{self.page_count - 1}")
            pages.append(self.reader.pages[index])
        return pages

    def close(self) -> None:
        self._reader = None
        self._stream.close()

    def __enter__(self) -> "SourceDocument":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class OutputDocument:
    """A new, initially empty document that pages are appended to."""

    def __init__(self) -> None:
        self._writer = PdfWriter()

    @property
    def page_count(self) -> int:
        return len(self._writer.pages)

    def add_page(self, page: PageObject) -> None:
        self._writer.add_page(page)

    def add_pages(self, pages: Iterable[PageObject]) -> None:
        for page in pages:
            self.add_page(page)

    def add_metadata(self, metadata: dict[str, str]) -> None:
        if metadata:
            self._writer.add_metadata(metadata)

    def save(self) -> bytes:
        buffer = io.BytesIO()
        self._writer.write(buffer)
        return buffer.getvalue()


def load_document(data: bytes) -> SourceDocument:
    """Convenience wrapper around :meth:`SourceDocument.load`."""

    return SourceDocument.load(data)


def new_document() -> OutputDocument:
    return OutputDocument()


def count_pages(data: bytes) -> int:
    """Return the page count of the PDF in ``data``."""

    with load_document(data) as document:
        return document.page_count


__all__ = [
    "SourceDocument",
    "OutputDocument",
    "load_document",
    "new_document",
    "count_pages",
]
