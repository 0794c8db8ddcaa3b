"""Splitting and extraction utilities for :mod:`pdftoolkit`."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Tuple, Union

from ..core.document import SourceDocument, load_document, new_document
from .archive import assemble_archive
from .exceptions import EmptyPageRangeError, PageRangeBoundsError, SplitError
from .utils import PageRange, build_entry_name, flatten_ranges, parse_page_ranges

LOGGER = logging.getLogger("pdftoolkit.split")


@dataclass(frozen=True)
class SingleDocument:
    """A single output document produced by a range split."""

    data: bytes


@dataclass(frozen=True)
class PageCollection:
    """Named per-page documents produced by a full extraction."""

    entries: List[Tuple[str, bytes]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)


ExtractionResult = Union[SingleDocument, PageCollection]


def _check_bounds(ranges: Sequence[PageRange], page_count: int) -> None:
    for page_range in ranges:
        if page_range.end > page_count:
            raise PageRangeBoundsError(page_range.label(), page_count)


def split_by_range(document: SourceDocument, ranges: Sequence[PageRange]) -> bytes:
    """Copy the pages selected by ``ranges`` into a new document.

    Pages appear in range order, then ascending within each range. Pages
    selected more than once are copied more than once.
    """

    if not ranges:
        raise EmptyPageRangeError()
    _check_bounds(ranges, document.page_count)

    output = new_document()
    try:
        for page_number in flatten_ranges(ranges):
            output.add_pages(document.copy_pages([page_number - 1]))
        data = output.save()
    except Exception as exc:
        LOGGER.error("Failed to split PDF: %s", exc)
        raise SplitError(f"Failed to split PDF: {exc}") from exc

    LOGGER.info(
        "Split %d range(s) into a %d page document",
        len(ranges),
        output.page_count,
    )
    return data


def extract_all_pages(document: SourceDocument) -> List[Tuple[int, bytes]]:
    """Return ``(page_number, bytes)`` for every page as its own document."""

    pages: List[Tuple[int, bytes]] = []
    try:
        for index in range(document.page_count):
            output = new_document()
            output.add_pages(document.copy_pages([index]))
            pages.append((index + 1, output.save()))
    except Exception as exc:
        LOGGER.error("Failed to extract page %d: %s", len(pages) + 1, exc)
        raise SplitError(f"Failed to extract page {len(pages) + 1}: {exc}") from exc

    LOGGER.info("Extracted %d pages", len(pages))
    return pages


def extract_page_entries(document: SourceDocument) -> List[Tuple[str, bytes]]:
    """Like :func:`extract_all_pages`, with entries named ``page-<N>.pdf``."""

    return [(build_entry_name(number), data) for number, data in extract_all_pages(document)]


def split_document(
    data: bytes,
    *,
    ranges: str | None = None,
    extract_all: bool = False,
) -> ExtractionResult:
    """Split the PDF in ``data`` either by ``ranges`` or into single pages."""

    if extract_all:
        with load_document(data) as document:
            return PageCollection(extract_page_entries(document))
    return SingleDocument(split_pdf_bytes(data, ranges))


def split_pdf_bytes(data: bytes, ranges: str | None) -> bytes:
    """Return a PDF containing the pages of ``data`` selected by ``ranges``.

    Empty specifications are rejected before the document is loaded.
    """

    if ranges is None or not ranges.strip():
        raise EmptyPageRangeError()

    with load_document(data) as document:
        page_ranges = parse_page_ranges(ranges, total_pages=document.page_count)
        LOGGER.info("Splitting PDF by range: %s", ranges)
        return split_by_range(document, page_ranges)


def extract_pages_archive(data: bytes, *, staging_dir: str | Path | None = None) -> bytes:
    """Return a zip archive holding one PDF per page of ``data``."""

    with load_document(data) as document:
        entries = extract_page_entries(document)
    return assemble_archive(entries, staging_dir=staging_dir)


__all__ = [
    "SingleDocument",
    "PageCollection",
    "ExtractionResult",
    "split_by_range",
    "extract_all_pages",
    "extract_page_entries",
    "split_document",
    "split_pdf_bytes",
    "extract_pages_archive",
]
