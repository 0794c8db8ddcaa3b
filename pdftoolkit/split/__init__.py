"""Split utilities for the :mod:`pdftoolkit` toolkit."""

from __future__ import annotations

from .archive import assemble_archive, read_archive
from .exceptions import (
    ArchiveError,
    EmptyPageRangeError,
    InvalidPageRangeError,
    MalformedPageTokenError,
    PageRangeBoundsError,
    PageTokenShapeError,
    SplitError,
)
from .splitter import (
    ExtractionResult,
    PageCollection,
    SingleDocument,
    extract_all_pages,
    extract_page_entries,
    extract_pages_archive,
    split_by_range,
    split_document,
    split_pdf_bytes,
)
from .utils import PageRange, build_entry_name, flatten_ranges, parse_page_ranges

__all__ = [
    "PageRange",
    "parse_page_ranges",
    "flatten_ranges",
    "build_entry_name",
    "split_by_range",
    "extract_all_pages",
    "extract_page_entries",
    "split_document",
    "split_pdf_bytes",
    "extract_pages_archive",
    "assemble_archive",
    "read_archive",
    "SingleDocument",
    "PageCollection",
    "ExtractionResult",
    "InvalidPageRangeError",
    "EmptyPageRangeError",
    "MalformedPageTokenError",
    "PageTokenShapeError",
    "PageRangeBoundsError",
    "SplitError",
    "ArchiveError",
]
