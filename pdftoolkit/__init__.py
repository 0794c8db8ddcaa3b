"""PDF toolkit exposing split, merge and compression helpers."""

from __future__ import annotations

from . import compress, merge, split
from .compress import (
    CompressionError,
    CompressionLevel,
    CompressionResult,
    InvalidCompressionLevelError,
    compress_pdf_bytes,
    select_strategy,
)
from .core import (
    DocumentParseError,
    ExternalToolError,
    InputValidationError,
    PDFToolkitError,
    ResourceError,
    SourceDocument,
    count_pages,
    load_document,
)
from .merge import MergeError, MergeInputError, merge_pdf_bytes
from .split import (
    ArchiveError,
    ExtractionResult,
    InvalidPageRangeError,
    PageCollection,
    PageRange,
    SingleDocument,
    SplitError,
    assemble_archive,
    extract_all_pages,
    extract_pages_archive,
    parse_page_ranges,
    split_by_range,
    split_document,
    split_pdf_bytes,
)

__version__ = "0.1.0"

__all__ = [
    "compress",
    "merge",
    "split",
    "PageRange",
    "parse_page_ranges",
    "split_by_range",
    "extract_all_pages",
    "split_document",
    "split_pdf_bytes",
    "extract_pages_archive",
    "assemble_archive",
    "SingleDocument",
    "PageCollection",
    "ExtractionResult",
    "merge_pdf_bytes",
    "compress_pdf_bytes",
    "select_strategy",
    "CompressionLevel",
    "CompressionResult",
    "SourceDocument",
    "load_document",
    "count_pages",
    "PDFToolkitError",
    "InputValidationError",
    "DocumentParseError",
    "ExternalToolError",
    "ResourceError",
    "InvalidPageRangeError",
    "SplitError",
    "ArchiveError",
    "MergeError",
    "MergeInputError",
    "CompressionError",
    "InvalidCompressionLevelError",
]
