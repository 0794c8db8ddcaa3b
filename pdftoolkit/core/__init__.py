"""Core building blocks shared by the split, merge and compress packages."""

from __future__ import annotations

from .document import OutputDocument, SourceDocument, count_pages, load_document, new_document
from .exceptions import (
    DocumentParseError,
    ExternalToolError,
    InputValidationError,
    PDFToolkitError,
    ResourceError,
)
from .utils import format_size, get_logger, resolve_path

__all__ = [
    "SourceDocument",
    "OutputDocument",
    "load_document",
    "new_document",
    "count_pages",
    "PDFToolkitError",
    "InputValidationError",
    "DocumentParseError",
    "ExternalToolError",
    "ResourceError",
    "format_size",
    "get_logger",
    "resolve_path",
]
