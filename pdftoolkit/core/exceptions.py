"""Exception taxonomy shared by every :mod:`pdftoolkit` package."""

from __future__ import annotations


class PDFToolkitError(Exception):
    """Base exception for all errors raised by :mod:`pdftoolkit`."""


class InputValidationError(PDFToolkitError):
    """Raised when user supplied input is malformed or out of bounds."""


class DocumentParseError(PDFToolkitError):
    """Raised when uploaded bytes cannot be loaded as a PDF document."""


class ExternalToolError(PDFToolkitError):
    """Raised when an external tool exits abnormally, fails to launch or times out."""


class ResourceError(PDFToolkitError):
    """Raised when a temporary file cannot be written, read or deleted."""


__all__ = [
    "PDFToolkitError",
    "InputValidationError",
    "DocumentParseError",
    "ExternalToolError",
    "ResourceError",
]
