"""Custom exception types for the :mod:`pdftoolkit.compress` package."""

from __future__ import annotations

from ..core.exceptions import InputValidationError, PDFToolkitError


class InvalidCompressionLevelError(InputValidationError):
    """Raised when an unknown compression level is requested."""


class CompressionError(PDFToolkitError):
    """Raised when in-process compression fails."""


__all__ = ["InvalidCompressionLevelError", "CompressionError"]
