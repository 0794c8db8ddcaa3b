"""Custom exceptions for the :mod:`pdftoolkit.merge` package."""

from __future__ import annotations

from ..core.exceptions import InputValidationError, PDFToolkitError


class MergeInputError(InputValidationError):
    """Raised when the set of documents to merge is invalid."""


class MergeError(PDFToolkitError):
    """Raised when the merged document cannot be produced."""


__all__ = ["MergeInputError", "MergeError"]
