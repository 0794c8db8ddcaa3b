"""Custom exceptions raised by :mod:`pdftoolkit.split`."""

from __future__ import annotations

from ..core.exceptions import InputValidationError, PDFToolkitError


class InvalidPageRangeError(InputValidationError):
    """Raised when a page range specification cannot be parsed or validated."""

    def __init__(self, message: str, token: str | None = None) -> None:
        self.token = token
        super().__init__(message)


class EmptyPageRangeError(InvalidPageRangeError):
    """Raised when the page range specification is empty."""

    def __init__(self) -> None:
        super().__init__("Page range cannot be empty")


class MalformedPageTokenError(InvalidPageRangeError):
    """Raised when a token contains something other than page numbers."""

    def __init__(self, token: str) -> None:
        kind = "page range" if "-" in token else "page number"
        super().__init__(f"Invalid {kind}: {token!r}", token)


class PageTokenShapeError(InvalidPageRangeError):
    """Raised when a token is neither ``N`` nor ``START-END``."""

    def __init__(self, token: str) -> None:
        super().__init__(
            f"Invalid page range: {token!r}. Expected a page number or a single 'start-end' pair.",
            token,
        )


class PageRangeBoundsError(InvalidPageRangeError):
    """Raised when a token refers to pages outside the document."""

    def __init__(self, token: str, total_pages: int) -> None:
        self.total_pages = total_pages
        if total_pages < 1:
            message = f"Invalid page range: {token!r}. The document has no pages."
        else:
            message = (
                f"Invalid page range: {token!r}. Pages must be between 1 and {total_pages}, "
                "and start must be less than or equal to end."
            )
        super().__init__(message, token)


class SplitError(PDFToolkitError):
    """Raised when copying or serialising pages fails."""


class ArchiveError(PDFToolkitError):
    """Raised when an archive entry cannot be written or finalised."""


__all__ = [
    "InvalidPageRangeError",
    "EmptyPageRangeError",
    "MalformedPageTokenError",
    "PageTokenShapeError",
    "PageRangeBoundsError",
    "SplitError",
    "ArchiveError",
]
