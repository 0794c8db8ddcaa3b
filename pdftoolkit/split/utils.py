"""Utility helpers for the :mod:`pdftoolkit.split` package."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from .exceptions import (
    EmptyPageRangeError,
    MalformedPageTokenError,
    PageRangeBoundsError,
    PageTokenShapeError,
)

_PAGE_NUMBER = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class PageRange:
    """Represents an inclusive, 1-indexed page range."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 1 or self.end < 1:
            raise ValueError("Page numbers must be positive integers")
        if self.start > self.end:
            raise ValueError("Page range start must be less than or equal to end")

    def __len__(self) -> int:
        return self.end - self.start + 1

    def page_numbers(self) -> range:
        """Return the 1-indexed page numbers covered by the range."""

        return range(self.start, self.end + 1)

    def indices(self) -> range:
        """Return the 0-indexed page positions covered by the range."""

        return range(self.start - 1, self.end)

    def label(self) -> str:
        if self.start == self.end:
            return str(self.start)
        return f"{self.start}-{self.end}"


def _parse_page_number(value: str, token: str) -> int:
    candidate = value.strip()
    if not _PAGE_NUMBER.fullmatch(candidate):
        raise MalformedPageTokenError(token)
    return int(candidate, 10)


def _parse_token(token: str, total_pages: int) -> PageRange:
    if token.count("-") > 1:
        raise PageTokenShapeError(token)

    if "-" in token:
        start_str, end_str = token.split("-")
        start = _parse_page_number(start_str, token)
        end = _parse_page_number(end_str, token)
    else:
        start = end = _parse_page_number(token, token)

    if start < 1 or end > total_pages or start > end:
        raise PageRangeBoundsError(token, total_pages)
    return PageRange(start, end)


def parse_page_ranges(ranges: str | None, *, total_pages: int) -> List[PageRange]:
    """Parse ``ranges`` into a list of :class:`PageRange` instances.

    Args:
        ranges: Comma separated tokens, each either a page number (``"5"``) or
            an inclusive pair (``"7-10"``). Whitespace around tokens and
            around the hyphen is ignored.
        total_pages: Page count of the source document; every range must
            fall within ``[1, total_pages]``.

    Raises:
        EmptyPageRangeError: If ``ranges`` is empty or only whitespace.
        PageTokenShapeError: If a token contains more than one hyphen.
        MalformedPageTokenError: If a token side is not a base-10 integer.
        PageRangeBoundsError: If a range falls outside the document or is
            reversed.

    Returns:
        The ranges in the order they were supplied. Overlapping and repeated
        ranges are preserved.
    """

    if ranges is None or not ranges.strip():
        raise EmptyPageRangeError()

    parsed: List[PageRange] = []
    for raw_token in ranges.split(","):
        parsed.append(_parse_token(raw_token.strip(), total_pages))
    return parsed


def flatten_ranges(ranges: List[PageRange]) -> List[int]:
    """Expand ranges into the 1-indexed page numbers they select, in order."""

    pages: List[int] = []
    for page_range in ranges:
        pages.extend(page_range.page_numbers())
    return pages


def build_entry_name(page_number: int) -> str:
    """Return the archive entry name for an extracted page."""

    return f"page-{page_number}.pdf"


__all__ = [
    "PageRange",
    "parse_page_ranges",
    "flatten_ranges",
    "build_entry_name",
]
