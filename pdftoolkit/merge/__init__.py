"""Merge utilities for the :mod:`pdftoolkit` toolkit."""

from __future__ import annotations

from .exceptions import MergeError, MergeInputError
from .merger import MIN_MERGE_INPUTS, merge_pdf_bytes

__all__ = [
    "merge_pdf_bytes",
    "MIN_MERGE_INPUTS",
    "MergeError",
    "MergeInputError",
]
