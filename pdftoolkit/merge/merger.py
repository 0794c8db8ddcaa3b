"""Merge functionality for the :mod:`pdftoolkit.merge` package."""

from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Optional, Sequence

from ..core.document import load_document, new_document
from .exceptions import MergeError, MergeInputError

LOGGER = logging.getLogger("pdftoolkit.merge")

MIN_MERGE_INPUTS = 2


def merge_pdf_bytes(
    documents: Sequence[bytes],
    *,
    max_inputs: int | None = None,
    metadata: bool = True,
) -> bytes:
    """Concatenate *documents* in order and return the merged PDF bytes.

    Args:
        documents: Raw PDF payloads. At least two are required.
        max_inputs: Optional upper bound on the number of documents.
        metadata: When ``True`` metadata from the first document that has
            any is copied into the merged document.

    Raises:
        MergeInputError: If too few or too many documents are supplied.
        DocumentParseError: If one of the documents cannot be loaded.
        MergeError: If the merged document cannot be written.
    """

    if len(documents) < MIN_MERGE_INPUTS:
        raise MergeInputError("At least two PDF files are required for merging")
    if max_inputs is not None and len(documents) > max_inputs:
        raise MergeInputError(f"At most {max_inputs} PDF files can be merged at once")

    output = new_document()
    first_metadata: Optional[dict[str, str]] = None

    # Sources stay open until the output is serialised.
    with ExitStack() as stack:
        for position, data in enumerate(documents, start=1):
            LOGGER.debug("Processing input PDF #%s", position)
            document = stack.enter_context(load_document(data))
            output.add_pages(document.copy_pages(range(document.page_count)))
            if metadata and first_metadata is None and document.metadata:
                first_metadata = document.metadata

        if first_metadata:
            LOGGER.debug("Setting metadata on merged PDF: %s", first_metadata)
            output.add_metadata(first_metadata)

        try:
            merged = output.save()
        except Exception as exc:
            LOGGER.error("Failed to write merged PDF: %s", exc)
            raise MergeError(f"Failed to write merged PDF: {exc}") from exc

    LOGGER.info("Merged %d PDFs into %d pages", len(documents), output.page_count)
    return merged


__all__ = ["MIN_MERGE_INPUTS", "merge_pdf_bytes"]
