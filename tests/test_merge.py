from __future__ import annotations

import io
from typing import Callable

import pytest
from pypdf import PdfReader

from conftest import page_widths
from pdftoolkit import DocumentParseError, InputValidationError
from pdftoolkit.merge import MergeInputError, merge_pdf_bytes


def test_merge_concatenates_documents_in_order(pdf_factory: Callable[..., bytes]) -> None:
    first = pdf_factory(2, base_width=100)
    second = pdf_factory(3, base_width=300)

    merged = merge_pdf_bytes([first, second])

    assert page_widths(merged) == [101, 102, 301, 302, 303]


def test_merge_order_follows_input_order(pdf_factory: Callable[..., bytes]) -> None:
    first = pdf_factory(1, base_width=100)
    second = pdf_factory(1, base_width=300)

    assert page_widths(merge_pdf_bytes([second, first])) == [301, 101]


def test_merge_copies_metadata_of_first_document(pdf_factory: Callable[..., bytes]) -> None:
    merged = merge_pdf_bytes([pdf_factory(1, title="First"), pdf_factory(1, title="Second")])

    reader = PdfReader(io.BytesIO(merged))
    assert reader.metadata.get("/Title") == "First"


def test_merge_without_metadata(pdf_factory: Callable[..., bytes]) -> None:
    merged = merge_pdf_bytes([pdf_factory(1, title="One"), pdf_factory(1)], metadata=False)

    reader = PdfReader(io.BytesIO(merged))
    assert reader.metadata is None or reader.metadata.get("/Title") is None


@pytest.mark.parametrize("count", [0, 1])
def test_merge_requires_two_documents(count: int, pdf_factory: Callable[..., bytes]) -> None:
    documents = [pdf_factory(1) for _ in range(count)]
    with pytest.raises(MergeInputError) as excinfo:
        merge_pdf_bytes(documents)
    assert str(excinfo.value) == "At least two PDF files are required for merging"
    assert isinstance(excinfo.value, InputValidationError)


def test_merge_enforces_maximum(pdf_factory: Callable[..., bytes]) -> None:
    documents = [pdf_factory(1) for _ in range(3)]
    with pytest.raises(MergeInputError):
        merge_pdf_bytes(documents, max_inputs=2)


def test_merge_propagates_parse_errors(pdf_factory: Callable[..., bytes]) -> None:
    with pytest.raises(DocumentParseError):
        merge_pdf_bytes([pdf_factory(1), b"garbage"])
