from __future__ import annotations

import io
from pathlib import Path
from typing import Callable
import sys

import pytest
from pypdf import PdfReader, PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

BASE_WIDTH = 100


def build_pdf(pages: int, *, base_width: int = BASE_WIDTH, title: str | None = None) -> bytes:
    """Return a PDF whose page ``n`` (1-indexed) is ``base_width + n`` points wide."""

    writer = PdfWriter()
    for number in range(1, pages + 1):
        writer.add_blank_page(width=base_width + number, height=200)
    if title is not None:
        writer.add_metadata({"/Title": title})
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def page_widths(data: bytes) -> list[int]:
    reader = PdfReader(io.BytesIO(data))
    return [int(float(page.mediabox.width)) for page in reader.pages]


def page_numbers(data: bytes, *, base_width: int = BASE_WIDTH) -> list[int]:
    """Recover the source page numbers of the pages in ``data``."""

    return [width - base_width for width in page_widths(data)]


@pytest.fixture()
def pdf_factory() -> Callable[..., bytes]:
    return build_pdf


@pytest.fixture()
def sample_pdf() -> bytes:
    return build_pdf(5, title="Sample")


@pytest.fixture()
def ten_page_pdf() -> bytes:
    return build_pdf(10)


@pytest.fixture()
def sample_pdf_path(tmp_path: Path, sample_pdf: bytes) -> Path:
    path = tmp_path / "sample.pdf"
    path.write_bytes(sample_pdf)
    return path
