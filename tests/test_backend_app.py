from __future__ import annotations

import io
import subprocess
import zipfile
from dataclasses import replace
from pathlib import Path
from typing import Callable, Iterator

import pytest
from fastapi.testclient import TestClient

from apps.backend.app.main import app, get_store
from apps.backend.app.settings import Settings, get_settings
from apps.backend.app.storage import TempFileStore
from conftest import page_numbers, page_widths
from pdftoolkit.compress import compressor, optimizers

PDF = "application/pdf"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        temp_dir=tmp_path / "blobs",
        max_file_size=1024 * 1024,
        temp_file_expiry=3600.0,
        cleanup_interval=3600.0,
        max_merge_files=3,
        compress_timeout=5.0,
        log_level="INFO",
    )


@pytest.fixture()
def store(settings: Settings) -> TempFileStore:
    return TempFileStore(settings.temp_dir, expiry_seconds=settings.temp_file_expiry)


@pytest.fixture()
def client(settings: Settings, store: TempFileStore) -> Iterator[TestClient]:
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _leftovers(store: TempFileStore) -> list[Path]:
    if not store.directory.exists():
        return []
    return list(store.directory.iterdir())


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_merge_endpoint(client: TestClient, store: TempFileStore, pdf_factory: Callable[..., bytes]) -> None:
    files = [
        ("files", ("a.pdf", pdf_factory(2, base_width=100), PDF)),
        ("files", ("b.pdf", pdf_factory(1, base_width=300), PDF)),
    ]

    response = client.post("/api/v1/pdf/merge", files=files)

    assert response.status_code == 200
    assert response.headers["content-type"] == PDF
    assert 'attachment; filename="merged.pdf"' in response.headers["content-disposition"]
    assert page_widths(response.content) == [101, 102, 301]
    assert _leftovers(store) == []


def test_merge_requires_two_files(client: TestClient, pdf_factory: Callable[..., bytes]) -> None:
    response = client.post("/api/v1/pdf/merge", files=[("files", ("a.pdf", pdf_factory(1), PDF))])

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "message": "At least two PDF files are required for merging",
    }


def test_merge_without_files(client: TestClient) -> None:
    response = client.post("/api/v1/pdf/merge")
    assert response.status_code == 400
    assert response.json()["message"] == "At least two PDF files are required for merging"


def test_merge_respects_file_limit(client: TestClient, pdf_factory: Callable[..., bytes]) -> None:
    files = [("files", (f"{n}.pdf", pdf_factory(1), PDF)) for n in range(4)]

    response = client.post("/api/v1/pdf/merge", files=files)

    assert response.status_code == 400
    assert response.json()["message"] == "At most 3 PDF files can be merged at once"


def test_merge_of_unparseable_upload_is_server_error(
    client: TestClient, store: TempFileStore, pdf_factory: Callable[..., bytes]
) -> None:
    files = [
        ("files", ("a.pdf", pdf_factory(1), PDF)),
        ("files", ("b.pdf", b"this is not a pdf", PDF)),
    ]

    response = client.post("/api/v1/pdf/merge", files=files)

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Failed to merge PDF files"
    assert body["error"]
    assert _leftovers(store) == []


def test_rejects_non_pdf_mime_type(client: TestClient, sample_pdf: bytes) -> None:
    response = client.post(
        "/api/v1/pdf/split",
        files={"file": ("sample.pdf", sample_pdf, "text/plain")},
        data={"ranges": "1"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Only PDF files are allowed"


def test_rejects_pdf_mime_with_other_extension(client: TestClient, sample_pdf: bytes) -> None:
    response = client.post(
        "/api/v1/pdf/split",
        files={"file": ("sample.exe", sample_pdf, PDF)},
        data={"ranges": "1"},
    )

    assert response.status_code == 400


def test_rejects_oversized_upload(
    client: TestClient, settings: Settings, store: TempFileStore, sample_pdf: bytes
) -> None:
    small = replace(settings, max_file_size=64)
    app.dependency_overrides[get_settings] = lambda: small

    response = client.post(
        "/api/v1/pdf/split",
        files={"file": ("sample.pdf", sample_pdf, PDF)},
        data={"ranges": "1"},
    )

    assert response.status_code == 400
    assert "exceeds the maximum size" in response.json()["message"]
    assert _leftovers(store) == []


def test_rejects_empty_upload(client: TestClient) -> None:
    response = client.post(
        "/api/v1/pdf/compress",
        files={"file": ("empty.pdf", b"", PDF)},
    )

    assert response.status_code == 400
    assert "is empty" in response.json()["message"]


def test_split_by_ranges(client: TestClient, store: TempFileStore, ten_page_pdf: bytes) -> None:
    response = client.post(
        "/api/v1/pdf/split",
        files={"file": ("doc.pdf", ten_page_pdf, PDF)},
        data={"ranges": "1-3,5,7-10"},
    )

    assert response.status_code == 200
    assert 'filename="split.pdf"' in response.headers["content-disposition"]
    assert page_numbers(response.content) == [1, 2, 3, 5, 7, 8, 9, 10]
    assert _leftovers(store) == []


def test_split_extract_all(client: TestClient, store: TempFileStore, ten_page_pdf: bytes) -> None:
    response = client.post(
        "/api/v1/pdf/split",
        files={"file": ("doc.pdf", ten_page_pdf, PDF)},
        data={"extractAll": "true"},
    )

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/zip"
    assert 'filename="extracted-pages.zip"' in response.headers["content-disposition"]
    with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
        names = archive.namelist()
        assert names == [f"page-{n}.pdf" for n in range(1, 11)]
        assert page_numbers(archive.read("page-4.pdf")) == [4]
    assert _leftovers(store) == []


def test_split_requires_file(client: TestClient) -> None:
    response = client.post("/api/v1/pdf/split", data={"ranges": "1"})
    assert response.status_code == 400
    assert response.json()["message"] == "No PDF file provided"


def test_split_requires_ranges_without_extract_all(client: TestClient, sample_pdf: bytes) -> None:
    response = client.post("/api/v1/pdf/split", files={"file": ("doc.pdf", sample_pdf, PDF)})
    assert response.status_code == 400


@pytest.mark.parametrize("ranges, token", [("5-3", "5-3"), ("1,9", "9"), ("abc", "abc"), ("1-2-3", "1-2-3")])
def test_split_reports_offending_token(
    client: TestClient, store: TempFileStore, sample_pdf: bytes, ranges: str, token: str
) -> None:
    response = client.post(
        "/api/v1/pdf/split",
        files={"file": ("doc.pdf", sample_pdf, PDF)},
        data={"ranges": ranges},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert token in body["message"]
    assert _leftovers(store) == []


def test_split_rejects_invalid_extract_all_flag(client: TestClient, sample_pdf: bytes) -> None:
    response = client.post(
        "/api/v1/pdf/split",
        files={"file": ("doc.pdf", sample_pdf, PDF)},
        data={"extractAll": "sometimes"},
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_compress_basic(client: TestClient, store: TempFileStore, sample_pdf: bytes) -> None:
    response = client.post("/api/v1/pdf/compress", files={"file": ("doc.pdf", sample_pdf, PDF)})

    assert response.status_code == 200
    assert 'filename="compressed.pdf"' in response.headers["content-disposition"]
    assert page_numbers(response.content) == [1, 2, 3, 4, 5]
    assert _leftovers(store) == []


def test_compress_strong_falls_back_without_tool(
    client: TestClient, monkeypatch: pytest.MonkeyPatch, sample_pdf: bytes
) -> None:
    monkeypatch.setattr(compressor, "probe_ghostscript", lambda: None)

    response = client.post(
        "/api/v1/pdf/compress",
        files={"file": ("doc.pdf", sample_pdf, PDF)},
        data={"level": "strong"},
    )

    assert response.status_code == 200
    assert page_numbers(response.content) == [1, 2, 3, 4, 5]


def test_compress_strong_tool_failure_is_server_error(
    client: TestClient, store: TempFileStore, monkeypatch: pytest.MonkeyPatch, sample_pdf: bytes
) -> None:
    monkeypatch.setattr(compressor, "probe_ghostscript", lambda: "gs")
    monkeypatch.setattr(
        optimizers,
        "run_tool",
        lambda command, **_: subprocess.CompletedProcess(command, 2, "", "crashed"),
    )

    response = client.post(
        "/api/v1/pdf/compress",
        files={"file": ("doc.pdf", sample_pdf, PDF)},
        data={"level": "strong"},
    )

    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "Failed to compress PDF file"
    assert "exited with code 2" in body["error"]
    assert _leftovers(store) == []


def test_compress_rejects_unknown_level(client: TestClient, sample_pdf: bytes) -> None:
    response = client.post(
        "/api/v1/pdf/compress",
        files={"file": ("doc.pdf", sample_pdf, PDF)},
        data={"level": "extreme"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid compression level. Valid values are: basic, strong"


@pytest.fixture()
def configured_app(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Path]:
    temp_dir = tmp_path / "service-temp"
    monkeypatch.setenv("PDFTOOLKIT_TEMP_DIR", str(temp_dir))
    get_settings.cache_clear()
    get_store.cache_clear()
    try:
        yield temp_dir
    finally:
        get_settings.cache_clear()
        get_store.cache_clear()


def test_lifespan_starts_and_stops_sweeper(configured_app: Path, sample_pdf: bytes) -> None:
    with TestClient(app) as client:
        sweeper = app.state.sweeper
        assert sweeper.running
        assert sweeper.store.directory == configured_app.resolve()
        assert configured_app.is_dir()

        response = client.post(
            "/api/v1/pdf/split",
            files={"file": ("doc.pdf", sample_pdf, PDF)},
            data={"ranges": "3,1,1"},
        )
        assert response.status_code == 200
        assert page_numbers(response.content) == [3, 1, 1]

        response = client.post(
            "/api/v1/pdf/split",
            files={"file": ("doc.pdf", sample_pdf, PDF)},
            data={"ranges": "1-2-3"},
        )
        assert response.status_code == 400
        assert "'1-2-3'" in response.json()["message"]

    assert not sweeper.running
    assert list(configured_app.iterdir()) == []
