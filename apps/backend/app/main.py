"""FastAPI application exposing the merge, split and compress operations."""

from __future__ import annotations

from contextlib import asynccontextmanager
from functools import lru_cache
from pathlib import Path
from typing import AsyncIterator, List

from fastapi import (
    BackgroundTasks,
    Depends,
    FastAPI,
    File,
    Form,
    HTTPException,
    Request,
    UploadFile,
)
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse

from pdftoolkit import (
    CompressionLevel,
    InputValidationError,
    compress_pdf_bytes,
    extract_pages_archive,
    merge_pdf_bytes,
    split_pdf_bytes,
)
from pdftoolkit.core.utils import format_size, get_logger
from pdftoolkit.merge import MIN_MERGE_INPUTS

from .settings import Settings, get_settings
from .storage import TempFileStore, TempFileSweeper

LOGGER = get_logger("pdftoolkit.api")

API_PREFIX = "/api/v1/pdf"
ALLOWED_CONTENT_TYPES = frozenset({"application/pdf"})
ALLOWED_EXTENSIONS = frozenset({".pdf"})


class ApiError(HTTPException):
    """HTTP error rendered as ``{"success": false, "message": ..., "error": ...}``."""

    def __init__(self, status_code: int, message: str, error: str | None = None) -> None:
        super().__init__(status_code=status_code, detail=message)
        self.message = message
        self.error = error


@lru_cache(maxsize=1)
def get_store() -> TempFileStore:
    settings = get_settings()
    return TempFileStore(settings.temp_dir, expiry_seconds=settings.temp_file_expiry)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    for name in ("pdftoolkit", "pdftoolkit.api", "pdftoolkit.storage"):
        get_logger(name, settings.log_level)

    store = get_store()
    store.ensure_directory()
    sweeper = TempFileSweeper(store, interval_seconds=settings.cleanup_interval)
    sweeper.start()
    app.state.sweeper = sweeper
    try:
        yield
    finally:
        await sweeper.stop()


app = FastAPI(title="PDF Toolkit API", version="0.1.0", lifespan=lifespan)


def _error_body(message: str, error: str | None = None) -> dict[str, object]:
    body: dict[str, object] = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    return body


@app.exception_handler(ApiError)
async def _handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message, exc.error))


@app.exception_handler(RequestValidationError)
async def _handle_request_validation(_: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(status_code=400, content=_error_body("; ".join(problems) or "Invalid request"))


def _failure(message: str, exc: Exception) -> ApiError:
    """Convert ``exc`` into the :class:`ApiError` returned to the client."""

    if isinstance(exc, ApiError):
        return exc
    if isinstance(exc, InputValidationError):
        return ApiError(400, str(exc))
    LOGGER.error("%s: %s", message, exc)
    return ApiError(500, message, error=str(exc))


def _check_upload_type(upload: UploadFile) -> None:
    """Reject uploads whose MIME type or extension is not allow-listed."""

    content_type = (upload.content_type or "").split(";", 1)[0].strip().lower()
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise ApiError(400, "Only PDF files are allowed")

    suffix = Path(upload.filename or "").suffix.lower()
    if suffix and suffix not in ALLOWED_EXTENSIONS:
        raise ApiError(400, "Only PDF files are allowed")


async def _read_upload(upload: UploadFile, max_size: int) -> bytes:
    """Read ``upload`` enforcing the per-file size ceiling."""

    contents = await upload.read(max_size + 1)
    if not contents:
        raise ApiError(400, f"File '{upload.filename}' is empty.")
    if len(contents) > max_size:
        raise ApiError(
            400,
            f"File '{upload.filename}' exceeds the maximum size of {format_size(max_size)}.",
        )
    return contents


def _file_response(
    background_tasks: BackgroundTasks,
    store: TempFileStore,
    output_path: Path,
    *cleanup: Path,
    media_type: str,
    filename: str,
) -> FileResponse:
    background_tasks.add_task(store.discard, output_path, *cleanup)
    return FileResponse(output_path, media_type=media_type, filename=filename)


@app.get("/health", response_class=JSONResponse)
async def health() -> dict[str, str]:
    """Lightweight health endpoint for uptime checks."""
    return {"status": "ok"}


@app.post(f"{API_PREFIX}/merge", response_class=FileResponse)
async def merge_documents(
    background_tasks: BackgroundTasks,
    files: List[UploadFile] | None = File(None, description="PDF files to merge, in order."),
    settings: Settings = Depends(get_settings),
    store: TempFileStore = Depends(get_store),
) -> FileResponse:
    """Merge between two and ``max_merge_files`` PDF uploads into one document."""

    uploads = files or []
    if len(uploads) < MIN_MERGE_INPUTS:
        raise ApiError(400, "At least two PDF files are required for merging")
    if len(uploads) > settings.max_merge_files:
        raise ApiError(400, f"At most {settings.max_merge_files} PDF files can be merged at once")
    for upload in uploads:
        _check_upload_type(upload)

    LOGGER.info("Received %d files for merging", len(uploads))
    stored: list[Path] = []
    try:
        for upload in uploads:
            stored.append(store.save(await _read_upload(upload, settings.max_file_size), upload.filename))

        documents = [store.read_bytes(path) for path in stored]
        merged = await run_in_threadpool(
            merge_pdf_bytes, documents, max_inputs=settings.max_merge_files
        )
        output_path = store.save(merged, "merged.pdf")
    except Exception as exc:
        store.discard(*stored)
        raise _failure("Failed to merge PDF files", exc) from exc

    return _file_response(
        background_tasks,
        store,
        output_path,
        *stored,
        media_type="application/pdf",
        filename="merged.pdf",
    )


@app.post(f"{API_PREFIX}/split", response_class=FileResponse)
async def split_document(
    background_tasks: BackgroundTasks,
    file: UploadFile | None = File(None, description="Source PDF to split."),
    ranges: str | None = Form(None, description="Comma separated page ranges, e.g. '1-3,5,7-10'."),
    extract_all: bool = Form(
        False,
        alias="extractAll",
        description="When true, return every page as its own PDF inside a zip archive.",
    ),
    settings: Settings = Depends(get_settings),
    store: TempFileStore = Depends(get_store),
) -> FileResponse:
    """Extract page ranges into one PDF, or every page into a zip archive."""

    if file is None:
        raise ApiError(400, "No PDF file provided")
    _check_upload_type(file)
    if not extract_all and (ranges is None or not ranges.strip()):
        raise ApiError(400, "Page ranges are required when not extracting all pages")

    LOGGER.info("Received file for splitting: %s", file.filename)
    input_path: Path | None = None
    try:
        input_path = store.save(await _read_upload(file, settings.max_file_size), file.filename)
        data = store.read_bytes(input_path)

        if extract_all:
            payload = await run_in_threadpool(
                extract_pages_archive, data, staging_dir=store.directory
            )
            media_type, filename = "application/zip", "extracted-pages.zip"
        else:
            payload = await run_in_threadpool(split_pdf_bytes, data, ranges)
            media_type, filename = "application/pdf", "split.pdf"

        output_path = store.save(payload, filename)
    except Exception as exc:
        store.discard(input_path)
        raise _failure("Failed to split PDF file", exc) from exc

    return _file_response(
        background_tasks,
        store,
        output_path,
        input_path,
        media_type=media_type,
        filename=filename,
    )


@app.post(f"{API_PREFIX}/compress", response_class=FileResponse)
async def compress_document(
    background_tasks: BackgroundTasks,
    file: UploadFile | None = File(None, description="Source PDF to compress."),
    level: str = Form(CompressionLevel.BASIC.value, description="Either 'basic' or 'strong'."),
    settings: Settings = Depends(get_settings),
    store: TempFileStore = Depends(get_store),
) -> FileResponse:
    """Compress an uploaded PDF; ``strong`` uses Ghostscript when available."""

    if file is None:
        raise ApiError(400, "No PDF file provided")
    try:
        compression_level = CompressionLevel.parse(level)
    except InputValidationError as exc:
        raise ApiError(400, str(exc)) from exc
    _check_upload_type(file)

    LOGGER.info("Received file for compression: %s, Level: %s", file.filename, compression_level.value)
    input_path: Path | None = None
    try:
        input_path = store.save(await _read_upload(file, settings.max_file_size), file.filename)
        data = store.read_bytes(input_path)
        result = await run_in_threadpool(
            compress_pdf_bytes, data, compression_level, timeout=settings.compress_timeout
        )
        output_path = store.save(result.data, "compressed.pdf")
    except Exception as exc:
        store.discard(input_path)
        raise _failure("Failed to compress PDF file", exc) from exc

    return _file_response(
        background_tasks,
        store,
        output_path,
        input_path,
        media_type="application/pdf",
        filename="compressed.pdf",
    )


__all__ = ["app", "get_store", "lifespan", "ApiError"]
