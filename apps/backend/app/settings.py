"""Application settings loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional


@dataclass(frozen=True, slots=True)
class Settings:
    """Configuration values for the PDF toolkit API."""

    temp_dir: Path
    max_file_size: int
    temp_file_expiry: float
    cleanup_interval: float
    max_merge_files: int
    compress_timeout: float
    log_level: str


def _read_float(name: str, default: float, *, minimum: Optional[float] = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        value = default
    else:
        try:
            value = float(raw)
        except ValueError as exc:
            raise ValueError(f"Environment variable {name} must be a number, got {raw!r}") from exc
    if minimum is not None and value < minimum:
        raise ValueError(f"Environment variable {name} must be >= {minimum}, got {value}")
    return value


def _read_int(name: str, default: int, *, minimum: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        value = default
    else:
        try:
            value = int(raw)
        except ValueError as exc:
            raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}") from exc
    if minimum is not None and value < minimum:
        raise ValueError(f"Environment variable {name} must be >= {minimum}, got {value}")
    return value


def load_settings() -> Settings:
    """Read :class:`Settings` from the current environment."""

    return Settings(
        temp_dir=Path(os.getenv("PDFTOOLKIT_TEMP_DIR", "temp")).expanduser().resolve(),
        max_file_size=_read_int("PDFTOOLKIT_MAX_FILE_SIZE", 50 * 1024 * 1024, minimum=1),
        temp_file_expiry=_read_float("PDFTOOLKIT_TEMP_FILE_EXPIRY", 3600.0, minimum=0),
        cleanup_interval=_read_float("PDFTOOLKIT_CLEANUP_INTERVAL", 3600.0, minimum=1),
        max_merge_files=_read_int("PDFTOOLKIT_MAX_MERGE_FILES", 20, minimum=2),
        compress_timeout=_read_float("PDFTOOLKIT_COMPRESS_TIMEOUT", 120.0, minimum=1),
        log_level=os.getenv("PDFTOOLKIT_LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return memoised :class:`Settings`."""

    return load_settings()


__all__ = ["Settings", "get_settings", "load_settings"]
