"""Utilities shared by pdftoolkit packages."""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str, level: str | int | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    if level is not None:
        logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger


def resolve_path(path: str | Path | None) -> Path:
    if path is None:
        raise ValueError("Path must not be None")
    return Path(path).expanduser().resolve()


_SIZE_UNITS = ("bytes", "KiB", "MiB", "GiB", "TiB")


def format_size(size: float) -> str:
    """Render a byte count with a binary unit, e.g. ``50.0 MiB``."""

    value = float(size)
    for unit in _SIZE_UNITS[:-1]:
        if abs(value) < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} {_SIZE_UNITS[-1]}"


__all__ = ["LOG_FORMAT", "format_size", "get_logger", "resolve_path"]
