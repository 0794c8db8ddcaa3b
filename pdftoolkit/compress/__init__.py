"""Compression utilities for the :mod:`pdftoolkit` toolkit."""

from __future__ import annotations

from .compressor import (
    DEFAULT_TIMEOUT,
    BasicCompression,
    CompressionLevel,
    CompressionResult,
    CompressionStrategy,
    compress_pdf_bytes,
    select_strategy,
)
from .exceptions import CompressionError, InvalidCompressionLevelError
from .optimizers import GhostscriptCompression, build_ghostscript_command, probe_ghostscript

__all__ = [
    "CompressionLevel",
    "CompressionResult",
    "CompressionStrategy",
    "BasicCompression",
    "GhostscriptCompression",
    "DEFAULT_TIMEOUT",
    "compress_pdf_bytes",
    "select_strategy",
    "probe_ghostscript",
    "build_ghostscript_command",
    "CompressionError",
    "InvalidCompressionLevelError",
]
