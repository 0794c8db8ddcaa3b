"""CLI helpers for compressing PDF files."""

from __future__ import annotations

from argparse import ArgumentParser, Namespace, _SubParsersAction
from pathlib import Path

from ...compress import DEFAULT_TIMEOUT, CompressionLevel, compress_pdf_bytes
from ...core.utils import format_size, resolve_path


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("compress", help="Compress a PDF file")
    parser.add_argument("input", help="Input PDF file")
    parser.add_argument("output", help="Destination for compressed PDF")
    parser.add_argument(
        "--level",
        choices=[level.value for level in CompressionLevel],
        default=CompressionLevel.BASIC.value,
        help="Compression level",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Seconds to wait for the external compression tool",
    )
    parser.set_defaults(handler=run)


def run(args: Namespace) -> Path:
    source = resolve_path(args.input)
    destination = resolve_path(args.output)
    result = compress_pdf_bytes(source.read_bytes(), args.level, timeout=args.timeout)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(result.data)
    print(
        f"{result.strategy}: {format_size(result.original_size)} -> "
        f"{format_size(result.compressed_size)}"
    )
    return destination
