"""CLI helpers for merging PDFs."""

from __future__ import annotations

from argparse import ArgumentParser, Namespace, _SubParsersAction
from pathlib import Path

from ...core.utils import resolve_path
from ...merge import merge_pdf_bytes


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("merge", help="Merge multiple PDFs into one")
    parser.add_argument("inputs", nargs="+", help="Input PDF files, in output order")
    parser.add_argument("output", help="Output PDF path")
    parser.add_argument(
        "--no-metadata",
        action="store_true",
        help="Do not copy metadata from the first document",
    )
    parser.set_defaults(handler=run)


def run(args: Namespace) -> Path:
    documents = [resolve_path(path).read_bytes() for path in args.inputs]
    destination = resolve_path(args.output)
    merged = merge_pdf_bytes(documents, metadata=not args.no_metadata)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(merged)
    return destination
