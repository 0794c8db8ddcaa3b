"""CLI helpers for the split command."""

from __future__ import annotations

from argparse import ArgumentParser, Namespace, _SubParsersAction
from pathlib import Path

from ...core.utils import resolve_path
from ...split import extract_pages_archive, split_pdf_bytes


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("split", help="Split a PDF by page ranges or into single pages")
    parser.add_argument("input", help="Input PDF file")
    parser.add_argument("output", help="Output PDF (ranges) or zip archive (--extract-all)")
    selection = parser.add_mutually_exclusive_group(required=True)
    selection.add_argument("--ranges", help="Comma separated page ranges, e.g. '1-3,5,7-10'")
    selection.add_argument(
        "--extract-all",
        action="store_true",
        help="Write every page as its own PDF into a zip archive",
    )
    parser.set_defaults(handler=run)


def run(args: Namespace) -> Path:
    source = resolve_path(args.input)
    destination = resolve_path(args.output)
    data = source.read_bytes()

    if args.extract_all:
        payload = extract_pages_archive(data, staging_dir=destination.parent)
    else:
        payload = split_pdf_bytes(data, args.ranges)

    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(payload)
    return destination
