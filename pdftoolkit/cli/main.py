"""Command line interface for the pdftoolkit toolkit."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from ..core.exceptions import InputValidationError, PDFToolkitError
from .commands import compress, merge, split

COMMAND_MODULES = [split, merge, compress]


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pdftoolkit", description="Merge, split and compress PDF files")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True
    for module in COMMAND_MODULES:
        module.configure_parser(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _create_parser()
    args = parser.parse_args(argv)
    try:
        output = args.handler(args)
    except InputValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except (PDFToolkitError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
