"""Command line interface for the pdftoolkit toolkit."""

from __future__ import annotations

from .main import main

__all__ = ["main"]
