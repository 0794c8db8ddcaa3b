"""Ghostscript integration for :mod:`pdftoolkit.compress`."""

from __future__ import annotations

import logging
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..core.exceptions import ExternalToolError
from .utils import find_executable, run_tool

_LOGGER = logging.getLogger("pdftoolkit.compress")

GHOSTSCRIPT_EXECUTABLES: Sequence[str] = ("gs", "gswin64c", "gswin32c")
DEFAULT_PROBE_TIMEOUT = 10.0
DEFAULT_PDF_SETTINGS = "/ebook"


def probe_ghostscript(
    timeout: float = DEFAULT_PROBE_TIMEOUT,
    executables: Sequence[str] = GHOSTSCRIPT_EXECUTABLES,
) -> str | None:
    """Return the Ghostscript executable if it runs successfully, else ``None``.

    The executable must be on ``PATH`` and ``<exe> --version`` must exit with
    status 0 within *timeout* seconds.
    """

    executable = find_executable(executables)
    if executable is None:
        _LOGGER.info("Ghostscript not found on PATH")
        return None

    try:
        completed = run_tool([executable, "--version"], timeout=timeout)
    except (OSError, subprocess.SubprocessError) as exc:
        _LOGGER.warning("Ghostscript probe failed: %s", exc)
        return None

    if completed.returncode != 0:
        _LOGGER.warning("Ghostscript probe exited with code %s", completed.returncode)
        return None

    _LOGGER.debug("Ghostscript %s available at %s", completed.stdout.strip(), executable)
    return executable


def build_ghostscript_command(
    executable: str,
    source: Path,
    output: Path,
    pdf_settings: str = DEFAULT_PDF_SETTINGS,
) -> list[str]:
    """Construct the Ghostscript command writing a recompressed *source* to *output*."""

    return [
        executable,
        "-sDEVICE=pdfwrite",
        "-dCompatibilityLevel=1.4",
        f"-dPDFSETTINGS={pdf_settings}",
        "-dNOPAUSE",
        "-dQUIET",
        "-dBATCH",
        "-dSAFER",
        f"-sOutputFile={output}",
        str(source),
    ]


@dataclass(frozen=True)
class GhostscriptCompression:
    """Strong compression delegated to an external Ghostscript process."""

    executable: str
    timeout: float | None = None
    pdf_settings: str = DEFAULT_PDF_SETTINGS

    name = "ghostscript"

    def compress(self, data: bytes) -> bytes:
        """Run Ghostscript over *data* and return the rewritten PDF.

        Raises:
            ExternalToolError: If the process cannot be launched, exits with
                a non-zero status, times out or produces no output.
        """

        with tempfile.TemporaryDirectory(prefix="ghostscript-") as workdir:
            source = Path(workdir) / "input.pdf"
            output = Path(workdir) / "output.pdf"
            source.write_bytes(data)
            command = build_ghostscript_command(self.executable, source, output, self.pdf_settings)

            _LOGGER.info("Running Ghostscript for compression")
            try:
                completed = run_tool(command, timeout=self.timeout)
            except subprocess.TimeoutExpired as exc:
                raise ExternalToolError(
                    f"Ghostscript did not finish within {self.timeout} seconds"
                ) from exc
            except OSError as exc:
                raise ExternalToolError(f"Failed to launch Ghostscript: {exc}") from exc

            if completed.returncode != 0:
                raise ExternalToolError(
                    f"Ghostscript process exited with code {completed.returncode}: "
                    f"{completed.stderr.strip()}"
                )
            if not output.exists():
                raise ExternalToolError("Ghostscript did not produce an output file")
            return output.read_bytes()


__all__ = [
    "GHOSTSCRIPT_EXECUTABLES",
    "GhostscriptCompression",
    "build_ghostscript_command",
    "probe_ghostscript",
]
