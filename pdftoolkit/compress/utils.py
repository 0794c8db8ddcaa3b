"""Process helpers used to drive the external compression tool."""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Sequence

_LOGGER = logging.getLogger("pdftoolkit.compress")


def find_executable(candidates: Sequence[str]) -> str | None:
    """Return the resolved path of the first name in *candidates* on ``PATH``."""

    resolved = (shutil.which(name) for name in candidates)
    return next((path for path in resolved if path), None)


def run_tool(command: Sequence[str], *, timeout: float | None = None) -> subprocess.CompletedProcess[str]:
    """Run *command* to completion and return its exit status and output.

    Output is decoded leniently; undecodable bytes become ``U+FFFD`` so a
    tool's diagnostics never turn into a decoding error. When *timeout*
    expires the child is killed and :class:`subprocess.TimeoutExpired`
    propagates. A non-zero exit status is left for the caller to judge.
    """

    _LOGGER.debug("Running %s (timeout=%s)", command[0], timeout)
    completed = subprocess.run(
        list(command),
        capture_output=True,
        text=True,
        errors="replace",
        timeout=timeout,
        check=False,
    )
    _LOGGER.debug("%s exited with %s: %s", command[0], completed.returncode, completed.stderr.strip())
    return completed


__all__ = ["find_executable", "run_tool"]
