"""Diff Reporter - Render a readable diff between two canonical JSON buffers."""

from __future__ import annotations

import shutil
import subprocess
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional, Protocol

from gqlverify.config.settings import Settings
from gqlverify.exceptions import DiffEngineError
from gqlverify.utils.logger import get_logger

logger = get_logger(__name__)

EXPECTED_LABEL = "expected.json"
ACTUAL_LABEL = "actual.json"

_availability_lock = threading.Lock()
_availability: Dict[str, bool] = {}


def diff_available(command: str = "diff") -> bool:
    """
    Report whether the diff utility is on PATH.

    The lookup runs once per command for the lifetime of the process; later
    calls return the cached answer.
    """
    with _availability_lock:
        if command not in _availability:
            _availability[command] = shutil.which(command) is not None
            logger.debug(
                "Looked up diff utility",
                operation="diff_available",
                context={"command": command, "available": _availability[command]},
            )
        return _availability[command]


def reset_diff_cache() -> None:
    """Forget cached availability lookups."""
    with _availability_lock:
        _availability.clear()


def format_got_want(expected: bytes, actual: bytes) -> str:
    """Paired rendering used when no diff utility is available."""
    got = actual.decode("utf-8", errors="replace")
    want = expected.decode("utf-8", errors="replace")
    return f"got:  {got}\nwant: {want}"


class DiffTool(Protocol):
    """Capability that turns two differing buffers into a unified diff."""

    def available(self) -> bool:
        ...

    def diff(self, expected: bytes, actual: bytes) -> str:
        ...


class ExternalDiffTool:
    """Unified diff produced by the system's line-diff utility."""

    def __init__(self, command: str = "diff") -> None:
        self.command = command

    def available(self) -> bool:
        return diff_available(self.command)

    def diff(self, expected: bytes, actual: bytes) -> str:
        """
        Write both buffers to a scratch directory and diff them.

        The directory is removed on every exit path.

        Args:
            expected: Canonical expected buffer
            actual: Canonical actual buffer

        Returns:
            Unified diff text labelled expected.json / actual.json

        Raises:
            DiffEngineError: On I/O failure, abnormal exit, or identical inputs
        """
        try:
            with tempfile.TemporaryDirectory(prefix="gqlverify-diff-") as tmp_dir:
                expected_path = Path(tmp_dir) / "expected.json"
                received_path = Path(tmp_dir) / "received.json"
                expected_path.write_bytes(expected)
                received_path.write_bytes(actual)

                completed = subprocess.run(
                    [
                        self.command,
                        "-u",
                        "-L",
                        EXPECTED_LABEL,
                        "-L",
                        ACTUAL_LABEL,
                        str(expected_path),
                        str(received_path),
                    ],
                    capture_output=True,
                    check=False,
                )
        except OSError as e:
            raise DiffEngineError(f"Unexpected error running diff: {e}") from e

        if completed.returncode == 0:
            raise DiffEngineError(
                "Unexpected error: diff should only be called on output that is not "
                "what was expected",
                returncode=0,
            )

        if completed.returncode != 1:
            stderr = completed.stderr.decode("utf-8", errors="replace").strip()
            raise DiffEngineError(
                f"Unexpected error running diff: exit status {completed.returncode}: {stderr}",
                returncode=completed.returncode,
            )

        return completed.stdout.decode("utf-8", errors="replace")


class DiffReporter:
    """
    Produce the human-readable part of a data mismatch report.

    Uses the diff tool when it is available and enabled, and otherwise
    falls back to printing both buffers verbatim.
    """

    def __init__(self, tool: Optional[DiffTool] = None, settings: Optional[Settings] = None) -> None:
        self.settings = settings if settings is not None else Settings.from_environment()
        self.tool = tool if tool is not None else ExternalDiffTool(self.settings.diff_command)

    def report(self, expected: bytes, actual: bytes) -> str:
        """
        Render the difference between two canonical buffers known to differ.

        Args:
            expected: Canonical expected buffer
            actual: Canonical actual buffer

        Returns:
            Unified diff text, or the paired got/want rendering

        Raises:
            DiffEngineError: If the diff tool fails
        """
        if self.settings.diff_enabled and self.tool.available():
            return self.tool.diff(expected, actual)

        logger.debug("Diff utility unavailable, using got/want rendering", operation="report_diff")
        return format_got_want(expected, actual)
