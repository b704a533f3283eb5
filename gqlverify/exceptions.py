"""
Exception hierarchy for result verification.

Every verification failure is terminal for the single test case it belongs
to. The runner reports it through the result sink and moves on to the next
case; nothing here is retried.
"""

import json
from typing import Any, Optional, Sequence


def _dump_errors(errors: Sequence[Any]) -> str:
    """Render an error collection as indented JSON for diagnostics."""
    rendered = [error.to_dict() if hasattr(error, "to_dict") else error for error in errors]
    return json.dumps(rendered, indent=2, sort_keys=True, ensure_ascii=False, default=str)


class VerificationError(Exception):
    """
    Base exception for all verification failures.

    Subclasses carry enough of both sides to render a full diagnostic via
    str(error).
    """

    pass


class MalformedInputError(VerificationError):
    """
    Raised when a payload or an expected result is not valid JSON.

    The side attribute distinguishes the two: "got" for the payload returned
    by the execution collaborator, "want" for the expected-result text.
    """

    def __init__(self, side: str, detail: str):
        self.side = side
        self.detail = detail
        super().__init__(f"{side}: invalid JSON: {detail}")


class ErrorSetMismatchError(VerificationError):
    """
    Raised when the expected and actual error collections differ after sorting.

    Both collections are kept in full; there is no partial-match reporting.
    """

    def __init__(self, expected: Sequence[Any], actual: Sequence[Any]):
        self.expected = list(expected)
        self.actual = list(actual)
        super().__init__(
            "unexpected error: "
            f"got {_dump_errors(self.actual)}, want {_dump_errors(self.expected)}"
        )


class UnexpectedPayloadError(VerificationError):
    """Raised when data is present although the test case expects none."""

    def __init__(self, payload: Any):
        self.payload = payload
        if isinstance(payload, bytes):
            rendered = payload.decode("utf-8", errors="replace")
        else:
            rendered = str(payload)
        super().__init__(f"got: {rendered}\nwant: null")


class DataMismatchError(VerificationError):
    """
    Raised when the canonical forms of the actual and expected data differ.

    Attributes:
        expected: Canonical expected buffer
        actual: Canonical actual buffer
        diff: Human-readable rendering produced by the diff reporter
    """

    def __init__(self, expected: bytes, actual: bytes, diff: str):
        self.expected = expected
        self.actual = actual
        self.diff = diff
        super().__init__(f"Did not get what we want:\n{diff}")


class DiffEngineError(VerificationError):
    """
    Raised when producing a diff fails.

    Covers temp-file I/O errors, a diff process that cannot be spawned or
    exits abnormally, and a diff invoked on identical inputs.
    """

    def __init__(self, message: str, returncode: Optional[int] = None):
        self.returncode = returncode
        super().__init__(message)


class ConfigurationError(Exception):
    """Raised for invalid settings or malformed test-case suite files."""

    pass
