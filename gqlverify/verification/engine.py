"""
Verification Engine

Runs one test case through its execution collaborator and decides
pass/fail:
- Error collections must match as sets (checked first, independent of data)
- An empty expected result means the data payload must be null
- Otherwise both payloads are canonicalized and compared byte for byte
- A data mismatch is reported with a diff of the canonical forms

Nothing is retried and no state is carried between cases.
"""

from typing import Optional

from gqlverify.comparison import DiffReporter, canonicalize, compare_errors, parse_json
from gqlverify.domain import TestCase
from gqlverify.exceptions import (
    DataMismatchError,
    MalformedInputError,
    UnexpectedPayloadError,
    VerificationError,
)
from gqlverify.utils.logger import get_logger, log_operation, preview_payload

from .sink import ResultSink

logger = get_logger(__name__)


def _is_json_null(data: bytes) -> bool:
    try:
        return parse_json(data) is None
    except MalformedInputError:
        return False


@log_operation("verify")
def verify(case: TestCase, reporter: Optional[DiffReporter] = None) -> None:
    """
    Verify a single test case.

    Args:
        case: Test case to run
        reporter: Diff reporter for data mismatches (built from the
            environment when omitted)

    Raises:
        ErrorSetMismatchError: If the error collections differ
        UnexpectedPayloadError: If data came back although none was expected
        MalformedInputError: If either payload is not valid JSON
        DataMismatchError: If the canonical payloads differ
        DiffEngineError: If rendering the diff fails
    """
    context = case.context if case.context is not None else {}
    result = case.schema.execute(context, case.query, case.operation_name, dict(case.variables))

    logger.debug(
        "Executed query",
        operation="verify",
        context={
            "case": case.name,
            "data": preview_payload(result.data),
            "error_count": len(result.errors),
        },
    )

    compare_errors(case.expected_errors, result.errors)

    if case.expected_result == "":
        if result.data is not None and not _is_json_null(result.data):
            raise UnexpectedPayloadError(result.data)
        return

    if reporter is None:
        reporter = DiffReporter()
    indent = reporter.settings.json_indent

    # Checked before comparing so a malformed side is reported as such.
    got = canonicalize(result.data, side="got", indent=indent)
    want = canonicalize(case.expected_result, side="want", indent=indent)

    if got != want:
        raise DataMismatchError(expected=want, actual=got, diff=reporter.report(want, got))


def run_one(sink: ResultSink, case: TestCase, reporter: Optional[DiffReporter] = None) -> None:
    """
    Verify a test case and report the outcome to a sink.

    Verification failures are recorded with sink.fail and never raised.

    Args:
        sink: Result sink of the enclosing test runner
        case: Test case to run
        reporter: Diff reporter shared across cases (optional)
    """
    sink.log(f"=== RUN {case.name or 'case'}")
    try:
        verify(case, reporter)
    except VerificationError as e:
        sink.fail(str(e))
