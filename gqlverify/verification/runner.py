"""Batch Runner - run a sequence of test cases as isolated units."""

from typing import Iterable, Optional

from gqlverify.comparison import DiffReporter
from gqlverify.domain import TestCase

from .engine import run_one
from .sink import ResultSink


def run_all(
    sink: ResultSink, cases: Iterable[TestCase], reporter: Optional[DiffReporter] = None
) -> None:
    """
    Run test cases in order.

    A single case runs directly; several cases each run in a subtest named
    by its 1-based position, so one failing case does not affect the rest.

    Args:
        sink: Result sink of the enclosing test runner
        cases: Test cases to run
        reporter: Diff reporter shared across cases (optional)
    """
    cases = list(cases)
    if len(cases) == 1:
        run_one(sink, cases[0], reporter)
        return

    if reporter is None:
        reporter = DiffReporter()

    for index, case in enumerate(cases, 1):
        with sink.subtest(str(index)):
            run_one(sink, case, reporter)
