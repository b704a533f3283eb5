"""
pytest integration.

Registered through the pytest11 entry point, so the fixtures are available
in any project that installs gqlverify:

    def test_hero(run_gql_tests):
        run_gql_tests([TestCase(schema=executor, query="{ hero { name } }",
                                expected_result='{"hero": {"name": "R2-D2"}}')])
"""

from typing import Callable, Iterable, Optional

import pytest

from gqlverify.comparison import DiffReporter
from gqlverify.config import Settings, configure_logging
from gqlverify.domain import TestCase
from gqlverify.verification import CollectingSink, run_all


def pytest_configure(config) -> None:
    """Apply GQLVERIFY_LOG_LEVEL before any test runs."""
    configure_logging(Settings.from_environment())


def run_and_assert(
    sink: CollectingSink,
    cases: Iterable[TestCase],
    reporter: Optional[DiffReporter] = None,
) -> None:
    """Run cases into the sink and fail the current test if any failed."""
    run_all(sink, cases, reporter)
    if sink.failed:
        pytest.fail(sink.summary(), pytrace=False)


@pytest.fixture
def gql_sink(request) -> CollectingSink:
    """Collecting sink named after the requesting test."""
    return CollectingSink(name=request.node.name)


@pytest.fixture
def run_gql_tests(gql_sink: CollectingSink) -> Callable[[Iterable[TestCase]], None]:
    """Callable that runs test cases and fails the test on any mismatch."""

    def run(cases: Iterable[TestCase], reporter: Optional[DiffReporter] = None) -> None:
        run_and_assert(gql_sink, cases, reporter)

    return run
