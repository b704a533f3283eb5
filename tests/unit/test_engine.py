"""
Unit tests for the verification engine (gqlverify/verification/engine.py)

Tests covering:
- Execution collaborator invocation and default context
- Error set checking before data comparison
- Empty expected result means null data
- Canonical data comparison and diff reporting
- Distinct malformed-input failures for each side
- run_one reports through the sink instead of raising
"""

import pytest

from gqlverify.comparison import DiffReporter
from gqlverify.config.settings import Settings
from gqlverify.domain import QueryError
from gqlverify.exceptions import (
    DataMismatchError,
    DiffEngineError,
    ErrorSetMismatchError,
    MalformedInputError,
    UnexpectedPayloadError,
)
from gqlverify.verification import CollectingSink, run_one, verify
from tests.stubs import FakeDiffTool, StubExecutor, make_case


@pytest.fixture
def reporter():
    """Reporter with a diff tool double, independent of the host."""
    return DiffReporter(tool=FakeDiffTool(available=True, output="DIFF"), settings=Settings())


@pytest.fixture
def plain_reporter():
    """Reporter that always renders got/want."""
    return DiffReporter(tool=FakeDiffTool(available=False), settings=Settings())


class TestExecution:
    """Tests for how the collaborator is called."""

    def test_passes_query_operation_and_variables(self, reporter):
        executor = StubExecutor(data={"a": 1})
        case = make_case(
            executor,
            '{"a":1}',
            query="query Q($id: ID) { a }",
            operation_name="Q",
            variables={"id": "1"},
        )

        verify(case, reporter)

        call = executor.calls[0]
        assert call["query"] == "query Q($id: ID) { a }"
        assert call["operation_name"] == "Q"
        assert call["variables"] == {"id": "1"}

    def test_defaults_to_empty_context(self, reporter):
        executor = StubExecutor()
        verify(make_case(executor), reporter)
        assert executor.calls[0]["context"] == {}

    def test_fresh_default_context_per_run(self, reporter):
        executor = StubExecutor()
        case = make_case(executor)
        verify(case, reporter)
        verify(case, reporter)
        assert executor.calls[0]["context"] is not executor.calls[1]["context"]

    def test_keeps_given_context(self, reporter):
        executor = StubExecutor()
        context = {"user": "luke"}
        verify(make_case(executor, context=context), reporter)
        assert executor.calls[0]["context"] is context


class TestErrorChecks:
    """Tests for the error collection step."""

    def test_errors_in_different_order_pass(self, reporter):
        executor = StubExecutor(
            data={"a": 1},
            errors=[QueryError("x", path=("b",)), QueryError("y", path=("a",))],
        )
        case = make_case(
            executor,
            '{"a":1}',
            expected_errors=(QueryError("y", path=("a",)), QueryError("x", path=("b",))),
        )
        verify(case, reporter)

    def test_error_mismatch_fails_even_when_data_matches(self, reporter):
        executor = StubExecutor(data={"a": 1}, errors=[QueryError("boom", path=("a",))])
        with pytest.raises(ErrorSetMismatchError):
            verify(make_case(executor, '{"a":1}'), reporter)

    def test_error_mismatch_reported_before_data(self, reporter):
        executor = StubExecutor(data={"a": 2}, errors=[QueryError("boom")])
        with pytest.raises(ErrorSetMismatchError):
            verify(make_case(executor, '{"a":1}'), reporter)

    def test_expected_errors_are_not_reordered(self, reporter):
        expected = (QueryError("x", path=("b",)), QueryError("y", path=("a",)))
        executor = StubExecutor(errors=list(reversed(expected)))
        case = make_case(executor, expected_errors=expected)
        verify(case, reporter)
        assert case.expected_errors == expected


class TestNullExpectation:
    """Tests for an empty expected result."""

    def test_null_data_passes(self, reporter):
        verify(make_case(StubExecutor(data=None)), reporter)

    def test_empty_object_fails_as_unexpected_payload(self, reporter):
        with pytest.raises(UnexpectedPayloadError) as exc_info:
            verify(make_case(StubExecutor(data={})), reporter)
        assert str(exc_info.value) == "got: {}\nwant: null"

    def test_null_expectation_never_diffs(self):
        tool = FakeDiffTool(available=True)
        with pytest.raises(UnexpectedPayloadError):
            verify(make_case(StubExecutor(data={"a": 1})), DiffReporter(tool=tool, settings=Settings()))
        assert tool.calls == []

    def test_literal_null_payload_passes(self, reporter):
        verify(make_case(StubExecutor(raw=b"null")), reporter)
        verify(make_case(StubExecutor(raw=b" null\n")), reporter)

    def test_malformed_payload_is_unexpected(self, reporter):
        with pytest.raises(UnexpectedPayloadError) as exc_info:
            verify(make_case(StubExecutor(raw=b"nul")), reporter)
        assert str(exc_info.value) == "got: nul\nwant: null"


class TestDataComparison:
    """Tests for canonical data comparison."""

    def test_equal_payload_passes(self, reporter):
        verify(make_case(StubExecutor(data={"a": 1}), '{"a":1}'), reporter)

    def test_key_order_in_expectation_is_irrelevant(self, reporter):
        executor = StubExecutor(raw=b'{"a":1,"b":2}')
        verify(make_case(executor, '{"b":2,"a":1}'), reporter)

    def test_formatting_in_expectation_is_irrelevant(self, reporter):
        executor = StubExecutor(data={"hero": {"name": "R2-D2", "friends": [{"name": "Luke"}]}})
        expected = """
            {
              "hero": {
                "friends": [ { "name": "Luke" } ],
                "name": "R2-D2"
              }
            }
        """
        verify(make_case(executor, expected), reporter)

    def test_mismatch_carries_diff(self, reporter):
        with pytest.raises(DataMismatchError) as exc_info:
            verify(make_case(StubExecutor(data={"a": 1}), '{"a":2}'), reporter)

        error = exc_info.value
        assert error.diff == "DIFF"
        assert str(error) == "Did not get what we want:\nDIFF"
        assert error.actual == b'{\n  "a": 1\n}'
        assert error.expected == b'{\n  "a": 2\n}'

    def test_mismatch_without_diff_tool_shows_got_and_want(self, plain_reporter):
        with pytest.raises(DataMismatchError) as exc_info:
            verify(make_case(StubExecutor(data={"a": 1}), '{"a":2}'), plain_reporter)

        message = str(exc_info.value)
        assert 'got:  {\n  "a": 1\n}' in message
        assert 'want: {\n  "a": 2\n}' in message

    def test_diff_tool_receives_want_then_got(self):
        tool = FakeDiffTool(available=True)
        reporter = DiffReporter(tool=tool, settings=Settings())
        with pytest.raises(DataMismatchError):
            verify(make_case(StubExecutor(data={"a": 1}), '{"a":2}'), reporter)
        assert tool.calls == [(b'{\n  "a": 2\n}', b'{\n  "a": 1\n}')]

    def test_diff_engine_failure_propagates(self):
        class BrokenDiffTool(FakeDiffTool):
            def diff(self, expected, actual):
                raise DiffEngineError("diff exploded")

        reporter = DiffReporter(tool=BrokenDiffTool(), settings=Settings())
        with pytest.raises(DiffEngineError, match="diff exploded"):
            verify(make_case(StubExecutor(data={"a": 1}), '{"a":2}'), reporter)

    def test_configured_indent_is_used(self):
        reporter = DiffReporter(tool=FakeDiffTool(available=True), settings=Settings(json_indent=4))
        with pytest.raises(DataMismatchError) as exc_info:
            verify(make_case(StubExecutor(data={"a": 1}), '{"a":2}'), reporter)
        assert exc_info.value.actual == b'{\n    "a": 1\n}'


class TestMalformedInput:
    """Tests for distinct got/want invalid JSON failures."""

    def test_malformed_expectation_is_want_side(self, reporter):
        with pytest.raises(MalformedInputError) as exc_info:
            verify(make_case(StubExecutor(data={"a": 1}), "{not json"), reporter)
        assert exc_info.value.side == "want"
        assert str(exc_info.value).startswith("want: invalid JSON:")

    def test_malformed_payload_is_got_side(self, reporter):
        with pytest.raises(MalformedInputError) as exc_info:
            verify(make_case(StubExecutor(raw=b"{oops"), '{"a":1}'), reporter)
        assert exc_info.value.side == "got"
        assert str(exc_info.value).startswith("got: invalid JSON:")

    def test_missing_payload_with_expectation_is_got_side(self, reporter):
        with pytest.raises(MalformedInputError) as exc_info:
            verify(make_case(StubExecutor(data=None), '{"a":1}'), reporter)
        assert exc_info.value.side == "got"

    def test_both_malformed_reports_got_first(self, reporter):
        with pytest.raises(MalformedInputError) as exc_info:
            verify(make_case(StubExecutor(raw=b"{oops"), "{not json"), reporter)
        assert exc_info.value.side == "got"


class TestRunOne:
    """Tests for reporting through a sink."""

    def test_pass_records_only_the_run_line(self, reporter):
        sink = CollectingSink()
        run_one(sink, make_case(StubExecutor(data={"a": 1}), '{"a":1}', name="hero"), reporter)
        assert not sink.failed
        assert sink.current.logs == ["=== RUN hero"]

    def test_failure_is_recorded_not_raised(self, reporter):
        sink = CollectingSink()
        run_one(sink, make_case(StubExecutor(data={"a": 1}), '{"a":2}'), reporter)

        assert sink.failed
        assert sink.failures() == [("suite", "Did not get what we want:\nDIFF")]

    def test_error_set_failure_message(self, reporter):
        sink = CollectingSink()
        run_one(sink, make_case(StubExecutor(errors=[QueryError("boom")])), reporter)
        assert sink.failures()[0][1].startswith("unexpected error: got ")
