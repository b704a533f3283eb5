"""
Test case and execution result domain models.

A TestCase is declared once and never mutated by verification. An
ExecutionResult is produced fresh by the execution collaborator for every
run and only lives for the duration of one comparison.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, Sequence

from gqlverify.domain.query_error import QueryError


@dataclass(frozen=True)
class ExecutionResult:
    """
    Output of one query execution.

    Attributes:
        data: Raw JSON bytes of the data payload, None when absent/null
        errors: Structured errors returned as data, in backend order
    """

    data: Optional[bytes] = None
    errors: Sequence[QueryError] = ()


class Executor(Protocol):
    """Execution collaborator: runs a query and returns data plus errors."""

    def execute(
        self,
        context: Any,
        query: str,
        operation_name: str,
        variables: Mapping[str, Any],
    ) -> ExecutionResult:
        ...


@dataclass(frozen=True)
class TestCase:
    """
    Declared query test case.

    Attributes:
        schema: Execution collaborator handle the query runs against
        query: Query document text
        operation_name: Operation to run when the document holds several
        variables: Variable values keyed by name
        expected_result: Expected data as JSON text; "" means "expect null data"
        expected_errors: Expected error collection, in any order
        context: Execution context; a fresh empty context is used when None
        name: Optional label used in batch output and logs
    """

    __test__ = False

    schema: Executor
    query: str
    operation_name: str = ""
    variables: Mapping[str, Any] = field(default_factory=dict)
    expected_result: str = ""
    expected_errors: Sequence[QueryError] = ()
    context: Any = None
    name: Optional[str] = None
