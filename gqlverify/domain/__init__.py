"""Domain models - test cases, execution results and structured errors."""

from .query_error import Location, PathSegment, QueryError
from .cases import ExecutionResult, Executor, TestCase

__all__ = [
    "ExecutionResult",
    "Executor",
    "Location",
    "PathSegment",
    "QueryError",
    "TestCase",
]
