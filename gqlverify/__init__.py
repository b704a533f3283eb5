"""
gqlverify - result verification for GraphQL execution tests.

Executes declared test cases and compares the outcome against expectations:
JSON payloads structurally, error collections as order-insensitive sets.
"""

from .domain import ExecutionResult, Executor, Location, QueryError, TestCase
from .exceptions import (
    ConfigurationError,
    DataMismatchError,
    DiffEngineError,
    ErrorSetMismatchError,
    MalformedInputError,
    UnexpectedPayloadError,
    VerificationError,
)
from .verification import CollectingSink, ResultSink, run_all, run_one, verify

__version__ = "0.1.0"
__all__ = [
    "ExecutionResult",
    "Executor",
    "Location",
    "QueryError",
    "TestCase",
    "ConfigurationError",
    "DataMismatchError",
    "DiffEngineError",
    "ErrorSetMismatchError",
    "MalformedInputError",
    "UnexpectedPayloadError",
    "VerificationError",
    "CollectingSink",
    "ResultSink",
    "run_all",
    "run_one",
    "verify",
]
