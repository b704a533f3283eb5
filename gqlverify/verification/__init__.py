"""Verification - engine, batch runner and result sinks."""

from .engine import run_one, verify
from .runner import run_all
from .sink import CaseOutcome, CollectingSink, ResultSink

__all__ = [
    "verify",
    "run_one",
    "run_all",
    "CaseOutcome",
    "CollectingSink",
    "ResultSink",
]
