"""Comparison - JSON canonicalization, error set comparison and diff reporting."""

from .canonical import canonicalize, parse_json
from .diff_reporter import (
    DiffReporter,
    DiffTool,
    ExternalDiffTool,
    diff_available,
    format_got_want,
    reset_diff_cache,
)
from .error_set import compare_errors, sort_errors

__all__ = [
    "canonicalize",
    "parse_json",
    "compare_errors",
    "sort_errors",
    "DiffReporter",
    "DiffTool",
    "ExternalDiffTool",
    "diff_available",
    "format_got_want",
    "reset_diff_cache",
]
