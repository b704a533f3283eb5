"""
Error Set Comparator - Order-insensitive comparison of error collections.

Both collections are put in canonical order (path string, then message,
then the whole record) and compared field by field.
"""

import logging
from typing import List, Sequence, Tuple

from gqlverify.domain import QueryError
from gqlverify.exceptions import ErrorSetMismatchError

logger = logging.getLogger(__name__)


def _sort_key(error: QueryError) -> Tuple[str, str, str]:
    return (error.path_key(), error.message, error.canonical_key())


def sort_errors(errors: Sequence[QueryError]) -> List[QueryError]:
    """
    Return the errors in canonical order.

    The input is never reordered in place.

    Args:
        errors: Error collection in backend order

    Returns:
        New list sorted by path string, ties broken by message and record
    """
    if len(errors) <= 1:
        return list(errors)
    return sorted(errors, key=_sort_key)


def compare_errors(expected: Sequence[QueryError], actual: Sequence[QueryError]) -> None:
    """
    Assert that two error collections hold the same records.

    Args:
        expected: Errors the test case declares
        actual: Errors the execution collaborator returned

    Raises:
        ErrorSetMismatchError: If the sorted collections differ in any field
    """
    want = sort_errors(expected)
    got = sort_errors(actual)

    if got != want:
        logger.debug(f"Error set mismatch: got {len(got)} errors, want {len(want)}")
        raise ErrorSetMismatchError(expected=want, actual=got)
