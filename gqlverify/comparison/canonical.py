"""
JSON Canonicalizer - Re-serialize JSON deterministically for byte comparison.

Structurally equal documents produce identical bytes regardless of
whitespace, object key order or numeric literal form, so only semantic
differences survive the comparison.
"""

import json
import math
from typing import Any, Union

from gqlverify.config.settings import DEFAULT_JSON_INDENT
from gqlverify.exceptions import MalformedInputError


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid literal {name}")


def _parse_float(text: str) -> Union[int, float]:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number {text} out of range")
    # 1, 1.0 and 1e0 must canonicalize identically
    if value.is_integer():
        return int(value)
    return value


def parse_json(data: Union[bytes, str, None], side: str = "got") -> Any:
    """
    Parse strict JSON into a value tree with normalized numbers.

    NaN/Infinity literals, out-of-range numbers, empty input and None are
    rejected.

    Args:
        data: JSON document as bytes or text
        side: Which side of the comparison the input belongs to ("got"/"want")

    Returns:
        Parsed value tree

    Raises:
        MalformedInputError: If the input is not valid JSON
    """
    if data is None:
        raise MalformedInputError(side, "no data")

    try:
        return json.loads(
            data,
            parse_float=_parse_float,
            parse_constant=_reject_constant,
        )
    except (ValueError, RecursionError) as e:
        raise MalformedInputError(side, str(e)) from e


def canonicalize(
    data: Union[bytes, str, None],
    side: str = "got",
    indent: int = DEFAULT_JSON_INDENT,
) -> bytes:
    """
    Canonicalize a JSON document.

    Object keys are sorted and nesting uses a fixed indentation, so two
    canonical buffers are byte-equal iff the documents are JSON-equal.

    Args:
        data: JSON document as bytes or text
        side: Which side of the comparison the input belongs to ("got"/"want")
        indent: Spaces per nesting level

    Returns:
        Canonical UTF-8 bytes

    Raises:
        MalformedInputError: If the input is not valid JSON

    Example:
        >>> canonicalize(b'{"b":2,"a":1}')
        b'{\\n  "a": 1,\\n  "b": 2\\n}'
    """
    value = parse_json(data, side=side)
    return json.dumps(value, indent=indent, sort_keys=True, ensure_ascii=False).encode("utf-8")
