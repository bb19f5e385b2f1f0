# src/ngjson2js/core/json_escape.py
"""JSON validation and canonical re-serialization.

Documents are parsed and serialized back in compact form rather than
passed through verbatim. The serialized form is always a valid JavaScript
expression, so it can be spliced into generated code without breaking out
of its context.

Parsing follows JSON.parse semantics: the non-standard constants NaN,
Infinity and -Infinity that Python's json module accepts by default are
rejected. Serialization follows JSON.stringify: no whitespace, non-ASCII
characters kept as-is, key order preserved.
"""

from __future__ import annotations

import json
import math
import re
from decimal import Decimal
from typing import Any

from ngjson2js.contracts.sentinels import MISSING, MissingSentinel

__all__ = [
    "escape_content",
    "try_parse_json",
]

# Python's decoder joins surrogate pairs, so any surrogate left in a
# decoded string is unpaired and cannot be encoded as UTF-8.
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")

# Every integer with at most 15 digits is exactly representable as a double
_EXACT_INT_DIGITS = 15

# JavaScript prints integral numbers at or above 1e21 in exponent form
_EXPONENT_THRESHOLD = 1e21


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def _parse_float(literal: str) -> float | None:
    # Out-of-range literals such as 1e400 serialize as null, as JSON.stringify does
    value = float(literal)
    if math.isinf(value):
        return None
    return value


def _parse_int(literal: str) -> int | float | None:
    # JSON numbers are doubles. Integers beyond 2**53 lose precision the same
    # way, and huge literals never reach int() and its digit limit.
    if len(literal.lstrip("-")) <= _EXACT_INT_DIGITS:
        return int(literal)
    value = _parse_float(literal)
    if value is None or abs(value) >= _EXPONENT_THRESHOLD:
        return value
    return int(Decimal(repr(value)))


def _escape_surrogate(match: re.Match[str]) -> str:
    return f"\\u{ord(match.group()):04x}"


def try_parse_json(text: str) -> Any | MissingSentinel:
    """Parse text as strict JSON.

    Returns:
        The parsed value (which may be None for ``null``), or MISSING if
        the text is not valid JSON.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant, parse_float=_parse_float, parse_int=_parse_int)
    except (ValueError, RecursionError):
        # JSONDecodeError is a ValueError subclass; RecursionError means nesting too deep
        return MISSING


def escape_content(text: str) -> str | MissingSentinel:
    """Return the compact canonical form of a JSON document.

    Examples:
        >>> escape_content('{"a": 1, "b": [2,3]}')
        '{"a":1,"b":[2,3]}'

        >>> escape_content("{not json") is MISSING
        True
    """
    value = try_parse_json(text)
    if value is MISSING:
        return MISSING
    serialized = json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    return _LONE_SURROGATE.sub(_escape_surrogate, serialized)
