# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Usage:
    from tests.property.conftest import json_values, path_segments

    @given(doc=json_values)
    def test_escape_round_trips(doc) -> None:
        ...
"""

from __future__ import annotations

from hypothesis import strategies as st

# =============================================================================
# Core JSON Strategies
# =============================================================================

# NaN/Infinity are not JSON and are rejected by the parser. Integers stay
# within the exactly representable double range.
json_primitives = (
    st.none()
    | st.booleans()
    | st.integers(min_value=-(2**53), max_value=2**53)
    | st.floats(allow_nan=False, allow_infinity=False)
    | st.text(max_size=50)
)

json_values = st.recursive(
    json_primitives,
    lambda children: st.lists(children, max_size=8) | st.dictionaries(st.text(max_size=15), children, max_size=8),
    max_leaves=40,
)

# =============================================================================
# Path Strategies
# =============================================================================

# Portable file/dir name segments: no separators, no "." or ".." segments
path_segments = st.from_regex(r"[A-Za-z0-9_][A-Za-z0-9_.-]{0,15}", fullmatch=True).filter(lambda s: s not in {".", ".."})

relative_paths = st.lists(path_segments, min_size=1, max_size=5).map(lambda parts: "/".join(parts))

# Prefix values users plausibly configure
prefixes = st.one_of(st.none(), st.just(""), st.text(alphabet="abc/_-.", min_size=1, max_size=10))
