"""Shared sentinel values.

MISSING distinguishes "no value" from a value that is legitimately None.
JSON ``null`` parses to None, so a failed parse cannot be signalled with
None without making ``null`` documents look invalid.

Example usage:
    from ngjson2js.contracts.sentinels import MISSING

    value = try_parse_json(text)
    if value is MISSING:
        # Not valid JSON
        ...
    elif value is None:
        # The document was the JSON literal null
        ...
"""

from typing import Final


class MissingSentinel:
    """Sentinel class for absent values.

    This is a singleton - use the MISSING instance, not the class directly.
    Comparison should always use `is` identity, never equality.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"

    def __bool__(self) -> bool:
        return False


MISSING: Final[MissingSentinel] = MissingSentinel()
"""Singleton sentinel indicating an absent value.

Use identity comparison: `if value is MISSING:`
"""
