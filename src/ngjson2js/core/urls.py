# src/ngjson2js/core/urls.py
"""Derivation of cache keys from file locations.

The key under which a JSON document is registered in the cache is the
file's path relative to a base directory, always with forward slashes,
optionally with a leading prefix stripped and another prefix added.

Examples:
    >>> derive_file_url("/src/data/a/b.json", "/src/data")
    'a/b.json'

    >>> derive_file_url("/src/data/a/b.json", "/src/data", prefix="static/")
    'static/a/b.json'

    >>> derive_file_url("/src/data/a/b.json", "/src/data", strip_prefix="a/")
    'b.json'
"""

from __future__ import annotations

import os

__all__ = [
    "derive_file_url",
    "to_posix_separators",
]


def to_posix_separators(path: str) -> str:
    """Replace every backslash with a forward slash."""
    return path.replace("\\", "/")


def derive_file_url(
    path: str | os.PathLike[str],
    base: str | os.PathLike[str],
    *,
    strip_prefix: str | None = None,
    prefix: str | None = None,
) -> str:
    """Compute the registration key for a file.

    Args:
        path: Physical location of the file
        base: Directory the key is relative to. Both path and base are
              resolved against the CWD, so a file outside base yields a
              key starting with ``../``.
        strip_prefix: Removed from the start of the relative path when it
                      is a literal prefix of it. Empty means no stripping.
        prefix: Prepended verbatim after stripping. No separator is added,
                include one in the value if needed.

    Returns:
        Forward-slash relative path suitable as a cache key.
    """
    url = to_posix_separators(os.path.relpath(path, base))
    if url == os.curdir:
        # A file at base itself has an empty relative path
        url = ""

    if strip_prefix and url.startswith(strip_prefix):
        url = url[len(strip_prefix) :]

    if prefix:
        url = prefix + url

    return url
