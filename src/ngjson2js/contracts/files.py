"""Source file contract.

A SourceFile is one unit of work flowing through a build: a path, the base
directory that path is relative to, and its contents. Contents come in three
shapes that transforms must tell apart:

- BUFFER: fully materialized bytes
- STREAM: an open binary stream (not yet read)
- NULL: no contents at all (e.g. a directory placeholder)

SourceFile is frozen. Transforms return a new instance via with_contents()
and with_extension() instead of mutating the one they received.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import BinaryIO

# Extension given to generated script files
SCRIPT_EXTENSION = ".js"


class ContentKind(str, Enum):
    """How a file's contents are represented."""

    BUFFER = "buffer"
    STREAM = "stream"
    NULL = "null"


def replace_extension(path: Path, extension: str) -> Path:
    """Replace the final suffix of path with extension.

    A path without a suffix gets the extension appended. Dotfiles such as
    ``.hidden`` have no suffix, so they become ``.hidden.js``.
    """
    stem, _ = os.path.splitext(path.name)
    return path.with_name(stem + extension)


@dataclass(frozen=True)
class SourceFile:
    """A file moving through the transform.

    Attributes:
        path: Location of the file (absolute or relative to the CWD)
        base: Directory used to compute the file's relative path
        contents: Raw bytes, an open binary stream, or None
    """

    path: Path
    base: Path
    contents: bytes | BinaryIO | None = None

    @classmethod
    def from_path(cls, path: Path, base: Path) -> SourceFile:
        """Read a file fully into a buffered SourceFile."""
        return cls(path=path, base=base, contents=path.read_bytes())

    @property
    def content_kind(self) -> ContentKind:
        if self.contents is None:
            return ContentKind.NULL
        if isinstance(self.contents, bytes | bytearray | memoryview):
            return ContentKind.BUFFER
        return ContentKind.STREAM

    def is_buffer(self) -> bool:
        return self.content_kind is ContentKind.BUFFER

    def is_stream(self) -> bool:
        return self.content_kind is ContentKind.STREAM

    def is_null(self) -> bool:
        return self.content_kind is ContentKind.NULL

    @property
    def relative_path(self) -> str:
        """Path relative to base, using the platform separator."""
        return os.path.relpath(self.path, self.base)

    def text(self, encoding: str = "utf-8") -> str:
        """Decode buffered contents. Undecodable bytes become U+FFFD.

        Raises:
            TypeError: If contents are not a buffer.
        """
        if not self.is_buffer():
            raise TypeError(f"Cannot decode {self.content_kind.value} contents of {self.path}")
        assert isinstance(self.contents, bytes | bytearray | memoryview)
        return bytes(self.contents).decode(encoding, errors="replace")

    def with_contents(self, contents: bytes | BinaryIO | None) -> SourceFile:
        return replace(self, contents=contents)

    def with_extension(self, extension: str = SCRIPT_EXTENSION) -> SourceFile:
        return replace(self, path=replace_extension(self.path, extension))
