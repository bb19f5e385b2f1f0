# src/ngjson2js/engine/pipeline.py
"""Directory-to-directory build runner.

Discovers source files, runs one transform over each, and writes the
outputs under an output directory at the same relative location:

    source_dir/a/b.json  ->  output_dir/a/b.js

This is the only part of ngjson2js that touches the filesystem. Each file
is read fully into memory before it is transformed. A failure on one file,
whether reading it, transforming it or writing its output, is recorded in
the summary and does not stop the run.

Example:
    transform = manager.create_transform("ng_json2js", {"prefix": "/data/"})
    pipeline = BuildPipeline(transform, Path("build/js"))
    summary = pipeline.run(discover_source_files(Path("app/data"), ["**/*.json"]))
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ngjson2js.contracts import SourceFile, TransformResult
from ngjson2js.core.logging import get_logger, run_context
from ngjson2js.plugins.base import BaseTransform
from ngjson2js.plugins.context import PluginContext

logger = get_logger(__name__)


@dataclass(frozen=True)
class FileFailure:
    """A file that could not be read, transformed or written."""

    path: Path
    error_type: str
    message: str

    @classmethod
    def from_exception(cls, path: Path, error: Exception) -> FileFailure:
        return cls(path=path, error_type=type(error).__name__, message=str(error))


@dataclass
class BuildSummary:
    """Outcome counts and written paths for one run."""

    run_id: str
    generated: int = 0
    skipped_invalid_json: int = 0
    passthrough: int = 0
    failures: list[FileFailure] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def total(self) -> int:
        return self.generated + self.skipped_invalid_json + self.passthrough + self.failed

    @property
    def ok(self) -> bool:
        return not self.failures

    def record(self, result: TransformResult) -> None:
        if not result.is_success:
            assert result.exception is not None
            assert result.reason is not None
            self.failures.append(FileFailure.from_exception(Path(result.reason["path"]), result.exception))
            return

        action = result.action
        if action == "generated":
            self.generated += 1
        elif action == "skipped_invalid_json":
            self.skipped_invalid_json += 1
        elif action == "passthrough":
            self.passthrough += 1
        else:
            raise ValueError(f"Unknown transform action: {action!r}")


def discover_source_files(source_dir: Path, include: Sequence[str]) -> Iterator[SourceFile | FileFailure]:
    """Yield buffered SourceFiles matching include globs under source_dir.

    Files come out in sorted path order, each once even when several
    patterns match it. Matched directories yield contentless SourceFiles.
    A match that cannot be read (broken symlink, permissions) yields a
    FileFailure in its place so the run can go on.

    Raises:
        FileNotFoundError: If source_dir does not exist or is not a directory
    """
    if not source_dir.is_dir():
        raise FileNotFoundError(f"Source directory not found: {source_dir}")

    matches: set[Path] = set()
    for pattern in include:
        matches.update(source_dir.glob(pattern))

    for path in sorted(matches):
        if path.is_dir():
            yield SourceFile(path=path, base=source_dir, contents=None)
            continue
        try:
            source = SourceFile.from_path(path, base=source_dir)
        except OSError as e:
            yield FileFailure.from_exception(path, e)
            continue
        yield source


class BuildPipeline:
    """Run a transform over files and write the results."""

    def __init__(self, transform: BaseTransform, output_dir: Path, *, ctx: PluginContext | None = None) -> None:
        self._transform = transform
        self._output_dir = output_dir
        self._ctx = ctx if ctx is not None else PluginContext(node_id=transform.name)

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def output_path_for(self, file: SourceFile) -> Path:
        """Location under output_dir mirroring file's path relative to its base."""
        return self._output_dir / file.relative_path

    def _write(self, file: SourceFile, source: SourceFile) -> Path | None:
        destination = self.output_path_for(file)
        if file.contents is None:
            if source.path.is_dir():
                destination.mkdir(parents=True, exist_ok=True)
            return None
        assert isinstance(file.contents, bytes | bytearray | memoryview)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(bytes(file.contents))
        return destination

    def _fail(self, summary: BuildSummary, failure: FileFailure) -> None:
        summary.failures.append(failure)
        logger.warning("File failed", path=str(failure.path), error_type=failure.error_type, error=failure.message)

    def run(self, files: Iterable[SourceFile | FileFailure]) -> BuildSummary:
        """Transform and write every file.

        FileFailure items (from discovery) are recorded as they are.

        Returns:
            BuildSummary with per-action counts, failures and written paths.
        """
        summary = BuildSummary(run_id=self._ctx.run_id)
        started = time.perf_counter()

        with run_context(run_id=self._ctx.run_id, plugin=self._transform.name):
            logger.info("Build started", output_dir=str(self._output_dir))
            try:
                for source in files:
                    if isinstance(source, FileFailure):
                        self._fail(summary, source)
                        continue

                    result = self._transform.process(source, self._ctx)
                    if not result.is_success:
                        summary.record(result)
                        logger.warning("File failed", path=str(source.path), error=str(result.exception))
                        continue

                    assert result.file is not None
                    try:
                        written = self._write(result.file, source)
                    except OSError as e:
                        self._fail(summary, FileFailure.from_exception(source.path, e))
                        continue
                    summary.record(result)
                    if written is not None:
                        summary.written.append(written)
            finally:
                self._transform.close()
                summary.duration_ms = (time.perf_counter() - started) * 1000

            logger.info(
                "Build finished",
                generated=summary.generated,
                skipped_invalid_json=summary.skipped_invalid_json,
                passthrough=summary.passthrough,
                failed=summary.failed,
                duration_ms=round(summary.duration_ms, 2),
            )
        return summary
