# src/ngjson2js/engine/__init__.py
"""Build engine: runs transforms over files.

- run_with_callback: per-file completion-callback adapter
- BuildPipeline: directory-to-directory build with a run summary
- discover_source_files: glob-based source discovery

Example:
    from ngjson2js.engine import BuildPipeline, discover_source_files

    pipeline = BuildPipeline(transform, Path("build/js"))
    summary = pipeline.run(discover_source_files(Path("app/data"), ["**/*.json"]))
"""

from ngjson2js.engine.callbacks import FileCallback, run_with_callback
from ngjson2js.engine.pipeline import BuildPipeline, BuildSummary, FileFailure, discover_source_files

__all__ = [
    "BuildPipeline",
    "BuildSummary",
    "FileCallback",
    "FileFailure",
    "discover_source_files",
    "run_with_callback",
]
