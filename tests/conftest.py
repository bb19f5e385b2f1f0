# tests/conftest.py
"""Shared test fixtures and helpers.

Fixtures:
- ctx: a PluginContext with a fixed run id
- make_file: build buffered/streamed/contentless SourceFiles under tmp_path
- source_tree: a small directory of JSON sources on disk

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import io
import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog
from hypothesis import Phase, Verbosity, settings

from ngjson2js.contracts import SourceFile
from ngjson2js.plugins.context import PluginContext

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo configure_logging() so handlers never outlive a captured stream."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def ctx() -> PluginContext:
    """Create a minimal plugin context for testing."""
    return PluginContext(run_id="test-run", node_id="test-node")


FileFactory = Callable[..., SourceFile]


@pytest.fixture
def make_file(tmp_path: Path) -> FileFactory:
    """Factory for SourceFiles rooted at tmp_path.

    make_file("a/b.json", '{"x": 1}')            -> buffered
    make_file("a/b.json", '{"x": 1}', stream=True) -> streamed
    make_file("a")                                -> no contents
    """

    def _make(relative: str, text: str | None = None, *, stream: bool = False) -> SourceFile:
        path = tmp_path / relative
        if text is None:
            return SourceFile(path=path, base=tmp_path, contents=None)
        data = text.encode("utf-8")
        if stream:
            return SourceFile(path=path, base=tmp_path, contents=io.BytesIO(data))
        return SourceFile(path=path, base=tmp_path, contents=data)

    return _make


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """A source directory with valid, nested and invalid JSON files.

    src/
      config.json            valid
      fixtures/users.json    valid, nested
      broken.json            invalid
      notes.txt              not matched by the default include
    """
    src = tmp_path / "src"
    (src / "fixtures").mkdir(parents=True)
    (src / "config.json").write_text('{"debug": true, "level": 3}', encoding="utf-8")
    (src / "fixtures" / "users.json").write_text('[{"name": "Ada"}, {"name": "Grace"}]', encoding="utf-8")
    (src / "broken.json").write_text("{not json", encoding="utf-8")
    (src / "notes.txt").write_text("ignore me", encoding="utf-8")
    return src
