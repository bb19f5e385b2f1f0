# tests/engine/test_callbacks.py
"""Tests for the completion-callback adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from ngjson2js.contracts import SourceFile, StreamingNotSupportedError
from ngjson2js.engine import run_with_callback
from ngjson2js.plugins.context import PluginContext
from ngjson2js.plugins.transforms.ng_json2js import NgJson2Js

if TYPE_CHECKING:
    from tests.conftest import FileFactory


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[Exception | None, SourceFile | None]] = []

    def __call__(self, error: Exception | None, file: SourceFile | None) -> None:
        self.calls.append((error, file))


class TestRunWithCallback:
    def test_success_calls_back_with_output(self, make_file: FileFactory, ctx: PluginContext) -> None:
        recorder = _Recorder()

        run_with_callback(NgJson2Js({}), make_file("a.json", "{}"), recorder, ctx)

        assert len(recorder.calls) == 1
        error, file = recorder.calls[0]
        assert error is None
        assert file is not None
        assert file.path.name == "a.js"

    def test_null_file_called_back_unchanged(self, make_file: FileFactory, ctx: PluginContext) -> None:
        recorder = _Recorder()
        source = make_file("dir")

        run_with_callback(NgJson2Js({}), source, recorder, ctx)

        assert recorder.calls == [(None, source)]

    def test_stream_calls_back_with_error_only(self, make_file: FileFactory, ctx: PluginContext) -> None:
        recorder = _Recorder()

        run_with_callback(NgJson2Js({}), make_file("a.json", "{}", stream=True), recorder, ctx)

        assert len(recorder.calls) == 1
        error, file = recorder.calls[0]
        assert isinstance(error, StreamingNotSupportedError)
        assert file is None

    def test_invalid_json_is_not_an_error(self, make_file: FileFactory) -> None:
        recorder = _Recorder()

        run_with_callback(NgJson2Js({}), make_file("bad.json", "{"), recorder)

        error, file = recorder.calls[0]
        assert error is None
        assert file is not None
        assert file.contents == b'/* Invalid JSON syntax in "bad.json", skipping content. */\n'

    def test_transform_bug_propagates_without_callback(self, make_file: FileFactory) -> None:
        recorder = _Recorder()

        class Broken(NgJson2Js):
            def process(self, file, ctx):  # type: ignore[no-untyped-def]
                raise RuntimeError("bug")

        with pytest.raises(RuntimeError, match="bug"):
            run_with_callback(Broken({}), make_file("a.json", "{}"), recorder)

        assert recorder.calls == []
