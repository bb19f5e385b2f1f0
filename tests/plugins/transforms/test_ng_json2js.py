# tests/plugins/transforms/test_ng_json2js.py
"""Tests for the ng_json2js transform plugin."""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from ngjson2js.contracts import SourceFile, StreamingNotSupportedError
from ngjson2js.plugins.config_base import PluginConfigError
from ngjson2js.plugins.context import PluginContext
from ngjson2js.plugins.transforms.ng_json2js import NgJson2Js, NgJson2JsConfig

if TYPE_CHECKING:
    from tests.conftest import FileFactory


def _script(module: str, url: str, content: str) -> str:
    return (
        "(function(module) {\n"
        "  try {\n"
        f"    module = angular.module('{module}');\n"
        "  } catch (e) {\n"
        f"    module = angular.module('{module}', []);\n"
        "  }\n"
        f"  module.run(['$cacheFactory', function($cacheFactory) {{\n"
        f"    ($cacheFactory.get('{module}') || $cacheFactory('{module}')).put('{url}',\n"
        f"      {content});\n"
        "  }]);\n"
        "})();\n"
    )


class TestNgJson2JsConfig:
    def test_defaults(self) -> None:
        cfg = NgJson2JsConfig.from_dict({})

        assert cfg.module_name == "templates"
        assert cfg.strip_prefix is None
        assert cfg.prefix is None
        assert cfg.base is None

    def test_camel_case_aliases(self) -> None:
        cfg = NgJson2JsConfig.from_dict({"moduleName": "appData", "stripPrefix": "fixtures/"})

        assert cfg.module_name == "appData"
        assert cfg.strip_prefix == "fixtures/"

    def test_snake_case_names(self) -> None:
        cfg = NgJson2JsConfig.from_dict({"module_name": "appData", "strip_prefix": "fixtures/"})

        assert cfg.module_name == "appData"
        assert cfg.strip_prefix == "fixtures/"

    @pytest.mark.parametrize("value", ["", None])
    def test_empty_module_name_falls_back(self, value: str | None) -> None:
        cfg = NgJson2JsConfig.from_dict({"moduleName": value})

        assert cfg.module_name == "templates"

    def test_unknown_option_rejected(self) -> None:
        with pytest.raises(PluginConfigError):
            NgJson2JsConfig.from_dict({"module": "x"})


class TestNgJson2JsProcess:
    def test_generates_script(self, make_file: FileFactory, ctx: PluginContext) -> None:
        transform = NgJson2Js({})

        result = transform.process(make_file("data/a.json", '{"a": 1, "b": [2,3]}'), ctx)

        assert result.is_success
        assert result.action == "generated"
        assert result.success_reason == {"action": "generated", "url": "data/a.json"}
        assert result.file is not None
        assert result.file.contents == _script("templates", "data/a.json", '{"a":1,"b":[2,3]}').encode()

    def test_output_has_js_extension(self, make_file: FileFactory, ctx: PluginContext, tmp_path: Path) -> None:
        result = NgJson2Js({}).process(make_file("data/a.json", "{}"), ctx)

        assert result.file is not None
        assert result.file.path == tmp_path / "data" / "a.js"
        assert result.file.base == tmp_path

    @pytest.mark.parametrize(("name", "expected"), [("a.data", "a.js"), ("a", "a.js"), ("a.b.json", "a.b.js")])
    def test_any_input_extension_replaced(self, make_file: FileFactory, ctx: PluginContext, name: str, expected: str) -> None:
        result = NgJson2Js({}).process(make_file(name, "1"), ctx)

        assert result.file is not None
        assert result.file.path.name == expected

    def test_cache_key_keeps_original_extension(self, make_file: FileFactory, ctx: PluginContext) -> None:
        result = NgJson2Js({}).process(make_file("a.json", "{}"), ctx)

        assert result.file is not None
        assert b".put('a.json'," in result.file.contents  # type: ignore[operator]

    def test_input_not_mutated(self, make_file: FileFactory, ctx: PluginContext) -> None:
        source = make_file("a.json", '{"a": 1}')

        NgJson2Js({}).process(source, ctx)

        assert source.contents == b'{"a": 1}'
        assert source.path.name == "a.json"

    def test_module_name_option(self, make_file: FileFactory, ctx: PluginContext) -> None:
        result = NgJson2Js({"moduleName": "appData"}).process(make_file("a.json", "[]"), ctx)

        assert result.file is not None
        assert result.file.contents == _script("appData", "a.json", "[]").encode()

    def test_empty_module_name_uses_default(self, make_file: FileFactory, ctx: PluginContext) -> None:
        result = NgJson2Js({"moduleName": ""}).process(make_file("a.json", "[]"), ctx)

        assert result.file is not None
        assert result.file.contents == _script("templates", "a.json", "[]").encode()

    def test_strip_prefix_and_prefix(self, make_file: FileFactory, ctx: PluginContext) -> None:
        transform = NgJson2Js({"stripPrefix": "fixtures/", "prefix": "/api/"})

        result = transform.process(make_file("fixtures/users.json", "[]"), ctx)

        assert result.success_reason == {"action": "generated", "url": "/api/users.json"}

    def test_strip_prefix_only_when_leading(self, make_file: FileFactory, ctx: PluginContext) -> None:
        transform = NgJson2Js({"stripPrefix": "fixtures/"})

        result = transform.process(make_file("data/fixtures/users.json", "[]"), ctx)

        assert result.success_reason == {"action": "generated", "url": "data/fixtures/users.json"}

    def test_base_override(self, make_file: FileFactory, ctx: PluginContext, tmp_path: Path) -> None:
        transform = NgJson2Js({"base": str(tmp_path / "data")})

        result = transform.process(make_file("data/nested/a.json", "{}"), ctx)

        assert result.success_reason == {"action": "generated", "url": "nested/a.json"}

    def test_invalid_json_becomes_comment(self, make_file: FileFactory, ctx: PluginContext) -> None:
        result = NgJson2Js({}).process(make_file("data/bad.json", "{not json"), ctx)

        assert result.is_success
        assert result.action == "skipped_invalid_json"
        assert result.file is not None
        assert result.file.path.name == "bad.js"
        assert result.file.contents == b'/* Invalid JSON syntax in "data/bad.json", skipping content. */\n'

    def test_empty_file_is_invalid_json(self, make_file: FileFactory, ctx: PluginContext) -> None:
        result = NgJson2Js({}).process(make_file("empty.json", ""), ctx)

        assert result.action == "skipped_invalid_json"

    def test_json_null_is_valid(self, make_file: FileFactory, ctx: PluginContext) -> None:
        result = NgJson2Js({}).process(make_file("null.json", "null"), ctx)

        assert result.action == "generated"
        assert result.file is not None
        assert result.file.contents == _script("templates", "null.json", "null").encode()

    def test_unicode_preserved(self, make_file: FileFactory, ctx: PluginContext) -> None:
        result = NgJson2Js({}).process(make_file("i18n.json", '{"city": "Zürich"}'), ctx)

        assert result.file is not None
        assert '{"city":"Zürich"}' in result.file.contents.decode("utf-8")  # type: ignore[union-attr]

    def test_stream_rejected(self, make_file: FileFactory, ctx: PluginContext) -> None:
        result = NgJson2Js({}).process(make_file("a.json", "{}", stream=True), ctx)

        assert not result.is_success
        assert result.file is None
        assert isinstance(result.exception, StreamingNotSupportedError)
        assert str(result.exception) == "ng_json2js: Streaming not supported"
        assert result.reason is not None
        assert result.reason["reason"] == "streaming_not_supported"

    def test_stream_rejection_logged(self, tmp_path: Path, ctx: PluginContext, capsys: pytest.CaptureFixture[str]) -> None:
        from ngjson2js.core.logging import configure_logging

        configure_logging(json_output=True, level="INFO")
        source = SourceFile(path=tmp_path / "a.json", base=tmp_path, contents=io.BytesIO(b"{}"))

        NgJson2Js({}).process(source, ctx)

        data = json.loads(capsys.readouterr().err.strip().split("\n")[-1])
        assert data["event"] == "Streaming not supported"
        assert data["run_id"] == "test-run"
        assert data["node_id"] == "test-node"

    def test_null_contents_pass_through(self, make_file: FileFactory, ctx: PluginContext) -> None:
        source = make_file("somedir")

        result = NgJson2Js({}).process(source, ctx)

        assert result.is_success
        assert result.action == "passthrough"
        assert result.file is source

    def test_files_processed_independently(self, make_file: FileFactory, ctx: PluginContext) -> None:
        transform = NgJson2Js({})

        first = transform.process(make_file("bad.json", "{"), ctx)
        second = transform.process(make_file("good.json", "{}"), ctx)

        assert first.action == "skipped_invalid_json"
        assert second.action == "generated"
