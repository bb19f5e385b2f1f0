"""AngularJS JSON preload transform plugin.

Converts JSON files into JavaScript files containing an AngularJS module
that puts the JSON document into the $cacheFactory when the module runs.

Per-file flow:
    received -> classified (stream / buffer / null) -> transformed or
    passed through -> returned to the caller

Invalid JSON is not an error: the output becomes a one-line comment and
processing continues.
"""

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator

from ngjson2js.contracts import (
    SCRIPT_EXTENSION,
    ContentKind,
    SourceFile,
    StreamingNotSupportedError,
    TransformAction,
    TransformResult,
)
from ngjson2js.core.codegen import DEFAULT_MODULE_NAME, build_module_declaration
from ngjson2js.core.urls import derive_file_url
from ngjson2js.plugins.base import BaseTransform
from ngjson2js.plugins.config_base import PluginConfig
from ngjson2js.plugins.context import PluginContext


class NgJson2JsConfig(PluginConfig):
    """Configuration for the ng_json2js transform.

    Accepts both snake_case names and the camelCase names used by gulp
    build configs (moduleName, stripPrefix).
    """

    module_name: str = Field(
        default=DEFAULT_MODULE_NAME,
        alias="moduleName",
        description="Name of the generated AngularJS module and of its cache",
    )
    strip_prefix: str | None = Field(
        default=None,
        alias="stripPrefix",
        description="Literal prefix removed from the relative path when present",
    )
    prefix: str | None = Field(
        default=None,
        description="Literal string prepended to the cache key (include any separator)",
    )
    base: Path | None = Field(
        default=None,
        description="Directory cache keys are relative to (default: each file's own base)",
    )

    @field_validator("module_name", mode="before")
    @classmethod
    def default_empty_module_name(cls, v: Any) -> Any:
        if v is None or v == "":
            return DEFAULT_MODULE_NAME
        return v


class NgJson2Js(BaseTransform):
    """Convert JSON files into AngularJS $cacheFactory preload scripts.

    Config options:
        module_name: Module and cache name (default: "templates")
        strip_prefix: Prefix removed from the file's relative path
        prefix: Prefix added to the start of the cache key
        base: Override for the directory cache keys are relative to

    Example config:
        plugin: ng_json2js
        transform:
          module_name: appData
          strip_prefix: fixtures/
          prefix: /api/
    """

    name = "ng_json2js"
    plugin_version = "1.0.0"

    def __init__(self, config: dict[str, Any]) -> None:
        super().__init__(config)
        self._config = NgJson2JsConfig.from_dict(config)

    @property
    def settings(self) -> NgJson2JsConfig:
        return self._config

    def file_url(self, file: SourceFile) -> str:
        """Cache key for file under this transform's options."""
        base = self._config.base if self._config.base is not None else file.base
        return derive_file_url(
            file.path,
            base,
            strip_prefix=self._config.strip_prefix,
            prefix=self._config.prefix,
        )

    def process(self, file: SourceFile, ctx: PluginContext) -> TransformResult:
        """Generate the preload script for one file.

        Args:
            file: Input file (not mutated)
            ctx: Plugin context

        Returns:
            Success with a new .js file, success with the unchanged file
            when there are no contents, or an error for streamed contents.
        """
        kind = file.content_kind

        if kind is ContentKind.STREAM:
            error = StreamingNotSupportedError(self.name)
            ctx.logger.error("Streaming not supported", path=str(file.path))
            return TransformResult.error(
                error,
                reason={"reason": "streaming_not_supported", "path": str(file.path), "message": str(error)},
            )

        if kind is ContentKind.NULL:
            return TransformResult.success(file, success_reason={"action": "passthrough"})

        url = self.file_url(file)
        declaration = build_module_declaration(url, file.text(), self._config.module_name)
        output = file.with_contents(declaration.script.encode("utf-8")).with_extension(SCRIPT_EXTENSION)

        action: TransformAction = "generated" if declaration.valid else "skipped_invalid_json"
        ctx.logger.debug("Generated script", path=str(output.path), url=url, action=action)
        return TransformResult.success(output, success_reason={"action": action, "url": url})
