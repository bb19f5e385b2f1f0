# src/ngjson2js/core/config.py
"""Build configuration.

Settings are validated by Pydantic and frozen after construction. They can
be built directly or loaded from YAML with environment overrides:

    source_dir: app/data
    output_dir: build/js
    include:
      - "**/*.json"
    transform:
      module_name: appData
      strip_prefix: fixtures/
      prefix: /data/

Relative source_dir, output_dir and transform.base values in a settings
file are resolved against the directory containing that file.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

__all__ = [
    "ENV_PREFIX",
    "BuildSettings",
    "load_settings",
    "resolve_config",
]

ENV_PREFIX = "NGJSON2JS"


class BuildSettings(BaseModel):
    """Top-level build configuration.

    Plugin options under `transform` are validated by the plugin's own
    config class when the plugin is instantiated, not here.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    source_dir: Path = Field(description="Directory scanned for JSON sources; also the default base for cache keys")
    output_dir: Path = Field(description="Directory generated scripts are written to")
    include: list[str] = Field(
        default_factory=lambda: ["**/*.json"],
        description="Glob patterns, relative to source_dir, selecting input files",
    )
    plugin: str = Field(default="ng_json2js", description="Name of the transform plugin to run")
    transform: dict[str, Any] = Field(
        default_factory=dict,
        description="Options passed to the transform plugin",
    )

    @field_validator("include")
    @classmethod
    def validate_include_not_empty(cls, v: list[str]) -> list[str]:
        patterns = [p.strip() for p in v]
        if not patterns or any(not p for p in patterns):
            raise ValueError("include must contain at least one non-empty glob pattern")
        return patterns

    @field_validator("plugin")
    @classmethod
    def validate_plugin_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("plugin cannot be empty")
        return v.strip()


_OPTION_ALIASES = {
    "modulename": "module_name",
    "stripprefix": "strip_prefix",
}


def _normalize_option_key(key: str) -> str:
    lowered = key.lower()
    return _OPTION_ALIASES.get(lowered, lowered)


def _resolve_relative(value: Any, root: Path) -> Any:
    if isinstance(value, str | Path) and not Path(value).is_absolute():
        return root / value
    return value


def load_settings(config_path: Path) -> BuildSettings:
    """Load settings from a YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (NGJSON2JS_*) - highest priority
    2. Config file
    3. Defaults from the Pydantic model - lowest priority

    Nested keys use a double underscore: NGJSON2JS_TRANSFORM__PREFIX=static/

    Raises:
        FileNotFoundError: If the config file doesn't exist
        pydantic.ValidationError: If the configuration is invalid
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix=ENV_PREFIX,
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; Pydantic fields are lowercase
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    # Env overrides may arrive in any case (NGJSON2JS_TRANSFORM__MODULENAME)
    if isinstance(raw_config.get("transform"), dict):
        raw_config["transform"] = {_normalize_option_key(k): v for k, v in raw_config["transform"].items()}

    root = config_path.resolve().parent
    for key in ("source_dir", "output_dir"):
        if key in raw_config:
            raw_config[key] = _resolve_relative(raw_config[key], root)
    transform = raw_config.get("transform")
    if isinstance(transform, dict) and transform.get("base") is not None:
        transform["base"] = str(_resolve_relative(transform["base"], root))

    return BuildSettings(**raw_config)


def resolve_config(settings: BuildSettings) -> dict[str, Any]:
    """Convert validated settings to a JSON-safe dict (explicit + defaults)."""
    return settings.model_dump(mode="json")
