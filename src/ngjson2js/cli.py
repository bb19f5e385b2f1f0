"""ngjson2js Command Line Interface.

Entry point for the ngjson2js CLI tool.
"""

from __future__ import annotations

import json
from pathlib import Path
from enum import Enum
from typing import TYPE_CHECKING, Any

import typer
from pydantic import ValidationError

from ngjson2js import __version__
from ngjson2js.core.config import BuildSettings, load_settings, resolve_config

if TYPE_CHECKING:
    from ngjson2js.engine import BuildSummary
    from ngjson2js.plugins.base import BaseTransform
    from ngjson2js.plugins.manager import PluginManager

__all__ = [
    "app",
    "load_settings",  # Re-exported from config for convenience
]

# Module-level singleton for plugin manager
_plugin_manager_cache: PluginManager | None = None


def _get_plugin_manager() -> PluginManager:
    """Get initialized plugin manager (singleton)."""
    global _plugin_manager_cache

    from ngjson2js.plugins.manager import PluginManager

    if _plugin_manager_cache is None:
        manager = PluginManager()
        manager.register_builtin_plugins()
        _plugin_manager_cache = manager
    return _plugin_manager_cache


class OutputFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


app = typer.Typer(
    name="ngjson2js",
    help="Convert JSON files into AngularJS $cacheFactory preload scripts.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"ngjson2js version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from a .env file.

    Raises:
        typer.Exit: If an explicit env_file path doesn't exist.
    """
    from dotenv import load_dotenv

    if env_file is not None:
        if not env_file.exists():
            typer.secho(f"Error: .env file not found: {env_file}", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)
        return load_dotenv(env_file, override=False)

    return load_dotenv(override=False)


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """ngjson2js: JSON to AngularJS cache preload scripts."""
    from ngjson2js.core.logging import configure_logging

    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "INFO")

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho(
            "Warning: --env-file ignored because --no-dotenv is set.",
            fg=typer.colors.YELLOW,
            err=True,
        )


def _format_validation_error(
    title: str,
    message: str,
    hint: str | None = None,
    details: list[str] | None = None,
) -> None:
    """Display a formatted validation error with optional hint and details."""
    from rich.console import Console
    from rich.panel import Panel
    from rich.text import Text

    console = Console(stderr=True)

    content = Text()
    content.append(message, style="white")

    if details:
        content.append("\n\n")
        for detail in details:
            content.append(f"  • {detail}\n", style="dim")

    if hint:
        content.append("\n")
        content.append("Hint: ", style="yellow bold")
        content.append(hint, style="yellow")

    console.print(Panel(content, title=f"[red bold]{title}[/]", border_style="red", padding=(0, 1)))


def _validation_details(e: ValidationError) -> list[str]:
    return [f"{'.'.join(str(x) for x in error['loc'])}: {error['msg']}" for error in e.errors()]


def _load_settings_or_exit(settings_path: Path) -> BuildSettings:
    try:
        return load_settings(settings_path)
    except FileNotFoundError:
        _format_validation_error(
            title="File Not Found",
            message=f"Settings file does not exist: {settings_path}",
            hint="Check the path and ensure the file exists.",
        )
        raise typer.Exit(1) from None
    except ValidationError as e:
        _format_validation_error(
            title="Configuration Validation Failed",
            message=f"Invalid settings in {settings_path.name}",
            details=_validation_details(e),
        )
        raise typer.Exit(1) from None


def _merge_settings(
    base: BuildSettings | None,
    *,
    source_dir: Path | None,
    output_dir: Path | None,
    include: list[str] | None,
    transform_overrides: dict[str, Any],
) -> BuildSettings:
    """Apply command-line values on top of (optional) file settings.

    Raises:
        ValidationError: If the merged settings are invalid
    """
    raw: dict[str, Any] = base.model_dump() if base is not None else {}
    if source_dir is not None:
        raw["source_dir"] = source_dir
    if output_dir is not None:
        raw["output_dir"] = output_dir
    if include:
        raw["include"] = include
    raw["transform"] = {**raw.get("transform", {}), **transform_overrides}
    return BuildSettings(**raw)


def _instantiate_transform(settings: BuildSettings) -> BaseTransform:
    from ngjson2js.plugins.config_base import PluginConfigError

    try:
        return _get_plugin_manager().create_transform(settings.plugin, settings.transform)
    except (PluginConfigError, ValueError) as e:
        _format_validation_error(
            title="Plugin Configuration Error",
            message=str(e),
            hint="Run 'ngjson2js plugins list' to see available transforms.",
        )
        raise typer.Exit(1) from None


def _print_summary(summary: BuildSummary, output_format: OutputFormat) -> None:
    if output_format is OutputFormat.JSON:
        typer.echo(
            json.dumps(
                {
                    "event": "build_finished",
                    "run_id": summary.run_id,
                    "generated": summary.generated,
                    "skipped_invalid_json": summary.skipped_invalid_json,
                    "passthrough": summary.passthrough,
                    "failed": summary.failed,
                    "failures": [{"path": str(f.path), "error_type": f.error_type, "message": f.message} for f in summary.failures],
                    "written": [str(p) for p in summary.written],
                }
            )
        )
        return

    typer.echo(f"Generated {summary.generated} script(s) in {summary.duration_ms:.0f}ms")
    if summary.skipped_invalid_json:
        typer.secho(f"  Skipped (invalid JSON): {summary.skipped_invalid_json}", fg=typer.colors.YELLOW)
    if summary.passthrough:
        typer.echo(f"  Passed through: {summary.passthrough}")
    for failure in summary.failures:
        typer.secho(f"  Failed: {failure.path}: {failure.message}", fg=typer.colors.RED, err=True)


@app.command()
def build(
    source_dir: Path | None = typer.Argument(
        None,
        help="Directory containing JSON sources (overrides settings).",
    ),
    output_dir: Path | None = typer.Option(
        None,
        "--out",
        "-o",
        help="Directory to write generated scripts to (overrides settings).",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    include: list[str] | None = typer.Option(
        None,
        "--include",
        "-i",
        help="Glob pattern selecting sources, relative to SOURCE_DIR. Repeatable.",
    ),
    module_name: str | None = typer.Option(
        None,
        "--module-name",
        "-m",
        help="AngularJS module and cache name (default: templates).",
    ),
    strip_prefix: str | None = typer.Option(
        None,
        "--strip-prefix",
        help="Prefix removed from each file's relative path.",
    ),
    prefix: str | None = typer.Option(
        None,
        "--prefix",
        help="Prefix added to the start of each cache key.",
    ),
    base: Path | None = typer.Option(
        None,
        "--base",
        help="Directory cache keys are relative to (default: SOURCE_DIR).",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.CONSOLE,
        "--format",
        "-f",
        help="Output format: 'console' (human-readable) or 'json' (structured JSON).",
    ),
) -> None:
    """Convert JSON files into preload scripts."""
    from ngjson2js.engine import BuildPipeline, discover_source_files

    file_settings = _load_settings_or_exit(settings.expanduser()) if settings is not None else None

    overrides: dict[str, Any] = {}
    if module_name is not None:
        overrides["module_name"] = module_name
    if strip_prefix is not None:
        overrides["strip_prefix"] = strip_prefix
    if prefix is not None:
        overrides["prefix"] = prefix
    if base is not None:
        overrides["base"] = str(base)

    try:
        config = _merge_settings(
            file_settings,
            source_dir=source_dir,
            output_dir=output_dir,
            include=include,
            transform_overrides=overrides,
        )
    except ValidationError as e:
        _format_validation_error(
            title="Configuration Validation Failed",
            message="Missing or invalid build settings",
            details=_validation_details(e),
            hint="Pass SOURCE_DIR and --out, or a settings file with source_dir and output_dir.",
        )
        raise typer.Exit(1) from None

    transform = _instantiate_transform(config)

    try:
        files = discover_source_files(config.source_dir, config.include)
        summary = BuildPipeline(transform, config.output_dir).run(files)
    except OSError as e:
        typer.echo(f"Error during build: {e}", err=True)
        raise typer.Exit(1) from None

    _print_summary(summary, output_format)
    if not summary.ok:
        raise typer.Exit(1)


@app.command()
def validate(
    settings: Path = typer.Option(
        ...,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
) -> None:
    """Validate build configuration without running."""
    config = _load_settings_or_exit(settings.expanduser())
    transform = _instantiate_transform(config)

    typer.echo("Configuration valid.")
    typer.echo(f"  Source: {config.source_dir}")
    typer.echo(f"  Output: {config.output_dir}")
    typer.echo(f"  Transform: {transform.name}")
    typer.echo(json.dumps(resolve_config(config)["transform"], sort_keys=True))


# === Plugins subcommand ===

plugins_app = typer.Typer(help="Plugin management commands.")
app.add_typer(plugins_app, name="plugins")


@plugins_app.command("list")
def plugins_list() -> None:
    """List available plugins."""
    specs = _get_plugin_manager().get_specs()

    typer.echo("\nTRANSFORMS:")
    if not specs:
        typer.echo("  (none available)")
    for spec in specs:
        typer.echo(f"  {spec.name:20} - {spec.description}")
    typer.echo()


if __name__ == "__main__":
    app()
