# src/ngjson2js/plugins/manager.py
"""Plugin manager for discovery, registration, and lookup.

Uses pluggy for hook-based plugin registration.
"""

from dataclasses import dataclass
from typing import Any

import pluggy

from ngjson2js.plugins.base import BaseTransform
from ngjson2js.plugins.hookspecs import PROJECT_NAME, NgJson2JsTransformSpec


@dataclass(frozen=True)
class PluginSpec:
    """Registration record for a plugin."""

    name: str
    version: str
    description: str

    @classmethod
    def from_plugin(cls, plugin_cls: type[BaseTransform]) -> "PluginSpec":
        from ngjson2js.plugins.discovery import get_plugin_description

        return cls(
            name=plugin_cls.name,
            version=plugin_cls.plugin_version,
            description=get_plugin_description(plugin_cls),
        )


class PluginManager:
    """Manages plugin discovery, registration, and lookup.

    Usage:
        manager = PluginManager()
        manager.register_builtin_plugins()

        transform_cls = manager.get_transform_by_name("ng_json2js")
        transform = transform_cls({"module_name": "templates"})
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(NgJson2JsTransformSpec)

        # Map name to plugin class for duplicate detection
        self._transforms: dict[str, type[BaseTransform]] = {}

    def register_builtin_plugins(self) -> None:
        """Discover and register all built-in plugins.

        Call this once at startup to make built-in plugins discoverable.
        """
        from ngjson2js.plugins.discovery import create_dynamic_hookimpl, discover_transforms

        self.register(create_dynamic_hookimpl(discover_transforms(), "ngjson2js_get_transforms"))

    def register(self, plugin: Any) -> None:
        """Register a plugin.

        Args:
            plugin: Plugin instance implementing hook methods
        """
        self._pm.register(plugin)
        try:
            self._refresh_caches()
        except ValueError:
            # Leave the manager as it was before the bad registration
            self._pm.unregister(plugin)
            raise

    def _refresh_caches(self) -> None:
        """Refresh plugin caches from hooks.

        Raises:
            ValueError: If a plugin with the same name is already registered
        """
        new_transforms: dict[str, type[BaseTransform]] = {}

        for transforms in self._pm.hook.ngjson2js_get_transforms():
            for cls in transforms:
                name = cls.name
                if name in new_transforms:
                    raise ValueError(f"Duplicate transform plugin name: '{name}'. Already registered by {new_transforms[name].__name__}")
                new_transforms[name] = cls

        self._transforms = new_transforms

    def get_transforms(self) -> list[type[BaseTransform]]:
        """Get all registered transform plugins."""
        return list(self._transforms.values())

    def get_transform_by_name(self, name: str) -> type[BaseTransform] | None:
        """Get transform plugin by name."""
        return self._transforms.get(name)

    def get_specs(self) -> list[PluginSpec]:
        """Registration records for all transforms, sorted by name."""
        return [PluginSpec.from_plugin(cls) for cls in sorted(self._transforms.values(), key=lambda c: c.name)]

    def create_transform(self, name: str, options: dict[str, Any]) -> BaseTransform:
        """Instantiate a registered transform with options.

        Raises:
            ValueError: If no transform has that name
            PluginConfigError: If the options are invalid
        """
        plugin_cls = self.get_transform_by_name(name)
        if plugin_cls is None:
            available = ", ".join(sorted(self._transforms)) or "(none)"
            raise ValueError(f"Unknown transform plugin '{name}'. Available: {available}")
        return plugin_cls(options)
