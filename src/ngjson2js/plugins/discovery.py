# src/ngjson2js/plugins/discovery.py
"""Plugin discovery by package scanning.

Scans plugin packages for classes that:
1. Inherit from BaseTransform
2. Have a non-empty `name` class attribute
3. Are not abstract
"""

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType

logger = logging.getLogger(__name__)

# Packages scanned for built-in transforms (non-recursive)
TRANSFORM_PACKAGES: tuple[str, ...] = ("ngjson2js.plugins.transforms",)


def _discover_in_module(module: ModuleType, base_class: type) -> list[type]:
    discovered: list[type] = []
    for _, obj in inspect.getmembers(module, inspect.isclass):
        # Must be defined in this module (not imported)
        if obj.__module__ != module.__name__:
            continue
        if not issubclass(obj, base_class) or obj is base_class:
            continue
        if inspect.isabstract(obj):
            continue
        if not getattr(obj, "name", None):
            logger.warning("Class %s in %s has no/empty 'name' attribute - skipping", obj.__name__, module.__name__)
            continue
        discovered.append(obj)
    return discovered


def discover_plugins_in_package(package_name: str, base_class: type) -> list[type]:
    """Discover plugin classes in the modules of a package.

    Import errors are NOT caught: built-in plugins are our own code, and a
    broken module is a bug to surface immediately.
    """
    package = importlib.import_module(package_name)
    discovered: list[type] = []
    for module_info in sorted(pkgutil.iter_modules(package.__path__), key=lambda m: m.name):
        if module_info.ispkg or module_info.name.startswith("_"):
            continue
        module = importlib.import_module(f"{package_name}.{module_info.name}")
        found = _discover_in_module(module, base_class)
        logger.debug("Scanned %s: %d plugin(s)", module.__name__, len(found))
        discovered.extend(found)
    return discovered


def discover_transforms() -> list[type]:
    """Discover all built-in transform plugins.

    Raises:
        ValueError: If two transforms share a name.
    """
    from ngjson2js.plugins.base import BaseTransform

    all_discovered: list[type] = []
    seen: dict[str, type] = {}
    for package_name in TRANSFORM_PACKAGES:
        for cls in discover_plugins_in_package(package_name, BaseTransform):
            cls_name: str = cls.name  # type: ignore[attr-defined]
            if cls_name in seen:
                raise ValueError(
                    f"Duplicate transform plugin name '{cls_name}': "
                    f"found in both {seen[cls_name].__module__} and {cls.__module__}. "
                    f"Plugin names must be unique."
                )
            seen[cls_name] = cls
            all_discovered.append(cls)
    return all_discovered


def get_plugin_description(plugin_cls: type) -> str:
    """Return the first non-empty docstring line, or "<name> plugin"."""
    if plugin_cls.__doc__:
        for line in plugin_cls.__doc__.strip().split("\n"):
            cleaned = line.strip()
            if cleaned:
                return cleaned

    name = getattr(plugin_cls, "name", plugin_cls.__name__)
    return f"{name} plugin"


def create_dynamic_hookimpl(plugin_classes: list[type], hook_method_name: str) -> object:
    """Create a pluggy hookimpl object returning plugin_classes.

    Args:
        plugin_classes: Plugin classes to register
        hook_method_name: Hook name (e.g., "ngjson2js_get_transforms")
    """
    from typing import Any

    from ngjson2js.plugins.hookspecs import hookimpl

    class DynamicHookImpl:
        """Dynamically generated hook implementer."""

        pass

    def hook_method(self: Any) -> list[type]:
        return plugin_classes

    setattr(DynamicHookImpl, hook_method_name, hookimpl(hook_method))

    return DynamicHookImpl()
