# src/ngjson2js/plugins/__init__.py
"""Plugin system: file transforms registered via pluggy.

- Base classes: BaseTransform with the process() contract
- Config: PluginConfig with strict, frozen validation
- Context: PluginContext carrying run metadata and a bound logger
- Manager: Plugin discovery and registration
- Hookspecs: pluggy hook definitions
"""

from ngjson2js.plugins.base import BaseTransform
from ngjson2js.plugins.config_base import PluginConfig, PluginConfigError
from ngjson2js.plugins.context import PluginContext
from ngjson2js.plugins.hookspecs import hookimpl, hookspec
from ngjson2js.plugins.manager import PluginManager, PluginSpec

__all__ = [
    "BaseTransform",
    "PluginConfig",
    "PluginConfigError",
    "PluginContext",
    "PluginManager",
    "PluginSpec",
    "hookimpl",
    "hookspec",
]
