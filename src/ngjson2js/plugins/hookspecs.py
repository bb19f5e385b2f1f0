# src/ngjson2js/plugins/hookspecs.py
"""pluggy hook specifications for ngjson2js plugins.

Plugins implement these hooks to register themselves with the framework.
The plugin manager calls these hooks during discovery.

Usage (implementing a plugin):
    from ngjson2js.plugins.hookspecs import hookimpl

    class MyPlugin:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def ngjson2js_get_transforms(self):
            return [MyTransform]
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from ngjson2js.plugins.base import BaseTransform

PROJECT_NAME = "ngjson2js"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)

hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class NgJson2JsTransformSpec:
    """Hook specifications for transform plugins."""

    @hookspec
    def ngjson2js_get_transforms(self) -> list[type["BaseTransform"]]:  # type: ignore[empty-body]
        """Return transform plugin classes.

        Returns:
            List of Transform plugin classes (not instances)
        """
