# src/ngjson2js/core/codegen.py
"""Generation of AngularJS cache-preload modules.

The generated script declares (or reuses) an AngularJS module and, in the
module's run phase, puts one JSON document into a $cacheFactory cache of
the same name. Looking the module up before declaring it means many
generated files can share one module without resetting its dependencies.
"""

from __future__ import annotations

from typing import NamedTuple

from ngjson2js.contracts.sentinels import MISSING
from ngjson2js.core.json_escape import escape_content
from ngjson2js.core.logging import get_logger

__all__ = [
    "DEFAULT_MODULE_NAME",
    "INVALID_JSON_COMMENT",
    "MODULE_TEMPLATE",
    "ModuleDeclaration",
    "build_module_declaration",
    "generate_module_declaration",
    "render_module",
]

logger = get_logger(__name__)

DEFAULT_MODULE_NAME = "templates"

# Positional fields: module name (x4), cache key, JSON literal
MODULE_TEMPLATE = (
    "(function(module) {\n"
    "  try {\n"
    "    module = angular.module('%s');\n"
    "  } catch (e) {\n"
    "    module = angular.module('%s', []);\n"
    "  }\n"
    "  module.run(['$cacheFactory', function($cacheFactory) {\n"
    "    ($cacheFactory.get('%s') || $cacheFactory('%s')).put('%s',\n"
    "      %s);\n"
    "  }]);\n"
    "})();\n"
)

INVALID_JSON_COMMENT = '/* Invalid JSON syntax in "%s", skipping content. */\n'


class ModuleDeclaration(NamedTuple):
    """A generated script and whether its source parsed as JSON."""

    script: str
    valid: bool


def render_module(module_name: str, file_url: str, escaped_content: str) -> str:
    """Fill the module template. No escaping is applied to any argument."""
    return MODULE_TEMPLATE % (module_name, module_name, module_name, module_name, file_url, escaped_content)


def build_module_declaration(
    file_url: str,
    contents: str,
    module_name: str = DEFAULT_MODULE_NAME,
) -> ModuleDeclaration:
    """Generate the script that registers contents under file_url.

    Args:
        file_url: Cache key for the document
        contents: Raw JSON text
        module_name: Name of both the AngularJS module and the cache

    Returns:
        ModuleDeclaration holding the module script, or a one-line comment
        with valid=False if contents is not valid JSON. Invalid JSON is not
        an error.
    """
    escaped = escape_content(contents)
    if escaped is MISSING:
        logger.warning("Invalid JSON, skipping content", url=file_url)
        return ModuleDeclaration(INVALID_JSON_COMMENT % file_url, valid=False)
    return ModuleDeclaration(render_module(module_name, file_url, escaped), valid=True)


def generate_module_declaration(
    file_url: str,
    contents: str,
    module_name: str = DEFAULT_MODULE_NAME,
) -> str:
    """Script text only; see build_module_declaration()."""
    return build_module_declaration(file_url, contents, module_name).script
