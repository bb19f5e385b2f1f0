"""Built-in transform plugins for ngjson2js.

Transforms receive a SourceFile and return a TransformResult with the
output file.

Plugins are accessed via PluginManager, not direct imports:
    manager = PluginManager()
    manager.register_builtin_plugins()
    transform = manager.create_transform("ng_json2js", {"module_name": "templates"})
"""
