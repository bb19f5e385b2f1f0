"""
ngjson2js: Convert JSON files into AngularJS $cacheFactory preload scripts.

Each JSON source becomes a JavaScript file that, when loaded, registers the
JSON content in a named cache under a key derived from the file's path.
"""

__version__ = "0.1.0"
