# src/ngjson2js/engine/callbacks.py
"""Callback-style adapter over TransformResult.

Streaming build runners signal per-file completion through a callback
taking (error, file). run_with_callback() bridges a transform's explicit
result to that convention.
"""

from collections.abc import Callable

from ngjson2js.contracts import SourceFile
from ngjson2js.plugins.base import BaseTransform
from ngjson2js.plugins.context import PluginContext

FileCallback = Callable[[Exception | None, SourceFile | None], None]


def run_with_callback(
    transform: BaseTransform,
    file: SourceFile,
    callback: FileCallback,
    ctx: PluginContext | None = None,
) -> None:
    """Process one file and report the outcome through callback.

    The callback is invoked exactly once: ``callback(None, output)`` on
    success, ``callback(error, None)`` on failure. Exceptions raised by
    the transform itself are bugs and propagate without calling back.
    """
    result = transform.process(file, ctx if ctx is not None else PluginContext())
    if result.is_success:
        callback(None, result.file)
    else:
        callback(result.exception, None)
