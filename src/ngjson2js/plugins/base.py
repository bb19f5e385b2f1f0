# src/ngjson2js/plugins/base.py
"""Base classes for plugin implementations.

Transforms MUST subclass BaseTransform. Plugin discovery uses issubclass()
checks against it and skips classes without a name.

Lifecycle:
    __init__(options) -> process(file, ctx) per file -> close()

process() is called once per file. Each call is independent: transforms
hold only their immutable configuration, so files may be processed in any
order or in parallel by the caller.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from ngjson2js.contracts import SourceFile, TransformResult
from ngjson2js.plugins.context import PluginContext


class BaseTransform(ABC):
    """Base class for all file transforms.

    Subclass and implement process():

        class MyTransform(BaseTransform):
            name = "my_transform"

            def process(self, file: SourceFile, ctx: PluginContext) -> TransformResult:
                return TransformResult.success(
                    file.with_extension(".txt"),
                    success_reason={"action": "passthrough"},
                )
    """

    name: ClassVar[str] = ""
    plugin_version: ClassVar[str] = "0.0.0"

    def __init__(self, config: dict[str, Any]) -> None:
        """Initialize with raw options.

        Subclasses validate config through their PluginConfig.from_dict().
        """
        self.config = config

    @abstractmethod
    def process(self, file: SourceFile, ctx: PluginContext) -> TransformResult:
        """Transform one file.

        Args:
            file: Input file (never mutated)
            ctx: Plugin context

        Returns:
            TransformResult with the output file, or an error result.
        """
        ...

    def close(self) -> None:  # noqa: B027 - optional hook, intentionally empty
        """Release resources. Default: nothing to release."""
        pass
