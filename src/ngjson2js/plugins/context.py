# src/ngjson2js/plugins/context.py
"""Plugin execution context.

The PluginContext carries run metadata into each plugin call, and a logger
already bound to it so plugin log lines can be correlated per run.
"""

import uuid
from dataclasses import dataclass, field

import structlog

from ngjson2js.core.logging import get_logger


def _new_run_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass
class PluginContext:
    """Context passed to every plugin operation.

    Example:
        def process(self, file: SourceFile, ctx: PluginContext) -> TransformResult:
            ctx.logger.debug("processing", path=str(file.path))
            ...
    """

    run_id: str = field(default_factory=_new_run_id)
    node_id: str | None = None

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        """Logger bound to run_id (and node_id when set)."""
        bound = get_logger("ngjson2js.plugins").bind(run_id=self.run_id)
        if self.node_id is not None:
            bound = bound.bind(node_id=self.node_id)
        return bound

