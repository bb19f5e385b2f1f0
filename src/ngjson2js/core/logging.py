# src/ngjson2js/core/logging.py
"""Structured logging for ngjson2js.

structlog and stdlib logging share one handler on the root logger, so
structlog loggers and plain ``logging.getLogger(__name__)`` loggers (plugin
discovery, dynaconf, pluggy) render identically.

Output goes to stderr. stdout belongs to command output such as
``build --format json``.

Run-scoped fields are carried in contextvars:

    with run_context(run_id="3f2a9c", plugin="ng_json2js"):
        logger.warning("Invalid JSON, skipping content", url=url)
        # -> {"event": ..., "url": ..., "run_id": "3f2a9c", "plugin": "ng_json2js", ...}
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

# Libraries that chatter at DEBUG about settings files and hook calls
_NOISY_LOGGERS: tuple[str, ...] = (
    "dynaconf",
    "pluggy",
)


def _drop_formatter_fields(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    # ProcessorFormatter always adds these two keys
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def _shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]


def _render_processors(*, json_output: bool, colors: bool) -> list[Any]:
    if json_output:
        return [
            _drop_formatter_fields,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        _drop_formatter_fields,
        structlog.dev.ConsoleRenderer(colors=colors),
    ]


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and stdlib logging.

    Args:
        json_output: One JSON object per line instead of console rendering.
        level: Root log level name (DEBUG, INFO, WARNING, ERROR).
        stream: Destination, sys.stderr when None. Console colours are only
                used when the destination is a terminal.
    """
    log_level = getattr(logging, level.upper())
    target = stream if stream is not None else sys.stderr
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Tests reconfigure between cases
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(target)
    handler.setFormatter(
        ProcessorFormatter(
            processors=_render_processors(json_output=json_output, colors=target.isatty()),
            foreign_pre_chain=shared,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    # --verbose must not turn third-party DEBUG output on
    noisy_level = max(log_level, logging.WARNING)
    for logger_name in _NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(noisy_level)


@contextmanager
def run_context(*, run_id: str, plugin: str) -> Iterator[None]:
    """Attach run_id and plugin to every log line emitted inside the block."""
    with structlog.contextvars.bound_contextvars(run_id=run_id, plugin=plugin):
        yield


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger for a module (typically ``__name__``)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
