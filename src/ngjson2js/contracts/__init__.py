"""Shared contracts: file model, transform results, and error types.

Import from here rather than the submodules:
    from ngjson2js.contracts import SourceFile, TransformResult
"""

from ngjson2js.contracts.errors import (
    NgJson2JsError,
    StreamingNotSupportedError,
    TransformAction,
    TransformErrorReason,
    TransformSuccessReason,
)
from ngjson2js.contracts.files import (
    SCRIPT_EXTENSION,
    ContentKind,
    SourceFile,
    replace_extension,
)
from ngjson2js.contracts.results import TransformResult
from ngjson2js.contracts.sentinels import MISSING, MissingSentinel

__all__ = [
    # Files
    "SCRIPT_EXTENSION",
    "ContentKind",
    "SourceFile",
    "replace_extension",
    # Results
    "TransformResult",
    # Sentinels
    "MISSING",
    "MissingSentinel",
    # Errors
    "NgJson2JsError",
    "StreamingNotSupportedError",
    "TransformAction",
    "TransformErrorReason",
    "TransformSuccessReason",
]
