"""Error and reason schema contracts.

TypedDict schemas for structured transform outcomes, plus the exception
types that cross the transform boundary.
"""

from typing import Literal, NotRequired, TypedDict

TransformAction = Literal["generated", "skipped_invalid_json", "passthrough"]


class TransformSuccessReason(TypedDict):
    """Schema for transform success metadata.

    Used by transforms to explain what happened to a file that was
    processed without error.
    """

    action: TransformAction
    url: NotRequired[str]  # Derived cache key, when one was computed


class TransformErrorReason(TypedDict):
    """Schema for transform error payloads."""

    reason: Literal["streaming_not_supported"]
    path: str  # Input file path (as given)
    message: NotRequired[str]


class NgJson2JsError(Exception):
    """Base class for ngjson2js errors."""


class StreamingNotSupportedError(NgJson2JsError):
    """Raised when file contents are an open stream instead of a buffer.

    The whole document has to be parsed as JSON before any output can be
    produced, so only fully buffered contents are accepted.
    """

    def __init__(self, plugin_name: str = "ngjson2js") -> None:
        self.plugin_name = plugin_name
        super().__init__(f"{plugin_name}: Streaming not supported")
