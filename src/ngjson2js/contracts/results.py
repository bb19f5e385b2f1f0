"""Operation outcomes and results.

These types answer: "What did a transform produce for one file?"

IMPORTANT:
- TransformResult.status uses Literal["success", "error"], NOT an enum
- Success results carry the output file and a success_reason
- Error results carry the exception that would be passed to a completion
  callback, plus a structured reason
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from ngjson2js.contracts.errors import TransformErrorReason, TransformSuccessReason
from ngjson2js.contracts.files import SourceFile


@dataclass(frozen=True)
class TransformResult:
    """Result of a transform operation.

    Use the factory methods to create instances.

    Invariants:
    - status="success" implies file and success_reason are set
    - status="error" implies exception and reason are set, file is None
    """

    status: Literal["success", "error"]
    file: SourceFile | None
    reason: TransformErrorReason | None = None
    exception: Exception | None = None
    success_reason: TransformSuccessReason | None = None

    def __post_init__(self) -> None:
        if self.status == "success":
            if self.file is None or self.success_reason is None:
                raise ValueError(
                    "TransformResult with status='success' MUST provide file and success_reason. "
                    "Use TransformResult.success(file, success_reason={'action': '...'})."
                )
        elif self.exception is None or self.reason is None:
            raise ValueError(
                "TransformResult with status='error' MUST provide exception and reason. "
                "Use TransformResult.error(exc, reason={'reason': '...', 'path': '...'})."
            )

    @property
    def is_success(self) -> bool:
        return self.status == "success"

    @property
    def action(self) -> str | None:
        """Action recorded by a success result, None for errors."""
        if self.success_reason is None:
            return None
        return self.success_reason["action"]

    @classmethod
    def success(cls, file: SourceFile, *, success_reason: TransformSuccessReason) -> TransformResult:
        """Create successful result.

        Args:
            file: The output file (a new instance, never the input mutated)
            success_reason: REQUIRED metadata about what the transform did.

        Example:
            return TransformResult.success(
                out_file,
                success_reason={"action": "generated", "url": "data/a.json"},
            )
        """
        return cls(status="success", file=file, success_reason=success_reason)

    @classmethod
    def error(cls, error: Exception, *, reason: TransformErrorReason) -> TransformResult:
        """Create error result. No output file is produced."""
        return cls(status="error", file=None, reason=reason, exception=error)
