"""
Stage results for the upload pipeline.

Each stage returns a StageResult instead of raising, so a stage's failure
mode can be exercised on its own.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class PipelineStage(Enum):
    """Stages of one upload submission."""

    IDLE = "idle"
    PARSING = "parsing"
    VALIDATING = "validating"
    BULK_INSERTING = "bulk_inserting"
    SUBMITTING = "submitting"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """
    Success value or failure message of one stage.

    Attributes:
        value: Stage output on success.
        error: Diagnostic message on failure.
    """

    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the stage succeeded."""
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "StageResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> "StageResult[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        """
        Return the success value.

        Raises:
            ValueError: If the stage failed.
        """
        if self.error is not None:
            msg = f"Stage failed: {self.error}"
            raise ValueError(msg)
        return self.value  # type: ignore[return-value]
