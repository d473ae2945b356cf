from __future__ import annotations

from .models import Stage


class ExtractionError(Exception):
    """Base class for failures that stop an extraction run."""

    stage: Stage = Stage.VALIDATE

    def __init__(self, message: str, *, stage: Stage | None = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class UsageError(ExtractionError):
    """Raised when the invocation is malformed."""

    stage = Stage.VALIDATE


class CloneError(ExtractionError):
    """Raised when the headless clone fails."""

    stage = Stage.CLONE


class SparseConfigError(ExtractionError):
    """Raised when cone mode or the sparse restriction set is rejected."""

    stage = Stage.SPARSE_CONFIG


class DestinationCollisionError(ExtractionError):
    """Raised when the destination name already exists in the working directory."""

    stage = Stage.RELOCATE
