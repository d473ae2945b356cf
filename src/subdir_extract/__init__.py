"""Extract a single subdirectory from a remote git repository via sparse checkout."""

from .config import AppConfig
from .errors import (
    CloneError,
    DestinationCollisionError,
    ExtractionError,
    SparseConfigError,
    UsageError,
)
from .models import ExtractionRequest, RunOutcome, RunStatus, Stage, WarningKind
from .pipeline import extract_subdirectory, run_extraction, validate_arguments

__all__ = [
    "AppConfig",
    "CloneError",
    "DestinationCollisionError",
    "ExtractionError",
    "ExtractionRequest",
    "RunOutcome",
    "RunStatus",
    "SparseConfigError",
    "Stage",
    "UsageError",
    "WarningKind",
    "extract_subdirectory",
    "run_extraction",
    "validate_arguments",
]

__version__ = "0.1.0"
