from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Stage(str, Enum):
    VALIDATE = "validate"
    CLONE = "clone"
    SPARSE_CONFIG = "sparse_config"
    BRANCH = "branch"
    RELOCATE = "relocate"
    CLEANUP = "cleanup"


class WarningKind(str, Enum):
    BRANCH_RESOLUTION = "branch_resolution"
    SUBDIRECTORY_MISSING = "subdirectory_missing"


class RunStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class ExtractionRequest(BaseModel):
    """Validated, immutable input for one extraction run."""

    model_config = ConfigDict(frozen=True)

    repository_url: str = Field(min_length=1)
    subdirectory_path: str = Field(min_length=1)

    @field_validator("repository_url")
    @classmethod
    def _strip_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("repository URL must not be empty")
        if value.startswith("-"):
            raise ValueError(f"repository URL must not start with '-': {value!r}")
        return value

    @field_validator("subdirectory_path")
    @classmethod
    def _normalize_subdirectory(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("subdirectory path must not be empty")
        if value.startswith("/"):
            raise ValueError(f"subdirectory path must be relative: {value!r}")
        if value.startswith("-"):
            raise ValueError(f"subdirectory path must not start with '-': {value!r}")
        segments = value.split("/")
        if ".." in segments:
            raise ValueError(f"subdirectory path must not contain '..': {value!r}")
        if segments[-1] == ".":
            raise ValueError(f"subdirectory path has no final segment: {value!r}")
        return value

    @property
    def final_segment(self) -> str:
        return PurePosixPath(self.subdirectory_path).name


class DestinationTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    path: Path


class RunOutcome(BaseModel):
    status: RunStatus
    stage: Stage
    destination: Optional[Path] = None
    branch: Optional[str] = None
    reason: Optional[str] = None
    warnings: List[WarningKind] = Field(default_factory=list)

    @property
    def extracted(self) -> bool:
        return self.status == RunStatus.SUCCESS and self.destination is not None


@dataclass(slots=True)
class GitResult:
    """Structured result of one git invocation."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def describe(self) -> str:
        detail = self.stderr.strip() or self.stdout.strip() or f"exit status {self.returncode}"
        return f"`git {' '.join(self.args)}` failed: {detail}"


@dataclass(slots=True)
class Workspace:
    path: Path
    resolved_branch: Optional[str] = None

    @property
    def exists(self) -> bool:
        return self.path.exists()
