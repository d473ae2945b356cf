from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def parse_branch_candidates(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(slots=True)
class AppConfig:
    """
    Runtime configuration for sparse subdirectory extraction.

    Users can override defaults through environment variables:
      - ``GIT_BINARY``: git executable to invoke (defaults to ``git``).
      - ``SPARSE_BRANCH_CANDIDATES``: comma-separated branch names tried in order
        before falling back to the repository's default branch.
      - ``SPARSE_WORKSPACE_SUFFIX``: suffix appended to the repository name for
        the temporary clone.
      - ``STRICT_EXTRACTION``: set truthy to exit non-zero when nothing was
        extracted.
      - ``LOG_LEVEL``: logging level name.
    """
    git_binary: str = field(default_factory=lambda: os.getenv("GIT_BINARY", "git"))
    branch_candidates: tuple[str, ...] = field(
        default_factory=lambda: parse_branch_candidates(
            os.getenv("SPARSE_BRANCH_CANDIDATES", "main,master")
        )
    )
    workspace_suffix: str = field(
        default_factory=lambda: os.getenv("SPARSE_WORKSPACE_SUFFIX", "_temp_sparse_checkout")
    )
    strict: bool = field(default_factory=lambda: _env_flag("STRICT_EXTRACTION", False))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    def validate(self) -> None:
        if not self.git_binary.strip():
            raise ValueError("GIT_BINARY must not be empty.")
        if not self.branch_candidates:
            raise ValueError("SPARSE_BRANCH_CANDIDATES must name at least one branch.")
        if any(name.startswith("-") for name in self.branch_candidates):
            raise ValueError("SPARSE_BRANCH_CANDIDATES entries must not start with '-'.")
        if not self.workspace_suffix.strip() or "/" in self.workspace_suffix:
            raise ValueError("SPARSE_WORKSPACE_SUFFIX must be a non-empty name without '/'.")
