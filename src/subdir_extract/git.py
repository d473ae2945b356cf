from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional, Protocol

from .models import GitResult

logger = logging.getLogger(__name__)

# Shell convention for "command not found".
_MISSING_EXECUTABLE = 127


class GitClient(Protocol):
    """Version-control operations the extraction pipeline depends on."""

    def clone(self, repository_url: str, destination: Path) -> GitResult: ...

    def enable_sparse_retrieval(self, workspace: Path) -> GitResult: ...

    def set_sparse_restriction(self, workspace: Path, subdirectory: str) -> GitResult: ...

    def checkout_branch(self, workspace: Path, branch: Optional[str]) -> GitResult: ...


class SubprocessGit:
    """GitClient backed by the git command-line tool."""

    def __init__(self, binary: str = "git") -> None:
        self.binary = binary

    def _run(self, args: list[str], *, cwd: Path | None = None) -> GitResult:
        logger.debug("Running %s %s (cwd=%s)", self.binary, " ".join(args), cwd or ".")
        try:
            proc = subprocess.run(
                [self.binary, *args],
                cwd=str(cwd) if cwd else None,
                capture_output=True,
                text=True,
                stdin=subprocess.DEVNULL,
            )
        except FileNotFoundError as exc:
            return GitResult(args=tuple(args), returncode=_MISSING_EXECUTABLE, stderr=str(exc))
        result = GitResult(
            args=tuple(args),
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )
        if not result.ok:
            logger.debug("git exited %s: %s", result.returncode, result.stderr.strip())
        return result

    def clone(self, repository_url: str, destination: Path) -> GitResult:
        return self._run(["clone", "--no-checkout", "--", repository_url, str(destination)])

    def enable_sparse_retrieval(self, workspace: Path) -> GitResult:
        return self._run(["sparse-checkout", "init", "--cone"], cwd=workspace)

    def set_sparse_restriction(self, workspace: Path, subdirectory: str) -> GitResult:
        # ExtractionRequest rejects paths with a leading '-'.
        return self._run(["sparse-checkout", "set", subdirectory], cwd=workspace)

    def checkout_branch(self, workspace: Path, branch: Optional[str]) -> GitResult:
        args = ["checkout"]
        if branch:
            args.append(branch)
        return self._run(args, cwd=workspace)
