from __future__ import annotations

import logging
from typing import Iterable, Optional

from .git import GitClient
from .models import Workspace

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = None


def branch_attempts(candidates: Iterable[str]) -> list[Optional[str]]:
    """Ordered checkout attempts: each named candidate, then the repository default."""
    attempts: list[Optional[str]] = []
    for name in candidates:
        if name and name not in attempts:
            attempts.append(name)
    attempts.append(DEFAULT_BRANCH)
    return attempts


def resolve_branch(git: GitClient, workspace: Workspace, candidates: Iterable[str]) -> bool:
    """
    Materialize files for the first branch that checks out cleanly.

    Returns False when every attempt failed; the caller treats that as a
    warning, not a hard stop.
    """
    for branch in branch_attempts(candidates):
        label = branch or "<default branch>"
        result = git.checkout_branch(workspace.path, branch)
        if result.ok:
            logger.info("Checked out %s", label)
            workspace.resolved_branch = branch
            return True
        logger.info("Checkout of %s failed, trying next candidate", label)
        logger.debug("%s", result.describe())
    return False
