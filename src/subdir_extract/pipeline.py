from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from .branches import resolve_branch
from .config import AppConfig
from .errors import CloneError, ExtractionError, SparseConfigError, UsageError
from .git import GitClient, SubprocessGit
from .models import (
    ExtractionRequest,
    RunOutcome,
    RunStatus,
    Stage,
    WarningKind,
    Workspace,
)
from .relocate import destination_target, ensure_destination_free, relocate_subtree
from .workspace import temporary_workspace, workspace_path

logger = logging.getLogger(__name__)

EXPECTED_ARGUMENTS = 2


def validate_arguments(values: Sequence[str]) -> ExtractionRequest:
    if len(values) != EXPECTED_ARGUMENTS:
        raise UsageError(
            f"Expected {EXPECTED_ARGUMENTS} arguments (repository URL and subdirectory), got {len(values)}."
        )
    repository_url, subdirectory_path = values
    try:
        return ExtractionRequest(repository_url=repository_url, subdirectory_path=subdirectory_path)
    except ValidationError as exc:
        messages = "; ".join(err["msg"] for err in exc.errors())
        raise UsageError(f"Invalid arguments: {messages}") from exc


def clone_repository(git: GitClient, request: ExtractionRequest, workspace: Workspace) -> None:
    logger.info("1/4: Cloning %s without checking out files", request.repository_url)
    result = git.clone(request.repository_url, workspace.path)
    if not result.ok:
        raise CloneError(f"Could not clone {request.repository_url}. Check the URL. {result.describe()}")


def configure_sparse(git: GitClient, workspace: Workspace, subdirectory_path: str) -> None:
    logger.info("2/4: Enabling cone-mode sparse checkout")
    result = git.enable_sparse_retrieval(workspace.path)
    if not result.ok:
        raise SparseConfigError(f"Could not enable sparse checkout. {result.describe()}")

    logger.info("3/4: Restricting checkout to '%s'", subdirectory_path)
    result = git.set_sparse_restriction(workspace.path, subdirectory_path)
    if not result.ok:
        raise SparseConfigError(
            f"Could not set sparse checkout path '{subdirectory_path}'. {result.describe()}"
        )


def extract_subdirectory(
    request: ExtractionRequest,
    config: AppConfig,
    *,
    git: Optional[GitClient] = None,
    working_dir: Optional[Path] = None,
) -> RunOutcome:
    """
    Run the clone, sparse-config, checkout and relocate stages.

    Hard failures raise ``ExtractionError``; the temporary workspace is removed
    on every exit path. Soft failures are reported as outcome warnings.
    """
    git = git or SubprocessGit(config.git_binary)
    cwd = (working_dir or Path.cwd()).resolve()
    warnings: list[WarningKind] = []
    destination: Optional[Path] = None

    logger.info(
        "Starting sparse extraction of '%s' from '%s'",
        request.subdirectory_path,
        request.repository_url,
    )
    temp_path = workspace_path(request.repository_url, cwd, config.workspace_suffix)
    with temporary_workspace(temp_path) as workspace:
        clone_repository(git, request, workspace)
        configure_sparse(git, workspace, request.subdirectory_path)

        logger.info("4/4: Checking out files")
        if not resolve_branch(git, workspace, config.branch_candidates):
            logger.warning(
                "Could not check out %s or the default branch; continuing without a checkout.",
                " or ".join(config.branch_candidates),
            )
            warnings.append(WarningKind.BRANCH_RESOLUTION)

        target = destination_target(request.subdirectory_path, cwd)
        ensure_destination_free(target)
        if relocate_subtree(workspace.path, request.subdirectory_path, target):
            destination = target.path
        else:
            warnings.append(WarningKind.SUBDIRECTORY_MISSING)

    return RunOutcome(
        status=RunStatus.SUCCESS,
        stage=Stage.CLEANUP,
        destination=destination,
        branch=workspace.resolved_branch,
        warnings=warnings,
    )


def run_extraction(
    request: ExtractionRequest,
    config: AppConfig,
    *,
    git: Optional[GitClient] = None,
    working_dir: Optional[Path] = None,
) -> RunOutcome:
    try:
        return extract_subdirectory(request, config, git=git, working_dir=working_dir)
    except ExtractionError as exc:
        logger.error("%s", exc)
        return RunOutcome(status=RunStatus.FAILURE, stage=exc.stage, reason=str(exc))
