from __future__ import annotations

import logging
import shutil
from pathlib import Path, PurePosixPath

from .errors import DestinationCollisionError, ExtractionError
from .models import DestinationTarget, Stage

logger = logging.getLogger(__name__)


def destination_target(subdirectory_path: str, working_dir: Path) -> DestinationTarget:
    name = PurePosixPath(subdirectory_path.rstrip("/")).name
    return DestinationTarget(name=name, path=working_dir / name)


def ensure_destination_free(target: DestinationTarget) -> None:
    # lexists semantics: a dangling symlink still occupies the name.
    if target.path.exists() or target.path.is_symlink():
        raise DestinationCollisionError(
            f"Destination '{target.name}' already exists in {target.path.parent}. "
            "Remove or rename it and retry."
        )


def relocate_subtree(workspace: Path, subdirectory_path: str, target: DestinationTarget) -> bool:
    """
    Move ``workspace/subdirectory_path`` to ``target.path``.

    Returns False, without touching anything, when the extracted subtree is
    missing.
    """
    source = workspace.joinpath(*PurePosixPath(subdirectory_path).parts)
    if not source.is_dir():
        logger.warning("Subdirectory '%s' was not found after checkout.", subdirectory_path)
        return False
    logger.info("Moving '%s' to '%s'", subdirectory_path, target.path)
    # shutil.move renames in place when source and target share a filesystem.
    try:
        shutil.move(str(source), str(target.path))
    except OSError as exc:
        raise ExtractionError(
            f"Could not move '{subdirectory_path}' to {target.path}: {exc}",
            stage=Stage.RELOCATE,
        ) from exc
    return True
