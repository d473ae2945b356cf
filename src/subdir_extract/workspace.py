from __future__ import annotations

import logging
import os
import shutil
import stat
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .errors import CloneError, ExtractionError
from .models import Stage, Workspace

logger = logging.getLogger(__name__)

_VCS_SUFFIX = ".git"


def repository_name(repository_url: str) -> str:
    """Return the short repository name, e.g. ``infra`` for ``https://host/org/infra.git``."""
    tail = repository_url.strip().rstrip("/")
    tail = tail.rsplit("/", 1)[-1].rsplit(":", 1)[-1]
    if tail.endswith(_VCS_SUFFIX):
        tail = tail[: -len(_VCS_SUFFIX)]
    return tail or "repository"


def workspace_path(repository_url: str, parent: Path, suffix: str = "_temp_sparse_checkout") -> Path:
    return parent / f"{repository_name(repository_url)}{suffix}"


def _clear_readonly(func, path, _exc) -> None:
    # git writes pack files read-only, which blocks unlink on Windows.
    os.chmod(path, stat.S_IWRITE)
    func(path)


def remove_workspace(path: Path) -> None:
    if not path.exists() and not path.is_symlink():
        return
    logger.debug("Removing temporary workspace %s", path)
    if path.is_dir() and not path.is_symlink():
        if sys.version_info >= (3, 12):
            shutil.rmtree(path, onexc=_clear_readonly)
        else:
            shutil.rmtree(path, onerror=_clear_readonly)
    else:
        path.unlink()


@contextmanager
def temporary_workspace(path: Path) -> Iterator[Workspace]:
    """
    Own ``path`` for the duration of the block and remove it on every exit path.

    An entry already at ``path`` is never touched: it raises ``CloneError``
    before the block is entered.
    """
    if path.exists() or path.is_symlink():
        raise CloneError(
            f"Workspace '{path}' already exists. Remove or rename it and retry."
        )
    workspace = Workspace(path=path)
    try:
        yield workspace
    finally:
        try:
            remove_workspace(path)
        except OSError as exc:
            raise ExtractionError(
                f"Could not remove temporary workspace '{path}': {exc}",
                stage=Stage.CLEANUP,
            ) from exc
