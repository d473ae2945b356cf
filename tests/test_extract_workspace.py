from pathlib import Path

import pytest

from subdir_extract.errors import CloneError, ExtractionError
from subdir_extract.models import Stage
from subdir_extract.workspace import remove_workspace, temporary_workspace


def _populate(path: Path) -> None:
    (path / ".git" / "objects").mkdir(parents=True)
    (path / ".git" / "objects" / "pack").write_text("data", encoding="utf-8")


def test_temporary_workspace_removed_on_success(tmp_path):
    target = tmp_path / "infra_temp_sparse_checkout"
    with temporary_workspace(target) as workspace:
        assert workspace.path == target
        assert not workspace.exists
        _populate(target)
        assert workspace.exists
    assert not target.exists()


def test_temporary_workspace_removed_on_error(tmp_path):
    target = tmp_path / "infra_temp_sparse_checkout"
    with pytest.raises(RuntimeError):
        with temporary_workspace(target):
            _populate(target)
            raise RuntimeError("boom")
    assert not target.exists()


def test_remove_workspace_ignores_missing_path(tmp_path):
    remove_workspace(tmp_path / "missing")


def test_remove_workspace_handles_readonly_files(tmp_path):
    target = tmp_path / "ws"
    _populate(target)
    pack = target / ".git" / "objects" / "pack"
    pack.chmod(0o444)
    remove_workspace(target)
    assert not target.exists()


def test_temporary_workspace_leaves_existing_entry_untouched(tmp_path):
    target = tmp_path / "infra_temp_sparse_checkout"
    target.mkdir()
    (target / "thesis.tex").write_text("chapter one", encoding="utf-8")

    with pytest.raises(CloneError):
        with temporary_workspace(target):
            pytest.fail("block must not run when the workspace path is taken")

    assert (target / "thesis.tex").read_text(encoding="utf-8") == "chapter one"


def test_temporary_workspace_reports_cleanup_failure(tmp_path, monkeypatch):
    def failing_rmtree(path, **kwargs):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr("subdir_extract.workspace.shutil.rmtree", failing_rmtree)
    target = tmp_path / "infra_temp_sparse_checkout"

    with pytest.raises(ExtractionError) as excinfo:
        with temporary_workspace(target):
            _populate(target)

    assert excinfo.value.stage == Stage.CLEANUP
    assert "Permission denied" in str(excinfo.value)
