from pathlib import Path

from subdir_extract import git as git_module
from subdir_extract.git import SubprocessGit


class _Completed:
    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.stdout = ""
        self.stderr = ""


def test_clone_separates_options_from_url(monkeypatch, tmp_path: Path) -> None:
    seen = {}

    def fake_run(cmd, **kwargs):
        seen["cmd"] = cmd
        return _Completed()

    monkeypatch.setattr(git_module.subprocess, "run", fake_run)

    result = SubprocessGit("git").clone("https://example.test/org/infra.git", tmp_path / "ws")

    assert result.ok
    assert seen["cmd"] == [
        "git",
        "clone",
        "--no-checkout",
        "--",
        "https://example.test/org/infra.git",
        str(tmp_path / "ws"),
    ]


def test_checkout_without_branch_uses_default(monkeypatch, tmp_path: Path) -> None:
    seen = {}

    def fake_run(cmd, **kwargs):
        seen["cmd"] = cmd
        seen["cwd"] = kwargs.get("cwd")
        return _Completed(returncode=1)

    monkeypatch.setattr(git_module.subprocess, "run", fake_run)

    result = SubprocessGit("git").checkout_branch(tmp_path, None)

    assert not result.ok
    assert seen["cmd"] == ["git", "checkout"]
    assert seen["cwd"] == str(tmp_path)


def test_missing_git_binary_is_a_failed_result(tmp_path: Path) -> None:
    result = SubprocessGit("definitely-not-a-real-git-binary").clone("x", tmp_path / "ws")

    assert result.returncode == 127
    assert not result.ok
