"""Tests for git/repository.py."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from gxbuild.core.result import Err, Ok
from gxbuild.git.repository import Repository
from gxbuild.platform.process import ProcessError
from gxbuild.test.conftest import git


def _fail(returncode: int = 128, stderr: str = "fatal: not a git repository") -> Err[ProcessError]:
    return Err(ProcessError(command=("git",), returncode=returncode, stdout="", stderr=stderr))


# =============================================================================
# Mocked process tests
# =============================================================================


class TestRepositoryMocked:
    def test_short_revision_strips_output(self, tmp_path: Path) -> None:
        repo = Repository(tmp_path)
        with patch("gxbuild.git.repository.run_process", return_value=Ok("abc1234\n")) as run:
            assert repo.short_revision() == Ok("abc1234")

        cmd = run.call_args.args[0]
        assert cmd == ["git", "-C", str(tmp_path), "rev-parse", "--short", "HEAD"]

    def test_short_revision_empty_output_is_error(self, tmp_path: Path) -> None:
        with patch("gxbuild.git.repository.run_process", return_value=Ok("\n")):
            result = Repository(tmp_path).short_revision()

        assert isinstance(result, Err)
        assert "empty" in result.error.message

    def test_short_revision_failure(self, tmp_path: Path) -> None:
        with patch("gxbuild.git.repository.run_process", return_value=_fail()):
            result = Repository(tmp_path).short_revision()

        assert isinstance(result, Err)
        assert result.error.returncode == 128
        assert "not a git repository" in result.error.message

    def test_tags_pointing_at_passes_revision(self, tmp_path: Path) -> None:
        with patch("gxbuild.git.repository.run_process", return_value=Ok("v1.0\n")) as run:
            assert Repository(tmp_path).tags_pointing_at("abc1234") == Ok(["v1.0"])

        assert run.call_args.args[0][-2:] == ["tag", "--points-at=abc1234"]

    def test_tags_skips_blank_lines(self, tmp_path: Path) -> None:
        with patch("gxbuild.git.repository.run_process", return_value=Ok("v1\n\n v2 \n")):
            assert Repository(tmp_path).tags() == Ok(["v1", "v2"])

    def test_tags_failure_falls_back_to_message(self, tmp_path: Path) -> None:
        with patch("gxbuild.git.repository.run_process", return_value=_fail(1, "")):
            result = Repository(tmp_path).tags()

        assert isinstance(result, Err)
        assert result.error.message == "cannot list git tags"
        assert result.error.command == "tag"


# =============================================================================
# Real git tests
# =============================================================================


class TestRepositoryGit:
    def test_short_revision_matches_git(self, git_repo: Path) -> None:
        expected = git(git_repo, "rev-parse", "--short", "HEAD")

        assert Repository(git_repo).short_revision() == Ok(expected)

    def test_tags_pointing_at_head(self, git_repo: Path) -> None:
        git(git_repo, "tag", "-a", "v1.2.3", "-m", "release")
        revision = git(git_repo, "rev-parse", "--short", "HEAD")

        assert Repository(git_repo).tags_pointing_at(revision) == Ok(["v1.2.3"])

    def test_tags_lists_all(self, git_repo: Path) -> None:
        git(git_repo, "tag", "v1")
        git(git_repo, "tag", "v2")

        assert Repository(git_repo).tags() == Ok(["v1", "v2"])

    def test_no_tags(self, git_repo: Path) -> None:
        assert Repository(git_repo).tags() == Ok([])

    def test_not_a_repository(self, tmp_path: Path) -> None:
        plain = tmp_path / "plain"
        plain.mkdir()
        (plain / ".git").write_text("gitdir: /nonexistent\n")

        assert isinstance(Repository(plain).short_revision(), Err)
