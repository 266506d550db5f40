from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest


def git(repo: Path, *args: str) -> str:
    proc = subprocess.run(
        ["git", "-C", str(repo), *args],
        capture_output=True,
        text=True,
        check=True,
    )
    return proc.stdout.strip()


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A git checkout with one commit and the assets a release needs."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")

    repo = tmp_path / "vbagx"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "config", "user.email", "dev@example.com")
    git(repo, "config", "user.name", "Dev")
    git(repo, "config", "commit.gpgsign", "false")
    git(repo, "config", "tag.gpgsign", "false")

    (repo / "README.md").write_text("# VisualBoyAdvanceGX\n", encoding="utf-8")
    covers = repo / "distribution" / "covers"
    covers.mkdir(parents=True)
    (covers / "default.png").write_bytes(b"png")
    hbc = repo / "distribution" / "hbc"
    hbc.mkdir(parents=True)
    (hbc / "meta.xml").write_text("<app/>\n", encoding="utf-8")
    (hbc / "icon.png").write_bytes(b"icon")

    git(repo, "add", ".")
    git(repo, "commit", "-q", "-m", "initial")
    return repo
