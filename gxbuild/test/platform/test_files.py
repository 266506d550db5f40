from __future__ import annotations

import os
import zipfile
from pathlib import Path

import pytest

from gxbuild.core.result import Err, Ok
from gxbuild.platform.files import (
    copy_file,
    copy_tree,
    create_directory,
    remove_directory,
    sha256_file,
    zip_tree,
)


def test_remove_directory_recursive(tmp_path: Path) -> None:
    target = tmp_path / "bin" / "v1"
    (target / "nested").mkdir(parents=True)
    (target / "nested" / "stale.dol").write_bytes(b"old")

    assert remove_directory(target) == Ok(None)
    assert not target.exists()


def test_remove_directory_absent_is_ok(tmp_path: Path) -> None:
    assert remove_directory(tmp_path / "missing") == Ok(None)


def test_remove_directory_reports_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gxbuild.platform.files as files

    target = tmp_path / "locked"
    target.mkdir()

    def boom(path: Path) -> None:
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(files.shutil, "rmtree", boom)

    result = remove_directory(target)

    assert isinstance(result, Err)
    assert result.error.action == "remove"
    assert result.error.path == target


def test_create_directory_with_parents(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "c"

    assert create_directory(target) == Ok(None)
    assert target.is_dir()
    assert create_directory(target) == Ok(None)


def test_create_directory_over_file_fails(tmp_path: Path) -> None:
    blocker = tmp_path / "bin"
    blocker.write_text("not a dir")

    result = create_directory(blocker / "v1")

    assert isinstance(result, Err)
    assert result.error.action == "create"


def test_copy_file_creates_parent(tmp_path: Path) -> None:
    src = tmp_path / "vbagx-wii.dol"
    src.write_bytes(b"dol")

    assert copy_file(src, tmp_path / "apps" / "vbagx" / "boot.dol") == Ok(None)
    assert (tmp_path / "apps" / "vbagx" / "boot.dol").read_bytes() == b"dol"


def test_copy_file_missing_source(tmp_path: Path) -> None:
    result = copy_file(tmp_path / "missing", tmp_path / "out")

    assert isinstance(result, Err)
    assert result.error.path == tmp_path / "missing"


def test_copy_tree_merges(tmp_path: Path) -> None:
    src = tmp_path / "hbc"
    src.mkdir()
    (src / "meta.xml").write_text("<app/>")
    dst = tmp_path / "stage" / "apps" / "vbagx"
    dst.mkdir(parents=True)
    (dst / "boot.dol").write_bytes(b"dol")

    assert copy_tree(src, dst) == Ok(None)
    assert sorted(p.name for p in dst.iterdir()) == ["boot.dol", "meta.xml"]


def test_copy_tree_requires_directory(tmp_path: Path) -> None:
    result = copy_tree(tmp_path / "missing", tmp_path / "out")

    assert isinstance(result, Err)


def test_zip_tree_relative_entries_and_empty_dirs(tmp_path: Path) -> None:
    stage = tmp_path / "stage"
    (stage / "apps" / "vbagx").mkdir(parents=True)
    (stage / "apps" / "vbagx" / "boot.dol").write_bytes(b"dol")
    (stage / "vbagx" / "roms").mkdir(parents=True)
    archive = tmp_path / "out.zip"

    result = zip_tree(stage, archive)

    assert result == Ok(archive)
    with zipfile.ZipFile(archive) as zf:
        names = set(zf.namelist())
    assert "apps/vbagx/boot.dol" in names
    assert "vbagx/roms/" in names
    assert not any(n.startswith("/") or str(tmp_path) in n for n in names)
    assert not (tmp_path / "out.zip.tmp").exists()


def test_zip_tree_handles_epoch_mtime(tmp_path: Path) -> None:
    stage = tmp_path / "stage"
    stage.mkdir()
    old = stage / "vbagx-gc.dol"
    old.write_bytes(b"dol")
    os.utime(old, (0, 0))

    assert isinstance(zip_tree(stage, tmp_path / "out.zip"), Ok)


def test_zip_tree_failure_leaves_nothing(tmp_path: Path) -> None:
    stage = tmp_path / "stage"
    stage.mkdir()
    (stage / "file").write_bytes(b"x")
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not dir")

    result = zip_tree(stage, blocker / "out.zip")

    assert isinstance(result, Err)
    assert result.error.action == "archive"


def test_sha256_file(tmp_path: Path) -> None:
    path = tmp_path / "data"
    path.write_bytes(b"abc")

    assert sha256_file(path) == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
