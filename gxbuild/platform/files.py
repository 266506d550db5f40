"""Filesystem helpers.

Thin checked wrappers over shutil/pathlib/zipfile. Each returns a Result
naming the path that failed so the caller can report it and stop.
"""

from __future__ import annotations

import hashlib
import os
import shutil
import zipfile
from dataclasses import dataclass
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile

from gxbuild.core.result import Err, Ok, Result

__all__ = [
    "FileOpError",
    "copy_file",
    "copy_tree",
    "create_directory",
    "remove_directory",
    "sha256_file",
    "zip_tree",
]


@dataclass(frozen=True, slots=True)
class FileOpError:
    """A filesystem operation failed.

    Attributes:
        action: What was attempted ("remove", "create", "copy", "archive")
        path: The path the operation was about
        message: Underlying OS error text
    """

    action: str
    path: Path
    message: str


def remove_directory(path: Path) -> Result[None, FileOpError]:
    """Recursively remove ``path``. An absent path is not an error."""
    if not path.exists() and not path.is_symlink():
        return Ok(None)
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as e:
        return Err(FileOpError(action="remove", path=path, message=str(e)))
    return Ok(None)


def create_directory(path: Path) -> Result[None, FileOpError]:
    """Create ``path`` and any missing parents."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return Err(FileOpError(action="create", path=path, message=str(e)))
    return Ok(None)


def copy_file(src: Path, dst: Path) -> Result[None, FileOpError]:
    """Copy a single file, creating the destination's parent directory."""
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dst)
    except OSError as e:
        return Err(FileOpError(action="copy", path=src, message=str(e)))
    return Ok(None)


def copy_tree(src: Path, dst: Path) -> Result[None, FileOpError]:
    """Copy the contents of directory ``src`` into ``dst`` (merging)."""
    if not src.is_dir():
        return Err(FileOpError(action="copy", path=src, message="not a directory"))
    try:
        shutil.copytree(src, dst, dirs_exist_ok=True)
    except (OSError, shutil.Error) as e:
        return Err(FileOpError(action="copy", path=src, message=str(e)))
    return Ok(None)


def zip_tree(root: Path, archive: Path) -> Result[Path, FileOpError]:
    """Archive everything under ``root`` into ``archive``.

    Entry names are relative to ``root``; directories get their own entries
    so empty folders survive. The archive is written to a temporary file and
    moved into place, so a failure never leaves a truncated zip behind.
    """
    tmp = archive.with_name(f"{archive.name}.tmp")
    try:
        archive.parent.mkdir(parents=True, exist_ok=True)
        # Source checkouts can carry mtime=0; ZIP cannot encode pre-1980 dates.
        with ZipFile(tmp, "w", compression=ZIP_DEFLATED, strict_timestamps=False) as zf:
            for p in sorted(root.rglob("*")):
                zf.write(p, arcname=p.relative_to(root).as_posix())
        os.replace(tmp, archive)
    except (OSError, zipfile.BadZipFile, ValueError) as e:
        if tmp.exists():
            tmp.unlink()
        return Err(FileOpError(action="archive", path=archive, message=str(e)))
    return Ok(archive)


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()
