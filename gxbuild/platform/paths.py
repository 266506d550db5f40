"""Directory resolution.

The build never relies on the process working directory: every operation
receives explicit paths. The caller's directory is still captured at start so
it can be put back if anything changed it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from gxbuild.core.result import Err, Ok, Result

__all__ = [
    "PathError",
    "change_directory",
    "find_repository_root",
    "get_current_directory",
    "get_script_directory",
]


@dataclass(frozen=True, slots=True)
class PathError:
    """A directory could not be resolved or entered."""

    path: Path | None
    message: str


def get_script_directory(script: Path) -> Result[Path, PathError]:
    """Return the canonical directory of ``script``.

    If ``script`` is itself a directory it is returned canonicalized.
    Symlinks are followed; a broken link or missing path is an error.
    """
    try:
        resolved = script.expanduser().resolve(strict=True)
    except (OSError, RuntimeError) as e:
        return Err(PathError(path=script, message=f"Cannot canonicalize {script}: {e}"))

    return Ok(resolved if resolved.is_dir() else resolved.parent)


def get_current_directory() -> Result[Path, PathError]:
    """Return the working directory the process was started from."""
    try:
        return Ok(Path.cwd())
    except OSError as e:
        return Err(PathError(path=None, message=f"Cannot get current directory: {e}"))


def change_directory(path: Path) -> Result[None, PathError]:
    """Change the process working directory."""
    try:
        os.chdir(path)
    except OSError as e:
        return Err(PathError(path=path, message=f"Cannot change directory to {path}: {e}"))
    return Ok(None)


def find_repository_root(start: Path) -> Path | None:
    """Find the nearest ancestor of ``start`` (inclusive) holding a ``.git`` entry."""
    start = start.resolve()
    for parent in (start, *start.parents):
        if (parent / ".git").exists():
            return parent
    return None
