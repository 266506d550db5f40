"""Error presentation utilities.

Every build error is reported as a single line on the error stream.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gxbuild.core.errors import ErrorCode
from gxbuild.services.build_errors import (
    ArchiveFailed,
    BuildError,
    ConfigInvalid,
    ContainerBuildFailed,
    DirectoryFailed,
    PathUnresolved,
    RevisionUnavailable,
    StagingFailed,
    ToolMissing,
)

if TYPE_CHECKING:
    from gxbuild.output.console import ConsoleProtocol

__all__ = ["format_build_error", "print_build_error", "build_error_exit_code"]


def format_build_error(error: BuildError) -> str:
    """Render a build error as one diagnostic line."""
    match error:
        case ToolMissing(tool=tool):
            return f"{tool} is not installed."
        case PathUnresolved(path=path, reason=reason):
            return reason if path is None else f"{reason} ({path})"
        case ConfigInvalid(path=path, reason=reason):
            where = "" if path is None else f" {path}"
            return f"Invalid config{where}: {reason}"
        case RevisionUnavailable(command=command, reason=reason, returncode=rc):
            return f"git {command} failed: {reason}. Error: {rc}"
        case DirectoryFailed(action=action, path=path, reason=reason):
            return f"Cannot {action} directory {path}. Error: {reason}"
        case ContainerBuildFailed(image=image, returncode=rc, reason=reason):
            detail = f": {reason}" if reason else ""
            return f"Containerized build ({image}) failed{detail}. Error: {rc}"
        case StagingFailed(platform=platform, path=path, reason=reason):
            return f"Cannot stage {platform} distribution from {path}. Error: {reason}"
        case ArchiveFailed(path=path, reason=reason):
            return f"Cannot create archive {path}. Error: {reason}"


def print_build_error(error: BuildError, console: ConsoleProtocol) -> None:
    console.error(format_build_error(error))


def build_error_exit_code(error: BuildError) -> int:
    """Get exit code for a build error. Every failure is fatal and shares one code."""
    return int(ErrorCode.FAILED)
