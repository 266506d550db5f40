from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ToolMissing:
    tool: str


@dataclass(frozen=True, slots=True)
class PathUnresolved:
    path: Path | None
    reason: str


@dataclass(frozen=True, slots=True)
class ConfigInvalid:
    path: Path | None
    reason: str


@dataclass(frozen=True, slots=True)
class RevisionUnavailable:
    command: str
    reason: str
    returncode: int


@dataclass(frozen=True, slots=True)
class DirectoryFailed:
    action: str
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class ContainerBuildFailed:
    image: str
    returncode: int
    reason: str = ""


@dataclass(frozen=True, slots=True)
class StagingFailed:
    platform: str
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class ArchiveFailed:
    path: Path
    reason: str


BuildError = (
    ToolMissing
    | PathUnresolved
    | ConfigInvalid
    | RevisionUnavailable
    | DirectoryFailed
    | ContainerBuildFailed
    | StagingFailed
    | ArchiveFailed
)
