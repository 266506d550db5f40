"""Release packaging.

Each target platform is described declaratively by a ``PlatformDescriptor``:
where the compiled executable goes (and under which launcher name), which
repository assets are copied where, and which empty folders users fill in
later. ``package_platform`` turns one descriptor into one zip archive.

Archive names are deterministic:

    <product>-<edition>-<revision>.zip             (no suffix)
    <product>-<edition>-<revision>-<suffix>.zip    (e.g. -GameCube)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from gxbuild.core.config import PathsConfig
from gxbuild.core.result import Err, Ok, Result
from gxbuild.platform.files import (
    copy_file,
    copy_tree,
    create_directory,
    remove_directory,
    sha256_file,
    zip_tree,
)
from gxbuild.services.build_errors import (
    ArchiveFailed,
    BuildError,
    DirectoryFailed,
    StagingFailed,
)

AssetKind = Literal["file", "tree"]


@dataclass(frozen=True, slots=True)
class AssetCopy:
    """A repository file or directory copied into the staging tree.

    Attributes:
        source: Path relative to the project root
        destination: POSIX path relative to the staging root
        kind: "file" copies one file, "tree" copies a directory's contents
    """

    source: str
    destination: str
    kind: AssetKind = "file"


@dataclass(frozen=True, slots=True)
class PlatformDescriptor:
    """Layout of one platform's release archive.

    Attributes:
        id: Short identifier, also the staging directory name
        label: Human-readable platform name
        executable: File name produced by the build in the output directory
        launcher: Destination of the executable inside the archive
        assets: Static files and directories to include
        empty_dirs: Folders created empty for user-supplied content
        suffix: Archive name suffix, None for the primary archive
    """

    id: str
    label: str
    executable: str
    launcher: str
    assets: tuple[AssetCopy, ...] = ()
    empty_dirs: tuple[str, ...] = ()
    suffix: str | None = None


@dataclass(frozen=True, slots=True)
class PackagedArchive:
    platform: str
    path: Path
    sha256: str


def default_platforms(paths: PathsConfig) -> tuple[PlatformDescriptor, ...]:
    """Wii and GameCube release layouts."""
    wii = PlatformDescriptor(
        id="wii",
        label="Wii",
        executable="vbagx-wii.dol",
        # Homebrew Channel launches apps/<name>/boot.dol
        launcher="apps/vbagx/boot.dol",
        assets=(
            AssetCopy(paths.readme, "apps/vbagx/README.md"),
            AssetCopy(paths.loader_metadata, "apps/vbagx", kind="tree"),
            AssetCopy(paths.covers, "vbagx/covers", kind="tree"),
        ),
        empty_dirs=("vbagx/roms", "vbagx/saves", "vbagx/cheats"),
    )
    gamecube = PlatformDescriptor(
        id="gamecube",
        label="GameCube",
        executable="vbagx-gc.dol",
        launcher="vbagx-gc.dol",
        assets=(
            AssetCopy(paths.readme, "README.md"),
            AssetCopy(paths.covers, "vbagx/covers", kind="tree"),
        ),
        suffix="GameCube",
    )
    return (wii, gamecube)


def archive_name(product: str, edition: str, revision: str, suffix: str | None = None) -> str:
    # Hierarchical tags (release/1.0) must not turn into subdirectories.
    parts = [product, edition, revision.replace("/", "-").replace("\\", "-")]
    if suffix:
        parts.append(suffix)
    return "-".join(parts) + ".zip"


def _stage(
    descriptor: PlatformDescriptor,
    *,
    root: Path,
    bin_dir: Path,
    staging: Path,
) -> Result[None, BuildError]:
    removed = remove_directory(staging)
    if isinstance(removed, Err):
        return Err(DirectoryFailed("remove", removed.error.path, removed.error.message))
    created = create_directory(staging)
    if isinstance(created, Err):
        return Err(DirectoryFailed("create", created.error.path, created.error.message))

    exe = bin_dir / descriptor.executable
    if not exe.is_file():
        return Err(StagingFailed(descriptor.label, exe, "executable not found"))
    copied = copy_file(exe, staging / descriptor.launcher)
    if isinstance(copied, Err):
        return Err(StagingFailed(descriptor.label, exe, copied.error.message))

    for asset in descriptor.assets:
        src = root / asset.source
        dst = staging / asset.destination
        if asset.kind == "tree":
            result = copy_tree(src, dst)
        elif not src.is_file():
            return Err(StagingFailed(descriptor.label, src, "file not found"))
        else:
            result = copy_file(src, dst)
        if isinstance(result, Err):
            return Err(StagingFailed(descriptor.label, src, result.error.message))

    for folder in descriptor.empty_dirs:
        made = create_directory(staging / folder)
        if isinstance(made, Err):
            return Err(DirectoryFailed("create", made.error.path, made.error.message))

    return Ok(None)


def package_platform(
    descriptor: PlatformDescriptor,
    *,
    root: Path,
    bin_dir: Path,
    staging: Path,
    archive: Path,
) -> Result[PackagedArchive, BuildError]:
    """Stage, archive and clean up one platform's distribution.

    The staging tree is removed afterwards whether or not staging or
    archiving succeeded.
    """
    result = _stage(descriptor, root=root, bin_dir=bin_dir, staging=staging).flat_map(
        lambda _: _archive(descriptor, staging=staging, archive=archive)
    )

    cleanup = remove_directory(staging)
    if isinstance(result, Err):
        return result
    if isinstance(cleanup, Err):
        return Err(DirectoryFailed("remove", cleanup.error.path, cleanup.error.message))
    return result


def _archive(
    descriptor: PlatformDescriptor,
    *,
    staging: Path,
    archive: Path,
) -> Result[PackagedArchive, BuildError]:
    zipped = zip_tree(staging, archive)
    if isinstance(zipped, Err):
        return Err(ArchiveFailed(path=archive, reason=zipped.error.message))
    try:
        digest = sha256_file(zipped.value)
    except OSError as e:
        return Err(ArchiveFailed(path=zipped.value, reason=str(e)))
    return Ok(PackagedArchive(platform=descriptor.label, path=zipped.value, sha256=digest))
