"""Build and release orchestration.

Runs the release sequence for one source checkout:

1. Preflight: required executables are on PATH.
2. Revision: tag name or short commit id naming this build.
3. Build: fresh ``bin/<revision>`` directory, one containerized compile.
4. Package: tagged builds only, one archive per platform descriptor.

Each step returns a Result and the first Err ends the run. Nothing is
retried. The caller's working directory is captured up front and restored
at the end of every run, successful or not.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from gxbuild.core.config import Config
from gxbuild.core.errors import ErrorCode
from gxbuild.core.result import Err, Ok, Result
from gxbuild.git.repository import Repository
from gxbuild.output.console import ConsoleProtocol, Style
from gxbuild.output.errors import build_error_exit_code, print_build_error
from gxbuild.platform.files import create_directory, remove_directory
from gxbuild.platform.paths import change_directory, get_current_directory
from gxbuild.services.build_errors import BuildError, DirectoryFailed
from gxbuild.services.container import ContainerBuild
from gxbuild.services.packaging import (
    PackagedArchive,
    PlatformDescriptor,
    archive_name,
    default_platforms,
    package_platform,
)
from gxbuild.services.preflight import Which, check_executables_available
from gxbuild.services.revision import get_source_revision, is_untagged_build


@dataclass(frozen=True, slots=True)
class BuildOutcome:
    """What a successful run produced.

    Attributes:
        revision: Tag name or short commit id
        bin_dir: Directory holding the compiled executables
        tagged: False when packaging was skipped
        archives: Release archives, empty for untagged builds
    """

    revision: str
    bin_dir: Path
    tagged: bool
    archives: tuple[PackagedArchive, ...] = ()


class BuildOrchestrator:
    """Runs preflight, revision resolution, containerized build and packaging."""

    def __init__(
        self,
        *,
        root: Path,
        config: Config,
        console: ConsoleProtocol,
        which: Which = shutil.which,
        container: ContainerBuild | None = None,
        platforms: tuple[PlatformDescriptor, ...] | None = None,
    ) -> None:
        self._root = root
        self._config = config
        self._console = console
        self._which = which
        self._container = container or ContainerBuild(config.container)
        self._platforms = platforms or default_platforms(config.paths)
        self._repo = Repository(root)

    def execute(self) -> int:
        """Run the sequence, report the outcome and return the exit code."""
        caller = get_current_directory()
        if isinstance(caller, Err):
            self._console.error(caller.error.message)
            return int(ErrorCode.FAILED)

        result = self.run()

        restored = change_directory(caller.value)
        if isinstance(restored, Err):
            self._console.error(restored.error.message)

        match result:
            case Err(error):
                print_build_error(error, self._console)
                return build_error_exit_code(error)
            case Ok(outcome):
                self._report(outcome)
                if isinstance(restored, Err):
                    return int(ErrorCode.FAILED)
                return int(ErrorCode.OK)

    def run(self) -> Result[BuildOutcome, BuildError]:
        console = self._console

        console.header("Preflight")
        tools = check_executables_available(self._config.tools, which=self._which)
        if isinstance(tools, Err):
            return tools
        console.print(f"tools: {', '.join(self._config.tools)}", Style.DIM)

        console.header("Revision")
        revision_result = get_source_revision(self._repo)
        if isinstance(revision_result, Err):
            return revision_result
        revision = revision_result.value
        console.print(f"revision: {revision}", Style.DIM)

        console.header("Build")
        bin_dir = self._root / self._config.paths.bin / revision
        prepared = self._prepare_output(bin_dir)
        if isinstance(prepared, Err):
            return prepared

        console.print(f"image: {self._container.image}", Style.DIM)
        built = self._container.run(self._root, bin_dir)
        if isinstance(built, Err):
            return built

        untagged = is_untagged_build(self._repo, revision)
        if isinstance(untagged, Err):
            return untagged
        if untagged.value:
            console.info(f"{revision} is not a tagged build, skipping packaging")
            return Ok(BuildOutcome(revision=revision, bin_dir=bin_dir, tagged=False))

        console.header("Package")
        archives: list[PackagedArchive] = []
        for descriptor in self._platforms:
            packaged = self._package(descriptor, revision=revision, bin_dir=bin_dir)
            if isinstance(packaged, Err):
                return packaged
            archives.append(packaged.value)

        return Ok(
            BuildOutcome(
                revision=revision,
                bin_dir=bin_dir,
                tagged=True,
                archives=tuple(archives),
            )
        )

    def _prepare_output(self, bin_dir: Path) -> Result[None, BuildError]:
        """Remove then recreate the output directory so no stale artifact survives."""
        removed = remove_directory(bin_dir)
        if isinstance(removed, Err):
            return Err(DirectoryFailed("remove", bin_dir, removed.error.message))
        created = create_directory(bin_dir)
        if isinstance(created, Err):
            return Err(DirectoryFailed("create", bin_dir, created.error.message))
        return Ok(None)

    def _package(
        self,
        descriptor: PlatformDescriptor,
        *,
        revision: str,
        bin_dir: Path,
    ) -> Result[PackagedArchive, BuildError]:
        product = self._config.product
        archive = self._root / archive_name(
            product.name, product.edition, revision, descriptor.suffix
        )
        self._console.print(f"{descriptor.label}: {archive.name}", Style.DIM)
        return package_platform(
            descriptor,
            root=self._root,
            bin_dir=bin_dir,
            staging=self._root / self._config.paths.dist / descriptor.id,
            archive=archive,
        )

    def _report(self, outcome: BuildOutcome) -> None:
        self._console.success(f"executables: {outcome.bin_dir}")
        for archive in outcome.archives:
            self._console.success(f"{archive.path.name} sha256={archive.sha256}")
