"""Git repository queries.

Only the read-only queries the build needs: the short HEAD revision and tag
listings. All operations return Result types.

Usage:
    repo = Repository(Path("/path/to/vbagx"))

    match repo.short_revision():
        case Ok(revision):
            print(f"HEAD is {revision}")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from gxbuild.core.result import Err, Ok, Result
from gxbuild.platform.process import ProcessError
from gxbuild.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A git working tree.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def short_revision(self) -> Result[str, GitError]:
        """Get the abbreviated commit id of HEAD.

        Returns:
            Ok(revision) on success
            Err(GitError) on failure or empty output
        """
        result = self._run(["rev-parse", "--short", "HEAD"])
        match result:
            case Err(e):
                return Err(self._error("rev-parse --short HEAD", e, "cannot get git revision"))
            case Ok(stdout):
                revision = stdout.strip()
                if not revision:
                    return Err(
                        GitError(
                            command="rev-parse --short HEAD",
                            message="git returned an empty revision",
                        )
                    )
                return Ok(revision)

    def tags_pointing_at(self, revision: str) -> Result[list[str], GitError]:
        """List tags that point exactly at ``revision``."""
        command = f"tag --points-at={revision}"
        result = self._run(["tag", f"--points-at={revision}"])
        match result:
            case Err(e):
                return Err(self._error(command, e, "cannot get git tag"))
            case Ok(stdout):
                return Ok(_lines(stdout))

    def tags(self) -> Result[list[str], GitError]:
        """List every tag in the repository."""
        result = self._run(["tag"])
        match result:
            case Err(e):
                return Err(self._error("tag", e, "cannot list git tags"))
            case Ok(stdout):
                return Ok(_lines(stdout))

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=_GIT_TIMEOUT_SECONDS,
        )

    def _error(self, command: str, e: ProcessError, fallback: str) -> GitError:
        return GitError(
            command=command,
            message=e.stderr.strip() or fallback,
            returncode=e.returncode,
        )


def _lines(output: str) -> list[str]:
    return [ln.strip() for ln in output.splitlines() if ln.strip()]
