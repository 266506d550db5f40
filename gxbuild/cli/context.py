from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from gxbuild.core.config import CONFIG_FILENAME, Config, load_config_or_default
from gxbuild.core.result import Err, Ok, Result
from gxbuild.output.console import ConsoleProtocol, RichConsole
from gxbuild.platform.paths import (
    find_repository_root,
    get_current_directory,
    get_script_directory,
)
from gxbuild.services.build_errors import BuildError, ConfigInvalid, PathUnresolved

ROOT_ENV_VAR = "GXBUILD_ROOT"


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: Config
    console: ConsoleProtocol


def resolve_root(root: Path | None) -> Result[Path, BuildError]:
    """Pick the project root: explicit option, then environment, then nearest git checkout."""
    explicit = root
    if explicit is None:
        env = os.environ.get(ROOT_ENV_VAR)
        if env:
            explicit = Path(env)

    if explicit is not None:
        resolved = get_script_directory(explicit)
        if isinstance(resolved, Err):
            return Err(PathUnresolved(path=resolved.error.path, reason=resolved.error.message))
        return Ok(resolved.value)

    cwd = get_current_directory()
    if isinstance(cwd, Err):
        return Err(PathUnresolved(path=None, reason=cwd.error.message))
    found = find_repository_root(cwd.value)
    if found is None:
        return Err(
            PathUnresolved(
                path=cwd.value,
                reason=f"Not inside a git checkout; pass --root or set {ROOT_ENV_VAR}",
            )
        )
    return Ok(found)


def build_context(
    *,
    root: Path | None = None,
    config_path: Path | None = None,
    console: ConsoleProtocol | None = None,
) -> Result[CLIContext, BuildError]:
    resolved = resolve_root(root)
    if isinstance(resolved, Err):
        return resolved

    path = config_path if config_path is not None else resolved.value / CONFIG_FILENAME
    config = load_config_or_default(path)
    if isinstance(config, Err):
        return Err(ConfigInvalid(path=config.error.path, reason=config.error.message))

    return Ok(
        CLIContext(
            root=resolved.value,
            config=config.value,
            console=console or RichConsole(),
        )
    )
