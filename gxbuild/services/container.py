"""Containerized cross-compilation.

The repository is mounted read-only; make needs a writable tree, so the
in-container script copies the sources first, builds, then copies the
executables into the read-write output mount.
"""

from __future__ import annotations

import posixpath
import shlex
from pathlib import Path

from gxbuild.core.config import ContainerConfig
from gxbuild.core.result import Err, Ok, Result
from gxbuild.platform.process import run_streaming
from gxbuild.services.build_errors import ContainerBuildFailed


class ContainerBuild:
    """One ``docker run`` invocation producing the platform executables."""

    def __init__(self, config: ContainerConfig) -> None:
        self._config = config

    @property
    def image(self) -> str:
        return self._config.image

    def script(self) -> str:
        """Shell script executed inside the container."""
        cfg = self._config
        # cp -R /src/ . lands the tree at <workdir>/src
        copied = posixpath.basename(cfg.source_mount.rstrip("/"))
        build_dir = posixpath.join(cfg.workdir, copied)
        output_rel = posixpath.relpath(cfg.output_mount.rstrip("/"), build_dir)
        return " && ".join(
            [
                f"cp -R {shlex.quote(cfg.source_mount)} .",
                f"cd {shlex.quote(copied)}",
                cfg.make,
                f"cp {shlex.quote(cfg.executables)}/* {shlex.quote(output_rel)}/",
            ]
        )

    def command(self, root: Path, out_dir: Path) -> list[str]:
        cfg = self._config
        return [
            "docker",
            "run",
            "--rm",
            "--mount",
            f"type=bind,source={root},target={cfg.source_mount},readonly",
            "--mount",
            f"type=bind,source={out_dir},target={cfg.output_mount}",
            "--workdir",
            cfg.workdir,
            cfg.image,
            "/bin/sh",
            "-c",
            self.script(),
        ]

    def run(self, root: Path, out_dir: Path) -> Result[None, ContainerBuildFailed]:
        """Run the build, blocking until the container exits.

        A partially filled ``out_dir`` is left as-is on failure.
        """
        result = run_streaming(self.command(root, out_dir), cwd=root)
        if isinstance(result, Err):
            return Err(
                ContainerBuildFailed(
                    image=self._config.image,
                    returncode=result.error.returncode,
                    reason=result.error.stderr.strip(),
                )
            )
        return Ok(None)
