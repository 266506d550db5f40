"""Preflight: make sure the external executables the build calls are on PATH."""

from __future__ import annotations

import shutil
from collections.abc import Callable, Iterable

from gxbuild.core.result import Err, Ok, Result
from gxbuild.services.build_errors import ToolMissing

Which = Callable[[str], str | None]


def check_executables_available(
    tools: Iterable[str],
    *,
    which: Which = shutil.which,
) -> Result[None, ToolMissing]:
    """Fail on the first tool (in the given order) that cannot be located.

    Performs lookups only; nothing on disk is touched.
    """
    for tool in tools:
        if not which(tool):
            return Err(ToolMissing(tool=tool))
    return Ok(None)
