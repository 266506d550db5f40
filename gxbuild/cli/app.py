from __future__ import annotations

from pathlib import Path

import typer

from gxbuild import __version__
from gxbuild.cli.context import build_context
from gxbuild.core.result import Err
from gxbuild.output.console import RichConsole
from gxbuild.output.errors import build_error_exit_code, print_build_error
from gxbuild.services.orchestrator import BuildOrchestrator

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)


@app.command()
def build(
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Project root (defaults to $GXBUILD_ROOT, then the enclosing git checkout)",
        show_default=False,
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (defaults to <root>/gxbuild.toml)",
        show_default=False,
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Build VisualBoyAdvanceGX in a container and package tagged releases."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    console = RichConsole()
    ctx = build_context(root=root, config_path=config, console=console)
    if isinstance(ctx, Err):
        print_build_error(ctx.error, console)
        raise typer.Exit(code=build_error_exit_code(ctx.error))

    orchestrator = BuildOrchestrator(
        root=ctx.value.root,
        config=ctx.value.config,
        console=ctx.value.console,
    )
    raise typer.Exit(code=orchestrator.execute())


def main() -> None:
    app()
