from __future__ import annotations

from pathlib import Path

import typer

from relkit import __version__
from relkit.cli.commands.build_cmd import build
from relkit.cli.commands.cov_cmd import cov
from relkit.cli.commands.release_cmd import release
from relkit.cli.commands.testsuite_cmd import run_tests
from relkit.core.errors import ErrorCode
from relkit.core.project import is_project_root


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(build)
app.command("test")(run_tests)
app.command()(release)
app.command()(cov)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_show_version,
        is_eager=True,
    ),
    project: Path | None = typer.Option(
        None,
        "--project",
        help="Cargo project root (overrides auto detection)",
    ),
) -> None:
    if project is None:
        return

    try:
        root = project.expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --project: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not root.is_dir() or not is_project_root(root):
        typer.echo(f"error: --project '{root}' has no Cargo.toml", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    # Commands read the root from ctx.obj.
    ctx.obj = root


def main() -> None:
    app()
