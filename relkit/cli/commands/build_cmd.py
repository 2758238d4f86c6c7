"""Build command - compile the debug binary and install it."""

from __future__ import annotations

import typer

from relkit.cli.context import build_context
from relkit.core.result import Err, Ok
from relkit.output.errors import build_error_exit_code, print_build_error
from relkit.services.build import BuildService


def build(
    ctx: typer.Context,
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without modifying"),
) -> None:
    """Compile in debug mode and replace the installed binary."""
    c = build_context(ctx.obj)
    svc = BuildService(project=c.project, config=c.config, console=c.console)

    match svc.build(dry_run=dry_run):
        case Ok(path):
            c.console.success(str(path))
        case Err(error):
            print_build_error(error, c.console)
            raise typer.Exit(code=build_error_exit_code(error))
