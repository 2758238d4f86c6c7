"""Release command - tag, changelog, commit, push, publish."""

from __future__ import annotations

import typer

from relkit.cli.context import build_context
from relkit.core.result import Err
from relkit.output.errors import print_release_error, release_error_exit_code
from relkit.services.release import release_steps, run_release


def release(
    ctx: typer.Context,
    dry_run: bool = typer.Option(False, "--dry-run", help="Print steps without running them"),
) -> None:
    """Tag a release, update the changelog, push, and publish."""
    c = build_context(ctx.obj)
    steps = release_steps(c.config.release)

    result = run_release(
        steps=steps,
        cwd=c.project.root,
        console=c.console,
        dry_run=dry_run,
    )
    if isinstance(result, Err):
        print_release_error(result.error, c.console)
        raise typer.Exit(code=release_error_exit_code(result.error))

    report = result.value
    if report.dry_run:
        c.console.success("dry run: no step executed")
        return
    for tolerated in report.tolerated:
        c.console.print(f"{tolerated.step}: {tolerated.reason}")
    c.console.success(f"released ({', '.join(report.steps)})")
