"""Test command - run the test suite with the test-mode environment."""

from __future__ import annotations

import typer

from relkit.cli.context import build_context
from relkit.core.errors import ErrorCode
from relkit.core.result import Err
from relkit.services.testsuite import TestService


def run_tests(
    ctx: typer.Context,
    args: list[str] | None = typer.Argument(
        None, help="Extra arguments for the test runner (after --)", show_default=False
    ),
) -> None:
    """Run all tests with every feature enabled."""
    c = build_context(ctx.obj)
    svc = TestService(project=c.project, config=c.config, console=c.console)

    result = svc.run(args or ())
    if isinstance(result, Err):
        error = result.error
        if error.not_started:
            c.console.error(f"{error.command[0]}: missing ({error.stderr})")
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
        # Exit with the runner's own status, as a shell would report it.
        raise typer.Exit(code=error.exit_status)
