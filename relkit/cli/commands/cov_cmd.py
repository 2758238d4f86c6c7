"""Coverage command - reserved name, no behavior yet."""

from __future__ import annotations

import typer

from relkit.core.errors import ErrorCode
from relkit.output.console import RichConsole


def cov() -> None:
    """Reserved for coverage; not implemented."""
    RichConsole().error("cov is reserved and not implemented")
    raise typer.Exit(code=int(ErrorCode.NOT_IMPLEMENTED))
