"""Test service: run the test runner with the test-mode env overlay."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from ..core.config import Config
from ..core.project import Project
from ..core.result import Result
from ..output.console import ConsoleProtocol, Style
from ..platform.process import ProcessError, run_silent

__all__ = ["TestService"]

Runner = Callable[[Sequence[str], Path, Mapping[str, str] | None], Result[None, ProcessError]]


class TestService:
    """Run the configured test command.

    The env overlay (CELLA_ENV=test by default) reaches the child process
    only. Failures come back as the runner's ProcessError, exit code intact.
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        *,
        project: Project,
        config: Config,
        console: ConsoleProtocol,
        runner: Runner = run_silent,
    ) -> None:
        self._project = project
        self._config = config
        self._console = console
        self._runner = runner

    def command(self, extra_args: Sequence[str] = ()) -> list[str]:
        return [*self._config.test.command, *extra_args]

    def run(self, extra_args: Sequence[str] = ()) -> Result[None, ProcessError]:
        cmd = self.command(extra_args)
        overlay = self._config.test.env_overlay()

        self._console.header("test")
        for key, value in overlay.items():
            self._console.print(f"{key}={value}", Style.DIM)
        self._console.command(cmd)
        return self._runner(cmd, self._project.root, overlay)
