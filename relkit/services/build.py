"""Build service: compile the debug binary and install it.

The installed binary is replaced only after cargo succeeded and the
artifact was found on disk. The swap itself is atomic, so the install path
always holds either the previous binary or the new one.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from ..core.config import Config
from ..core.project import Project
from ..core.result import Err, Ok, Result
from ..output.console import ConsoleProtocol, Style
from ..platform.files import atomic_install
from ..platform.paths import cargo_home, expand_path
from ..platform.process import ProcessError, run_silent
from .build_errors import (
    ArtifactMissing,
    BinaryUnknown,
    BuildError,
    CompileFailed,
    InstallFailed,
    ToolMissing,
)

__all__ = ["BUILD_COMMAND", "BuildPaths", "BuildService", "Runner"]

BUILD_COMMAND: tuple[str, ...] = ("cargo", "build")
DEBUG_PROFILE_DIR = "debug"

Runner = Callable[[Sequence[str], Path, Mapping[str, str] | None], Result[None, ProcessError]]


@dataclass(frozen=True, slots=True)
class BuildPaths:
    artifact: Path
    installed: Path


class BuildService:
    """Compile with cargo and install the debug binary."""

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

    def resolve_paths(self) -> Result[BuildPaths, BuildError]:
        """Work out the artifact path and the install path."""
        cfg = self._config.build
        root = self._project.root

        binary = cfg.binary
        if binary is None:
            name = self._project.package_name()
            if isinstance(name, Err):
                return Err(BinaryUnknown(reason=name.error.message))
            binary = name.value
        if os.name == "nt" and not binary.endswith(".exe"):
            binary += ".exe"

        target_dir = (
            expand_path(cfg.target_dir, base=root)
            if cfg.target_dir
            else self._project.default_target_dir
        )
        install_dir = (
            expand_path(cfg.install_dir, base=root) if cfg.install_dir else cargo_home() / "bin"
        )
        return Ok(
            BuildPaths(
                artifact=target_dir / DEBUG_PROFILE_DIR / binary,
                installed=install_dir / binary,
            )
        )

    def build(self, *, dry_run: bool = False) -> Result[Path, BuildError]:
        """Compile, verify the artifact, then swap it into the install path.

        Returns:
            Ok(path) with the installed binary path
            Err(BuildError) on failure; the install path is then unchanged
        """
        paths_result = self.resolve_paths()
        if isinstance(paths_result, Err):
            return paths_result
        paths = paths_result.value

        self._console.header("build")
        self._console.command(BUILD_COMMAND)
        if dry_run:
            self._console.print(f"would install {paths.artifact} -> {paths.installed}", Style.DIM)
            return Ok(paths.installed)

        compiled = self._runner(BUILD_COMMAND, self._project.root, None)
        if isinstance(compiled, Err):
            if compiled.error.not_started:
                return Err(ToolMissing(tool_id=BUILD_COMMAND[0]))
            return Err(CompileFailed(returncode=compiled.error.exit_status))

        if not paths.artifact.is_file():
            return Err(ArtifactMissing(path=paths.artifact))

        self._console.print(f"install {paths.artifact} -> {paths.installed}", Style.DIM)
        try:
            atomic_install(paths.artifact, paths.installed)
        except OSError as e:
            return Err(InstallFailed(path=paths.installed, reason=str(e)))

        return Ok(paths.installed)
