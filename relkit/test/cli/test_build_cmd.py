from __future__ import annotations

from pathlib import Path

import pytest
import typer

from relkit.cli.app import app
from relkit.cli.context import CLIContext
from relkit.core.config import Config
from relkit.core.errors import ErrorCode
from relkit.core.project import Project
from relkit.core.result import Err, Ok, Result
from relkit.output.console import MockConsole
from relkit.services.build_errors import ArtifactMissing, BuildError, CompileFailed


def _typer_ctx(project_root: Path | None = None) -> typer.Context:
    return typer.Context(typer.main.get_command(app), obj=project_root)


def _ctx(tmp_path: Path) -> CLIContext:
    (tmp_path / "Cargo.toml").write_text('[package]\nname = "renovate"\n', encoding="utf-8")
    return CLIContext(project=Project(root=tmp_path), config=Config(), console=MockConsole())


def _patch_service(monkeypatch: pytest.MonkeyPatch, result: Result[Path, BuildError]) -> None:
    import relkit.cli.commands.build_cmd as build_cmd

    class FakeBuildService:
        def __init__(self, **_: object) -> None:
            pass

        def build(self, *, dry_run: bool = False) -> Result[Path, BuildError]:
            return result

    monkeypatch.setattr(build_cmd, "BuildService", FakeBuildService)


def test_build_success(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import relkit.cli.commands.build_cmd as build_cmd

    ctx = _ctx(tmp_path)
    monkeypatch.setattr(build_cmd, "build_context", lambda _root: ctx)
    _patch_service(monkeypatch, Ok(tmp_path / "bin" / "renovate"))

    build_cmd.build(_typer_ctx(), dry_run=False)

    console = ctx.console
    assert isinstance(console, MockConsole)
    assert console.find(f"OK {tmp_path / 'bin' / 'renovate'}")


def test_build_compile_failure_exit_code(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import relkit.cli.commands.build_cmd as build_cmd

    monkeypatch.setattr(build_cmd, "build_context", lambda _root: _ctx(tmp_path))
    _patch_service(monkeypatch, Err(CompileFailed(returncode=101)))

    with pytest.raises(typer.Exit) as exc:
        build_cmd.build(_typer_ctx(), dry_run=False)

    assert exc.value.exit_code == int(ErrorCode.BUILD_ERROR)


def test_build_missing_artifact_exit_code(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relkit.cli.commands.build_cmd as build_cmd

    monkeypatch.setattr(build_cmd, "build_context", lambda _root: _ctx(tmp_path))
    _patch_service(monkeypatch, Err(ArtifactMissing(path=tmp_path / "target" / "debug" / "x")))

    with pytest.raises(typer.Exit) as exc:
        build_cmd.build(_typer_ctx(), dry_run=False)

    assert exc.value.exit_code == int(ErrorCode.IO_ERROR)
