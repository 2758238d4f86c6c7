from __future__ import annotations

import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

import pytest

from relkit.core.config import Config, TestConfig
from relkit.core.project import Project
from relkit.core.result import Err, Ok, Result
from relkit.output.console import MockConsole
from relkit.platform.process import ProcessError
from relkit.services.testsuite import TestService


@pytest.fixture
def project(tmp_path: Path) -> Project:
    (tmp_path / "Cargo.toml").write_text('[package]\nname = "renovate"\n', encoding="utf-8")
    return Project(root=tmp_path)


def test_default_command_and_env(project: Project) -> None:
    seen: list[tuple[list[str], Mapping[str, str] | None]] = []

    def runner(
        cmd: Sequence[str], cwd: Path, env: Mapping[str, str] | None
    ) -> Result[None, ProcessError]:
        seen.append((list(cmd), env))
        return Ok(None)

    console = MockConsole()
    svc = TestService(project=project, config=Config(), console=console, runner=runner)

    assert svc.run() == Ok(None)
    assert seen == [(["cargo", "nextest", "run", "--all-features"], {"CELLA_ENV": "test"})]
    assert console.commands() == ["cargo nextest run --all-features"]


def test_extra_args_are_appended(project: Project) -> None:
    svc = TestService(project=project, config=Config(), console=MockConsole())
    assert svc.command(["--no-capture"]) == [
        "cargo",
        "nextest",
        "run",
        "--all-features",
        "--no-capture",
    ]


def test_runner_exit_code_is_preserved(project: Project) -> None:
    def runner(
        cmd: Sequence[str], cwd: Path, env: Mapping[str, str] | None
    ) -> Result[None, ProcessError]:
        return Err(ProcessError(tuple(cmd), 100, "", ""))

    svc = TestService(project=project, config=Config(), console=MockConsole(), runner=runner)

    result = svc.run()

    assert isinstance(result, Err)
    assert result.error.returncode == 100


def test_env_visible_to_child_and_not_leaked(
    project: Project, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("CELLA_ENV", raising=False)
    probe = "import os, sys; sys.exit(0 if os.environ.get('CELLA_ENV') == 'test' else 7)"
    config = Config(test=TestConfig(command=(sys.executable, "-c", probe)))
    svc = TestService(project=project, config=config, console=MockConsole())

    assert svc.run() == Ok(None)
    assert "CELLA_ENV" not in os.environ


def test_real_exit_status_propagates(project: Project) -> None:
    config = Config(test=TestConfig(command=(sys.executable, "-c", "raise SystemExit(3)")))
    svc = TestService(project=project, config=config, console=MockConsole())

    result = svc.run()

    assert isinstance(result, Err)
    assert result.error.returncode == 3
