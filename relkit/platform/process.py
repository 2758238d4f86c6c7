"""Subprocess execution with Result-based error handling.

Every external tool relkit drives (cargo, git, git-cliff, cargo-release)
goes through this module.

The ``env`` argument is an overlay: it is merged onto a copy of the current
environment and handed to the child only. ``os.environ`` is never mutated.

Usage:
    result = run_silent(["cargo", "build"], cwd=project.root)
    match result:
        case Ok(_):
            ...
        case Err(error):
            print(f"Failed: {error}")
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result

__all__ = ["NOT_STARTED_RETURNCODE", "ProcessError", "child_env", "run", "run_silent"]

# Shell convention for "command not found".
NOT_STARTED_RETURNCODE = 127


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process; negative -N if killed by signal N.
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
        started: False when the process has no exit status of its own
            (the executable could not be launched, or it was timed out).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    started: bool = True

    @property
    def not_started(self) -> bool:
        return not self.started

    @property
    def exit_status(self) -> int:
        """Status a shell would report: 128 + N for a child killed by signal N."""
        if self.returncode < 0:
            return 128 - self.returncode
        return self.returncode

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if not self.started:
            return f"{cmd_str} could not run"
        if self.returncode < 0:
            return f"{cmd_str} killed by signal {-self.returncode}"
        return f"{cmd_str} failed (exit {self.returncode})"


def child_env(overlay: Mapping[str, str] | None) -> dict[str, str] | None:
    """Build the environment for a child process.

    Returns None (inherit unchanged) when there is nothing to overlay.
    """
    if not overlay:
        return None
    env = os.environ.copy()
    env.update(overlay)
    return env


def run(
    cmd: Sequence[str],
    cwd: Path,
    env: Mapping[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return stdout or error.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Variables added to the inherited environment for this child.
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            list(cmd),
            cwd=str(cwd),
            env=child_env(env),
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout=e.stdout if isinstance(e.stdout, str) else "",
                stderr=f"Command timed out after {timeout}s",
                started=False,
            )
        )
    except OSError as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=NOT_STARTED_RETURNCODE,
                stdout="",
                stderr=str(e),
                started=False,
            )
        )

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_silent(
    cmd: Sequence[str],
    cwd: Path,
    env: Mapping[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command without capturing output.

    Output streams to the terminal; use this for long-running tools such as
    cargo so the user sees progress.

    Returns:
        Ok(None) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            list(cmd),
            cwd=str(cwd),
            env=child_env(env),
            check=False,
        )
    except OSError as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=NOT_STARTED_RETURNCODE,
                stdout="",
                stderr=str(e),
                started=False,
            )
        )

    if proc.returncode != 0:
        return Err(
            ProcessError(command=tuple(cmd), returncode=proc.returncode, stdout="", stderr="")
        )

    return Ok(None)
