"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relkit.core.errors import ErrorCode
from relkit.output.console import Style
from relkit.services.build_errors import (
    ArtifactMissing,
    BinaryUnknown,
    BuildError,
    CompileFailed,
    InstallFailed,
    ToolMissing,
)
from relkit.services.release.errors import ReleaseError

if TYPE_CHECKING:
    from relkit.output.console import ConsoleProtocol

__all__ = [
    "build_error_exit_code",
    "print_build_error",
    "print_release_error",
    "release_error_exit_code",
]


def print_build_error(error: BuildError, console: ConsoleProtocol) -> None:
    match error:
        case ToolMissing(tool_id=tool_id, hint=hint):
            console.error(f"{tool_id}: missing")
            console.print(f"hint: {hint}", Style.DIM)
        case BinaryUnknown(reason=reason):
            console.error(f"cannot determine binary name: {reason}")
        case CompileFailed(returncode=rc):
            console.error(f"cargo build failed (exit {rc})")
            console.print("installed binary left unchanged", Style.DIM)
        case ArtifactMissing(path=path):
            console.error(f"build artifact not found: {path}")
            console.print("installed binary left unchanged", Style.DIM)
        case InstallFailed(path=path, reason=reason):
            console.error(f"install to {path} failed: {reason}")


def build_error_exit_code(error: BuildError) -> int:
    match error:
        case ToolMissing():
            return int(ErrorCode.ENV_ERROR)
        case BinaryUnknown():
            return int(ErrorCode.USER_ERROR)
        case CompileFailed():
            return int(ErrorCode.BUILD_ERROR)
        case ArtifactMissing() | InstallFailed():
            return int(ErrorCode.IO_ERROR)


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    if error.completed:
        done = ", ".join(error.completed)
        console.warning(f"already completed and not rolled back: {done}")


def release_error_exit_code(error: ReleaseError) -> int:
    if error.kind == "tool_missing":
        return int(ErrorCode.ENV_ERROR)
    return int(ErrorCode.RELEASE_ERROR)
