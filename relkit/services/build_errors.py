from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ToolMissing:
    tool_id: str
    hint: str = "Install the Rust toolchain: https://rustup.rs"


@dataclass(frozen=True, slots=True)
class BinaryUnknown:
    reason: str


@dataclass(frozen=True, slots=True)
class CompileFailed:
    returncode: int


@dataclass(frozen=True, slots=True)
class ArtifactMissing:
    path: Path


@dataclass(frozen=True, slots=True)
class InstallFailed:
    path: Path
    reason: str


BuildError = ToolMissing | BinaryUnknown | CompileFailed | ArtifactMissing | InstallFailed
