"""Cargo project detection and paths.

The project is the directory that holds the ``Cargo.toml`` relkit operates
on. Every external command runs with this directory as its working dir.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .result import Err, Ok, Result
from .structured import as_str_dict, get_str, get_table

__all__ = [
    "PROJECT_ENV_VAR",
    "Project",
    "ProjectError",
    "ProjectSource",
    "detect_project",
    "find_project_upward",
    "is_project_root",
]

PROJECT_ENV_VAR = "RELKIT_PROJECT"


@dataclass(frozen=True)
class ProjectError:
    """Error when the project cannot be detected or read."""

    message: str
    searched_from: Path | None = None


ProjectSource = Literal["option", "env", "cwd"]


@dataclass(frozen=True, slots=True)
class Project:
    """A detected Cargo project.

    The root contains:
    - Cargo.toml (required)
    - relkit.toml (optional)
    - target/ build output, unless CARGO_TARGET_DIR points elsewhere
    """

    root: Path

    @property
    def cargo_toml_path(self) -> Path:
        return self.root / "Cargo.toml"

    @property
    def config_path(self) -> Path:
        """Path to relkit.toml."""
        return self.root / "relkit.toml"

    @property
    def default_target_dir(self) -> Path:
        """Cargo's target dir: $CARGO_TARGET_DIR if set, else <root>/target."""
        env_value = os.environ.get("CARGO_TARGET_DIR")
        if env_value:
            target = Path(env_value).expanduser()
            return target if target.is_absolute() else self.root / target
        return self.root / "target"

    def package_name(self) -> Result[str, ProjectError]:
        """Read ``[package].name`` from Cargo.toml."""
        path = self.cargo_toml_path
        try:
            data = as_str_dict(tomllib.loads(path.read_text(encoding="utf-8")))
        except OSError as e:
            return Err(ProjectError(f"Cannot read {path}: {e}", searched_from=self.root))
        except tomllib.TOMLDecodeError as e:
            return Err(ProjectError(f"Invalid TOML in {path}: {e}", searched_from=self.root))

        package = get_table(data or {}, "package")
        name = get_str(package, "name") if package is not None else None
        if name is None:
            return Err(
                ProjectError(
                    f"{path} has no [package].name (set build.binary in relkit.toml)",
                    searched_from=self.root,
                )
            )
        return Ok(name)

    def __str__(self) -> str:
        return str(self.root)


def is_project_root(path: Path) -> bool:
    return (path / "Cargo.toml").is_file()


def find_project_upward(start: Path) -> Path | None:
    """Search upward from start for a directory holding Cargo.toml."""
    for parent in (start, *start.parents):
        if is_project_root(parent):
            return parent
    return None


def detect_project(
    *,
    explicit: Path | None = None,
    start_dir: Path | None = None,
    env_var: str = PROJECT_ENV_VAR,
) -> Result[Project, ProjectError]:
    """Detect the project root.

    Detection order:
    1. Explicit path (the --project option)
    2. RELKIT_PROJECT environment variable
    3. Search upward from start_dir (or cwd) for Cargo.toml
    """
    if explicit is not None:
        return _validated(explicit, label="--project")

    env_value = os.environ.get(env_var)
    if env_value:
        return _validated(Path(env_value), label=f"${env_var}")

    search_start = (start_dir or Path.cwd()).resolve()
    found = find_project_upward(search_start)
    if found is None:
        return Err(
            ProjectError(
                message="Could not find a Cargo project (Cargo.toml not found)",
                searched_from=search_start,
            )
        )
    return Ok(Project(root=found))


def _validated(path: Path, *, label: str) -> Result[Project, ProjectError]:
    root = path.expanduser().resolve()
    if root.is_dir() and is_project_root(root):
        return Ok(Project(root=root))
    return Err(
        ProjectError(
            message=f"{label} is set to '{path}' but it has no Cargo.toml",
            searched_from=root if root.is_dir() else None,
        )
    )
