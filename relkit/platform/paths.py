"""Platform-aware path utilities."""

from __future__ import annotations

import os
from pathlib import Path

__all__ = ["cargo_home", "expand_path", "home"]


def home() -> Path:
    """Get user's home directory.

    Uses HOME (USERPROFILE on Windows) first so tests and containers can
    redirect it, then falls back to Path.home().
    """
    name = "USERPROFILE" if os.name == "nt" else "HOME"
    value = os.environ.get(name)
    if value:
        return Path(value)
    return Path.home()


def cargo_home() -> Path:
    """$CARGO_HOME, or ~/.cargo."""
    value = os.environ.get("CARGO_HOME")
    if value:
        return Path(value)
    return home() / ".cargo"


def expand_path(value: str, *, base: Path) -> Path:
    """Expand ``~`` and environment variables; relative paths join ``base``."""
    expanded = os.path.expandvars(value)
    if expanded == "~" or expanded.startswith(("~/", "~\\")):
        path = home() / expanded[2:] if len(expanded) > 1 else home()
    else:
        path = Path(expanded)
    if not path.is_absolute():
        path = base / path
    return path
