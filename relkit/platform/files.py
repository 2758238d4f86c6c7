"""Filesystem helpers."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

__all__ = ["atomic_install"]


def atomic_install(source: Path, dest: Path) -> None:
    """Replace dest with a copy of source using temp file + replace.

    The copy lands next to dest first, so the final rename stays on one
    filesystem. Until the rename, dest keeps its previous content.

    Raises:
        OSError: If the copy or the rename fails. dest is left as it was.
    """
    dest.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{dest.name}.",
        suffix=".tmp",
        dir=str(dest.parent),
    )
    os.close(fd)
    tmp_path = Path(tmp_name)

    try:
        shutil.copy2(source, tmp_path)
        os.replace(tmp_path, dest)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)
