from __future__ import annotations

import os
from pathlib import Path

import pytest

from relkit.platform.files import atomic_install


def _binary(path: Path, payload: bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(payload)
    path.chmod(0o755)
    return path


def test_atomic_install_creates_install_dir(tmp_path: Path) -> None:
    src = _binary(tmp_path / "target" / "debug" / "renovate", b"\x7fELF new")
    dest = tmp_path / "bin" / "renovate"

    atomic_install(src, dest)

    assert dest.read_bytes() == b"\x7fELF new"


def test_atomic_install_replaces_existing_binary(tmp_path: Path) -> None:
    src = _binary(tmp_path / "new", b"new")
    dest = _binary(tmp_path / "bin" / "renovate", b"old")

    atomic_install(src, dest)

    assert dest.read_bytes() == b"new"
    assert list(dest.parent.glob(".renovate.*.tmp")) == []


@pytest.mark.skipif(os.name == "nt", reason="POSIX mode bits")
def test_atomic_install_keeps_exec_bit(tmp_path: Path) -> None:
    src = _binary(tmp_path / "new", b"new")
    dest = tmp_path / "bin" / "renovate"

    atomic_install(src, dest)

    assert os.access(dest, os.X_OK)


def test_atomic_install_keeps_old_binary_on_replace_failure(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    src = _binary(tmp_path / "new", b"new")
    dest = _binary(tmp_path / "bin" / "renovate", b"old")

    def fail_replace(_src: object, _dst: object) -> None:
        raise OSError("replace failed")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(OSError, match="replace failed"):
        atomic_install(src, dest)

    assert dest.read_bytes() == b"old"
    assert list(dest.parent.glob(".renovate.*.tmp")) == []


def test_atomic_install_missing_source_leaves_dest(tmp_path: Path) -> None:
    dest = _binary(tmp_path / "bin" / "renovate", b"old")

    with pytest.raises(OSError):
        atomic_install(tmp_path / "missing", dest)

    assert dest.read_bytes() == b"old"
