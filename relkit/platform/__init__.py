"""Platform abstraction layer."""

from .files import atomic_install
from .paths import cargo_home, expand_path, home
from .process import ProcessError, child_env, run, run_silent

__all__ = [
    # files
    "atomic_install",
    # paths
    "cargo_home",
    "expand_path",
    "home",
    # process
    "ProcessError",
    "child_env",
    "run",
    "run_silent",
]
