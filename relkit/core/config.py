"""Typed configuration loading and access.

``relkit.toml`` is optional. Every field has a default matching the
conventional Cargo workflow, so a project without the file still builds,
tests and releases.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_str_map, get_table

__all__ = [
    "BuildConfig",
    "Config",
    "ConfigError",
    "ReleaseConfig",
    "TestConfig",
    "load_config",
    "load_config_or_default",
    "DEFAULT_TEST_COMMAND",
    "DEFAULT_TEST_ENV",
    "DEFAULT_REMOTE",
    "DEFAULT_BRANCH",
    "DEFAULT_CHANGELOG",
    "DEFAULT_COMMIT_MESSAGE",
]

DEFAULT_TEST_COMMAND: tuple[str, ...] = ("cargo", "nextest", "run", "--all-features")
DEFAULT_TEST_ENV: tuple[tuple[str, str], ...] = (("CELLA_ENV", "test"),)

DEFAULT_REMOTE = "origin"
DEFAULT_BRANCH = "master"
DEFAULT_CHANGELOG = "CHANGELOG.md"
DEFAULT_COMMIT_MESSAGE = "Update CHANGELOG.md"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Where the debug binary comes from and where it is installed.

    None means "derive it": binary from Cargo.toml, target_dir from
    CARGO_TARGET_DIR or <project>/target, install_dir from CARGO_HOME.
    """

    binary: str | None = None
    target_dir: str | None = None
    install_dir: str | None = None


@dataclass(frozen=True, slots=True)
class TestConfig:
    """Test runner command and the env overlay injected into it."""

    __test__ = False  # not a pytest test class

    command: tuple[str, ...] = DEFAULT_TEST_COMMAND
    env: tuple[tuple[str, str], ...] = DEFAULT_TEST_ENV

    def env_overlay(self) -> dict[str, str]:
        return dict(self.env)


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    remote: str = DEFAULT_REMOTE
    branch: str = DEFAULT_BRANCH
    changelog: str = DEFAULT_CHANGELOG
    commit_message: str = DEFAULT_COMMIT_MESSAGE


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    build: BuildConfig = field(default_factory=BuildConfig)
    test: TestConfig = field(default_factory=TestConfig)
    release: ReleaseConfig = field(default_factory=ReleaseConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If a present value has the wrong shape.
        """
        build: StrDict = get_table(data, "build") or {}
        test: StrDict = get_table(data, "test") or {}
        release: StrDict = get_table(data, "release") or {}

        command = DEFAULT_TEST_COMMAND
        if "command" in test:
            items = get_str_list(test, "command")
            if not items:
                raise ValueError("test.command must be a non-empty list of strings")
            command = tuple(items)

        env = DEFAULT_TEST_ENV
        if "env" in test:
            overlay = get_str_map(test, "env")
            if overlay is None:
                raise ValueError("test.env must be a table of strings")
            env = tuple(sorted(overlay.items()))

        return cls(
            build=BuildConfig(
                binary=get_str(build, "binary"),
                target_dir=get_str(build, "target_dir"),
                install_dir=get_str(build, "install_dir"),
            ),
            test=TestConfig(command=command, env=env),
            release=ReleaseConfig(
                remote=get_str(release, "remote") or DEFAULT_REMOTE,
                branch=get_str(release, "branch") or DEFAULT_BRANCH,
                changelog=get_str(release, "changelog") or DEFAULT_CHANGELOG,
                commit_message=get_str(release, "commit_message") or DEFAULT_COMMIT_MESSAGE,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to relkit.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config if the file exists, defaults otherwise.

    A file that exists but is invalid is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
