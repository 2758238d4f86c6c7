"""The release step table.

Each step is a fixed command plus a failure policy. The order of the table
is the order of execution; the policy decides whether a failure halts the
workflow. Only the changelog commit is tolerated: "nothing to commit" is
the normal outcome when the changelog did not change.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from relkit.core.config import ReleaseConfig

__all__ = ["FailurePolicy", "StepName", "StepSpec", "release_steps"]


class StepName(StrEnum):
    TAG = "tag"
    CHANGELOG = "changelog"
    COMMIT = "commit"
    PUSH = "push"
    PUBLISH = "publish"


class FailurePolicy(StrEnum):
    FATAL = "fatal"
    TOLERATED = "tolerated"


@dataclass(frozen=True, slots=True)
class StepSpec:
    name: StepName
    description: str
    command: tuple[str, ...]
    policy: FailurePolicy = FailurePolicy.FATAL
    capture: bool = False
    install_hint: str | None = None

    @property
    def is_fatal(self) -> bool:
        return self.policy is FailurePolicy.FATAL


def release_steps(config: ReleaseConfig) -> tuple[StepSpec, ...]:
    return (
        StepSpec(
            name=StepName.TAG,
            description="create the release tag",
            command=("cargo", "release", "tag", "--execute"),
            install_hint="cargo install cargo-release",
        ),
        StepSpec(
            name=StepName.CHANGELOG,
            description=f"regenerate {config.changelog}",
            command=("git", "cliff", "-o", config.changelog),
            install_hint="cargo install git-cliff",
        ),
        StepSpec(
            name=StepName.COMMIT,
            description="commit the changelog",
            command=("git", "commit", "-a", "-m", config.commit_message),
            policy=FailurePolicy.TOLERATED,
            capture=True,
        ),
        StepSpec(
            name=StepName.PUSH,
            description=f"push to {config.remote}/{config.branch}",
            command=("git", "push", config.remote, config.branch),
        ),
        StepSpec(
            name=StepName.PUBLISH,
            description="publish the release",
            command=("cargo", "release", "push", "--execute"),
            install_hint="cargo install cargo-release",
        ),
    )
