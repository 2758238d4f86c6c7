"""Typed per-step outcomes of a release run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from relkit.platform.process import ProcessError
from relkit.services.release.steps import FailurePolicy, StepName, StepSpec

__all__ = [
    "ReleaseReport",
    "StepDone",
    "StepOutcome",
    "StepPlanned",
    "StepTolerated",
    "tolerate",
]

ToleratedReason = Literal["nothing to commit", "untracked files only", "commit failed"]

_NOTHING_TO_COMMIT_MARKERS = ("nothing to commit", "no changes added to commit")
# `commit -a` skips new files, e.g. a changelog written for the first time.
_UNTRACKED_ONLY_MARKERS = ("nothing added to commit but untracked files present",)


@dataclass(frozen=True, slots=True)
class StepDone:
    step: StepName
    output: str = ""


@dataclass(frozen=True, slots=True)
class StepPlanned:
    """Dry-run: the step was shown, not executed."""

    step: StepName


@dataclass(frozen=True, slots=True)
class StepTolerated:
    """A non-fatal step failed and the workflow carried on."""

    step: StepName
    reason: ToleratedReason
    error: ProcessError


StepOutcome = StepDone | StepPlanned | StepTolerated


def tolerate(spec: StepSpec, error: ProcessError) -> StepTolerated:
    """Build the tolerated outcome for a failed step.

    Raises:
        ValueError: If the step's policy does not allow tolerating failure.
    """
    if spec.policy is not FailurePolicy.TOLERATED:
        raise ValueError(f"step {spec.name} is fatal; its failure cannot be tolerated")

    output = f"{error.stdout}\n{error.stderr}".lower()
    reason: ToleratedReason
    if any(marker in output for marker in _UNTRACKED_ONLY_MARKERS):
        reason = "untracked files only"
    elif any(marker in output for marker in _NOTHING_TO_COMMIT_MARKERS):
        reason = "nothing to commit"
    else:
        reason = "commit failed"
    return StepTolerated(step=spec.name, reason=reason, error=error)


def _empty_outcomes() -> tuple[StepOutcome, ...]:
    return ()


@dataclass(frozen=True, slots=True)
class ReleaseReport:
    outcomes: tuple[StepOutcome, ...] = field(default_factory=_empty_outcomes)

    @property
    def steps(self) -> tuple[StepName, ...]:
        return tuple(o.step for o in self.outcomes)

    @property
    def tolerated(self) -> tuple[StepTolerated, ...]:
        return tuple(o for o in self.outcomes if isinstance(o, StepTolerated))

    @property
    def dry_run(self) -> bool:
        return any(isinstance(o, StepPlanned) for o in self.outcomes)
