"""Release workflow: tag, changelog, commit, push, publish."""

from relkit.services.release.errors import ReleaseError
from relkit.services.release.model import (
    ReleaseReport,
    StepDone,
    StepOutcome,
    StepPlanned,
    StepTolerated,
)
from relkit.services.release.steps import FailurePolicy, StepName, StepSpec, release_steps
from relkit.services.release.workflow import run_release, run_step_command

__all__ = [
    "FailurePolicy",
    "ReleaseError",
    "ReleaseReport",
    "StepDone",
    "StepName",
    "StepOutcome",
    "StepPlanned",
    "StepSpec",
    "StepTolerated",
    "release_steps",
    "run_release",
    "run_step_command",
]
