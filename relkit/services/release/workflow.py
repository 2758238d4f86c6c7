"""Release workflow: an ordered state machine over the step table.

The state is the position in the table plus the outcomes so far. Each
transition runs one step and either advances or halts. A fatal failure
halts with a ReleaseError; earlier steps keep their effects (there is no
rollback). A tolerated failure is recorded and the machine advances.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.output.console import ConsoleProtocol, Style
from relkit.platform.process import ProcessError, run, run_silent
from relkit.services.release.errors import ReleaseError
from relkit.services.release.model import (
    ReleaseReport,
    StepDone,
    StepOutcome,
    StepPlanned,
    tolerate,
)
from relkit.services.release.steps import StepName, StepSpec

__all__ = ["ReleaseState", "StepRunner", "advance", "run_release", "run_step_command"]

StepRunner = Callable[[StepSpec, Path], Result[str, ProcessError]]


def run_step_command(spec: StepSpec, cwd: Path) -> Result[str, ProcessError]:
    """Run a step's command; only ``capture`` steps keep their output."""
    if spec.capture:
        return run(spec.command, cwd)
    return run_silent(spec.command, cwd).map(lambda _: "")


@dataclass(frozen=True, slots=True)
class ReleaseState:
    position: int = 0
    outcomes: tuple[StepOutcome, ...] = ()

    def completed(self) -> tuple[StepName, ...]:
        return tuple(o.step for o in self.outcomes)


def advance(
    state: ReleaseState,
    *,
    steps: Sequence[StepSpec],
    cwd: Path,
    console: ConsoleProtocol,
    runner: StepRunner,
    dry_run: bool,
) -> Result[ReleaseState, ReleaseError]:
    """Run the step at ``state.position`` and return the next state."""
    spec = steps[state.position]
    console.header(f"[{state.position + 1}/{len(steps)}] {spec.name}: {spec.description}")
    console.command(spec.command)

    outcome: StepOutcome
    if dry_run:
        outcome = StepPlanned(step=spec.name)
    else:
        result = runner(spec, cwd)
        if isinstance(result, Ok):
            if result.value.strip():
                console.print(result.value.rstrip(), Style.DIM)
            outcome = StepDone(step=spec.name, output=result.value)
        elif spec.is_fatal:
            return Err(_step_error(spec, result.error, completed=state.completed()))
        else:
            outcome = tolerate(spec, result.error)
            console.warning(f"{spec.name} step failed ({outcome.reason}); continuing")
            detail = (result.error.stdout or result.error.stderr).strip()
            if detail:
                console.print(detail, Style.DIM)
            if outcome.reason == "untracked files only":
                console.warning(
                    "new files (such as a first changelog) were not committed; "
                    "git add them and push manually"
                )

    return Ok(replace(state, position=state.position + 1, outcomes=(*state.outcomes, outcome)))


def run_release(
    *,
    steps: Sequence[StepSpec],
    cwd: Path,
    console: ConsoleProtocol,
    runner: StepRunner = run_step_command,
    dry_run: bool = False,
) -> Result[ReleaseReport, ReleaseError]:
    """Run every step in table order, halting on the first fatal failure."""
    state = ReleaseState()
    while state.position < len(steps):
        next_state = advance(
            state,
            steps=steps,
            cwd=cwd,
            console=console,
            runner=runner,
            dry_run=dry_run,
        )
        if isinstance(next_state, Err):
            return next_state
        state = next_state.value

    return Ok(ReleaseReport(outcomes=state.outcomes))


def _step_error(
    spec: StepSpec,
    error: ProcessError,
    *,
    completed: tuple[StepName, ...],
) -> ReleaseError:
    if error.not_started:
        return ReleaseError(
            kind="tool_missing",
            step=spec.name,
            message=f"{spec.name} step could not start: {spec.command[0]} not found",
            returncode=error.exit_status,
            completed=completed,
            hint=spec.install_hint,
        )
    return ReleaseError(
        kind="step_failed",
        step=spec.name,
        message=f"{spec.name} step failed: {error}",
        returncode=error.exit_status,
        completed=completed,
        hint=error.stderr.strip() or None,
    )
