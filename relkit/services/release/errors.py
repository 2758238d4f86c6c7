from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from relkit.services.release.steps import StepName


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """A fatal release step failed; nothing after it ran.

    ``completed`` lists the steps that had already taken effect. They are
    not rolled back.
    """

    kind: Literal["step_failed", "tool_missing"]
    step: StepName
    message: str
    returncode: int = 1
    completed: tuple[StepName, ...] = ()
    hint: str | None = None
